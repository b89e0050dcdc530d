"""
Entitlement - cached "is this visitor Pro" flag

The authentication layer looks up the visitor's plan in the Supabase
`subscriptions` table and caches the result as "true"/"false" under
PRO_CACHE_KEY, clearing it on sign-out. The usage ledger, file history and
analytics only ever read the cached flag.
"""

from typing import Any, Optional

from usage.models import Tier, PRO_PLANS
from usage.storage import (
    KeyValueStore,
    PRO_CACHE_KEY,
    StorageError,
    get_storage,
)
from utils.logger import logger


class EntitlementCache:
    """Reads and writes the cached Pro flag"""

    def __init__(self, store: Optional[KeyValueStore] = None):
        self._store = store or get_storage()

    def is_pro(self) -> bool:
        """Cached Pro status. Unavailable storage reads as free."""
        try:
            return self._store.get(PRO_CACHE_KEY) == "true"
        except StorageError:
            return False

    def tier(self) -> Tier:
        return Tier.from_is_pro(self.is_pro())

    def resolve(self, is_pro: Optional[bool] = None) -> Tier:
        """Tier from an explicit flag, falling back to the cached one"""
        if is_pro is None:
            return self.tier()
        return Tier.from_is_pro(is_pro)

    def set_pro(self, is_pro: bool) -> bool:
        """Cache the Pro flag. Returns False if the store rejected the write."""
        try:
            self._store.set(PRO_CACHE_KEY, "true" if is_pro else "false")
            return True
        except StorageError as e:
            logger.debug(f"Could not cache Pro status: {e}")
            return False

    def store_plan(self, plan: Optional[str]) -> bool:
        """Cache the flag for a subscriptions-table plan name"""
        return self.set_pro(plan in PRO_PLANS)

    def clear(self):
        """Forget the cached flag (sign-out)"""
        try:
            self._store.remove(PRO_CACHE_KEY)
        except StorageError as e:
            logger.debug(f"Could not clear cached Pro status: {e}")


class SubscriptionLookup:
    """
    Looks up a user's plan in the Supabase `subscriptions` table.

    The client is a supabase-py `Client` (or anything with the same
    `table().select().eq().limit().execute()` chain).
    """

    TABLE = "subscriptions"

    def __init__(self, client: Any):
        self._client = client

    def fetch_plan(self, user_id: str) -> Optional[str]:
        """Return the user's plan, or None if they have no subscription row"""
        response = (
            self._client.table(self.TABLE)
            .select("plan, status")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        rows = response.data or []
        if not rows:
            return None
        return rows[0].get("plan")

    def fetch_is_pro(self, user_id: str) -> bool:
        return self.fetch_plan(user_id) in PRO_PLANS

    def refresh(self, cache: EntitlementCache, user_id: str) -> Optional[bool]:
        """
        Refresh the cached flag for a signed-in user.

        Returns the new Pro status, or None if the lookup failed (the cache
        is then left as it was).
        """
        try:
            plan = self.fetch_plan(user_id)
        except Exception as e:
            logger.warning(f"Subscription lookup failed for {user_id}: {e}")
            return None

        if plan is None:
            # No subscription row: keep whatever was cached
            return None

        cache.store_plan(plan)
        is_pro = plan in PRO_PLANS
        logger.info(f"Refreshed entitlement for {user_id}: plan={plan} pro={is_pro}")
        return is_pro


def create_subscription_lookup() -> Optional[SubscriptionLookup]:
    """Build a lookup from settings, or None if Supabase is not configured"""
    from config import settings

    if not settings.supabase_configured:
        logger.info("Supabase not configured, entitlement lookup disabled")
        return None

    from supabase import create_client

    client = create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
    return SubscriptionLookup(client)


# Global entitlement cache instance
_entitlement_cache: Optional[EntitlementCache] = None


def get_entitlement_cache() -> EntitlementCache:
    """Get the global entitlement cache instance"""
    global _entitlement_cache
    if _entitlement_cache is None:
        _entitlement_cache = EntitlementCache()
    return _entitlement_cache
