"""
Usage Ledger for PDFflow

Gates what a free visitor may do:
- Basic tools: a daily counter (2 files/day), reset when the stored date
  is no longer today
- Premium tools: a lifetime allowance of 4 uses, never reset here
- File size ceilings per tier (10 MB free, 100 MB Pro)

The quota is client-side and best effort. Reads that fail fall back to
"nothing used yet" and writes that fail are dropped, so tracking problems
never block the tool being used.
"""

from typing import Optional, Union

from usage.clock import Clock, get_clock
from usage.models import (
    PremiumUsageData,
    Tier,
    TierLimits,
    UsageCategory,
    UsageData,
)
from usage.storage import (
    KeyValueStore,
    PREMIUM_USAGE_KEY,
    USAGE_KEY,
    get_storage,
    read_json,
    write_json,
)
from utils.logger import logger


TierLike = Union[Tier, bool, None]


def _as_tier(tier: TierLike) -> Tier:
    if isinstance(tier, Tier):
        return tier
    return Tier.from_is_pro(bool(tier))


class UsageLedger:
    """Tracks free-tier usage counters"""

    def __init__(self, store: Optional[KeyValueStore] = None, clock: Optional[Clock] = None):
        self._store = store or get_storage()
        self._clock = clock or get_clock()
        self._free = TierLimits.for_tier(Tier.FREE)

    # ------------------------------------------------------------------
    # Stored records
    # ------------------------------------------------------------------

    def _get_usage_data(self) -> UsageData:
        """Today's basic-tool record. Stale, missing or corrupt records read as zero."""
        today = self._clock.today()
        outcome = read_json(self._store, USAGE_KEY)

        if not outcome.ok:
            logger.debug(f"Daily usage unreadable, starting fresh: {outcome.error}")
            return UsageData(date=today)
        if outcome.value is None:
            return UsageData(date=today)

        try:
            usage = UsageData.from_dict(outcome.value)
        except (KeyError, TypeError, ValueError) as e:
            logger.debug(f"Daily usage record malformed, starting fresh: {e}")
            return UsageData(date=today)

        if usage.date != today:
            return UsageData(date=today)
        return usage

    def _get_premium_usage(self) -> PremiumUsageData:
        outcome = read_json(self._store, PREMIUM_USAGE_KEY)

        if not outcome.ok:
            logger.debug(f"Premium usage unreadable, starting fresh: {outcome.error}")
            return PremiumUsageData()
        if outcome.value is None:
            return PremiumUsageData()

        try:
            return PremiumUsageData.from_dict(outcome.value)
        except (KeyError, TypeError, ValueError) as e:
            logger.debug(f"Premium usage record malformed, starting fresh: {e}")
            return PremiumUsageData()

    # ------------------------------------------------------------------
    # Remaining allowance
    # ------------------------------------------------------------------

    def get_remaining_daily_usage(self) -> int:
        """Basic-tool files left today"""
        return max(0, self._free.daily_file_quota - self._get_usage_data().count)

    def get_remaining_premium_usage(self) -> int:
        """Premium-tool uses left (lifetime allowance)"""
        return max(0, self._free.premium_tool_quota - self._get_premium_usage().count)

    def get_remaining_usage(self, category: UsageCategory) -> int:
        if category == UsageCategory.BASIC:
            return self.get_remaining_daily_usage()
        if category == UsageCategory.PREMIUM:
            return self.get_remaining_premium_usage()
        raise ValueError(f"Unknown usage category: {category}")

    def can_process(self, category: UsageCategory = UsageCategory.BASIC) -> bool:
        return self.get_remaining_usage(category) > 0

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def record_usage(self, category: UsageCategory = UsageCategory.BASIC):
        """
        Count one use against the category's counter.

        Never raises for storage problems; a failed write is simply lost.
        """
        if category == UsageCategory.BASIC:
            usage = self._get_usage_data()
            usage.count += 1
            outcome = write_json(self._store, USAGE_KEY, usage.to_dict())
        elif category == UsageCategory.PREMIUM:
            premium = self._get_premium_usage()
            premium.count += 1
            outcome = write_json(self._store, PREMIUM_USAGE_KEY, premium.to_dict())
        else:
            raise ValueError(f"Unknown usage category: {category}")

        if not outcome.ok:
            logger.debug(f"Dropped {category.value} usage record: {outcome.error}")

    # ------------------------------------------------------------------
    # Tier ceilings
    # ------------------------------------------------------------------

    def get_max_file_size(self, tier: TierLike = None) -> int:
        """Maximum upload size in MB"""
        return _as_tier(tier).limits.max_file_size_mb

    def get_max_file_size_bytes(self, tier: TierLike = None) -> int:
        return self.get_max_file_size(tier) * 1024 * 1024

    def is_within_size_limit(self, size_bytes: int, tier: TierLike = None) -> bool:
        return size_bytes <= self.get_max_file_size_bytes(tier)

    def get_max_files_per_day(self) -> int:
        return self._free.daily_file_quota

    def get_max_free_premium_uses(self) -> int:
        return self._free.premium_tool_quota


# Global singleton instance
_usage_ledger: Optional[UsageLedger] = None


def get_usage_ledger() -> UsageLedger:
    """Get the global usage ledger instance"""
    global _usage_ledger
    if _usage_ledger is None:
        _usage_ledger = UsageLedger()
    return _usage_ledger
