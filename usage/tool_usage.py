"""
Tool Usage Service - what a tool page asks before and after processing

Before processing: get_status() / check_file() decide whether the visitor
may run the tool and which size ceiling applies.
After processing: complete_operation() records usage, adds the file to the
history and updates analytics. The three writes are independent and each
one fails silently on its own.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from usage.analytics import AnalyticsAggregator, get_analytics_aggregator
from usage.entitlement import EntitlementCache, get_entitlement_cache
from usage.file_history import FileHistoryLog, format_file_size, get_history_log
from usage.ledger import UsageLedger, get_usage_ledger
from usage.models import FileHistoryItem, Tier, UsageCategory
from usage.tool_catalog import get_tool_meta, is_tool_premium
from utils.logger import logger


@dataclass
class ToolUsageStatus:
    """Usage state of one tool for the current visitor"""
    tool: str
    is_pro: bool
    is_premium_tool: bool
    is_unlimited: bool
    remaining_usage: Optional[int]  # None when unlimited
    max_file_size: int  # MB
    can_process: bool
    usage_display: str


class ToolUsageService:
    """Combines the ledger, history, analytics and entitlement for tool pages"""

    def __init__(
        self,
        ledger: Optional[UsageLedger] = None,
        history: Optional[FileHistoryLog] = None,
        analytics: Optional[AnalyticsAggregator] = None,
        entitlement: Optional[EntitlementCache] = None,
        enforce_daily_limit: Optional[bool] = None,
    ):
        self.ledger = ledger or get_usage_ledger()
        self.history = history or get_history_log()
        self.analytics = analytics or get_analytics_aggregator()
        self.entitlement = entitlement or get_entitlement_cache()

        if enforce_daily_limit is None:
            from config import settings
            enforce_daily_limit = settings.ENFORCE_DAILY_LIMIT
        self.enforce_daily_limit = enforce_daily_limit

    @staticmethod
    def category_for(tool: str) -> UsageCategory:
        return UsageCategory.PREMIUM if is_tool_premium(tool) else UsageCategory.BASIC

    def get_status(self, tool: str, is_pro: Optional[bool] = None) -> ToolUsageStatus:
        tier = self.entitlement.resolve(is_pro)
        pro = tier == Tier.PRO
        premium = is_tool_premium(tool)
        max_file_size = self.ledger.get_max_file_size(tier)

        if pro:
            return ToolUsageStatus(
                tool=tool, is_pro=True, is_premium_tool=premium, is_unlimited=True,
                remaining_usage=None, max_file_size=max_file_size, can_process=True,
                usage_display="Unlimited",
            )

        if not premium:
            if self.enforce_daily_limit:
                remaining = self.ledger.get_remaining_daily_usage()
                return ToolUsageStatus(
                    tool=tool, is_pro=False, is_premium_tool=False, is_unlimited=False,
                    remaining_usage=remaining, max_file_size=max_file_size,
                    can_process=remaining > 0,
                    usage_display=f"{remaining} of {self.ledger.get_max_files_per_day()} free files today",
                )
            return ToolUsageStatus(
                tool=tool, is_pro=False, is_premium_tool=False, is_unlimited=True,
                remaining_usage=None, max_file_size=max_file_size, can_process=True,
                usage_display="Free · Unlimited",
            )

        remaining = self.ledger.get_remaining_premium_usage()
        return ToolUsageStatus(
            tool=tool, is_pro=False, is_premium_tool=True, is_unlimited=False,
            remaining_usage=remaining, max_file_size=max_file_size,
            can_process=remaining > 0,
            usage_display=f"{remaining} of {self.ledger.get_max_free_premium_uses()} free uses",
        )

    def check_file(
        self,
        tool: str,
        size_bytes: int,
        is_pro: Optional[bool] = None,
    ) -> Tuple[bool, Optional[str]]:
        """
        Check whether a file may be processed with a tool.

        Returns:
            Tuple of (is_allowed, error_message)
        """
        status = self.get_status(tool, is_pro)

        if not status.can_process:
            if status.is_premium_tool:
                return False, (
                    f"You've used all {self.ledger.get_max_free_premium_uses()} free premium uses. "
                    "Upgrade to Pro for unlimited access."
                )
            return False, (
                f"Daily limit reached ({self.ledger.get_max_files_per_day()} files). "
                "Upgrade to Pro for unlimited access."
            )

        tier = Tier.from_is_pro(status.is_pro)
        if not self.ledger.is_within_size_limit(size_bytes, tier):
            return False, (
                f"File is too large ({format_file_size(size_bytes)}). "
                f"Maximum size is {status.max_file_size} MB."
            )

        return True, None

    def record_usage(self, tool: str, is_pro: Optional[bool] = None) -> ToolUsageStatus:
        """Charge one use of a tool; Pro visitors are not counted"""
        if self.entitlement.resolve(is_pro) != Tier.PRO:
            self.ledger.record_usage(self.category_for(tool))
        return self.get_status(tool, is_pro)

    def track_file(
        self,
        tool: str,
        original_name: str,
        file_name: str,
        file_size: Optional[int] = None,
        output_size: Optional[int] = None,
        page_count: Optional[int] = None,
        is_pro: Optional[bool] = None,
    ) -> Optional[FileHistoryItem]:
        """Add a processed file to the history with the tool's display name and icon"""
        meta = get_tool_meta(tool)
        return self.history.add_to_file_history(
            file_name=file_name,
            original_name=original_name,
            tool=tool,
            tool_name=meta["name"],
            tool_icon=meta["icon"],
            file_size=file_size,
            output_size=output_size,
            page_count=page_count,
            is_pro=is_pro,
        )

    def complete_operation(
        self,
        tool: str,
        original_name: str,
        file_name: str,
        file_size: Optional[int] = None,
        output_size: Optional[int] = None,
        page_count: Optional[int] = None,
        is_pro: Optional[bool] = None,
    ) -> ToolUsageStatus:
        """Record a finished tool run in the ledger, the history and analytics"""
        status = self.record_usage(tool, is_pro)
        self.track_file(
            tool, original_name, file_name,
            file_size=file_size, output_size=output_size, page_count=page_count,
            is_pro=is_pro,
        )
        self.analytics.track_file_processed(tool, file_size or 0)
        logger.debug(f"Completed {tool} on {original_name} (pro={status.is_pro})")
        return status


# Global singleton instance
_tool_usage_service: Optional[ToolUsageService] = None


def get_tool_usage_service() -> ToolUsageService:
    """Get the global tool usage service instance"""
    global _tool_usage_service
    if _tool_usage_service is None:
        _tool_usage_service = ToolUsageService()
    return _tool_usage_service
