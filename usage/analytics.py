"""
Usage Analytics for the Pro dashboard

Keeps lifetime totals (files, bytes, per-tool counts) and a per-day
counter limited to the 90 most recent dates, and derives the dashboard
views from them: recent daily series, top tools, week-over-week change
and 30-day total.
"""

import math
from typing import List, Optional

from usage.clock import Clock, get_clock
from usage.models import AnalyticsData, DailyCount, ToolCount, WeeklyChange
from usage.storage import (
    ANALYTICS_KEY,
    KeyValueStore,
    get_storage,
    read_json,
    remove_key,
    write_json,
)
from utils.logger import logger


MAX_DAILY_ENTRIES = 90  # days of per-day history kept

_SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]


class AnalyticsAggregator:
    """Lifetime and per-day processing counters"""

    def __init__(self, store: Optional[KeyValueStore] = None, clock: Optional[Clock] = None):
        self._store = store or get_storage()
        self._clock = clock or get_clock()

    def _default(self) -> AnalyticsData:
        return AnalyticsData(last_updated=self._clock.timestamp_ms())

    def get_analytics(self) -> AnalyticsData:
        outcome = read_json(self._store, ANALYTICS_KEY)
        if not outcome.ok:
            logger.debug(f"Analytics unreadable, using defaults: {outcome.error}")
            return self._default()
        if outcome.value is None:
            return self._default()

        try:
            return AnalyticsData.from_dict(outcome.value)
        except (KeyError, TypeError, ValueError) as e:
            logger.debug(f"Analytics record malformed, using defaults: {e}")
            return self._default()

    def track_file_processed(self, tool: str, file_size: int):
        """Count one processed file. Storage failures are dropped."""
        analytics = self.get_analytics()
        today = self._clock.today()

        analytics.total_files_processed += 1
        analytics.total_bytes_processed += file_size
        analytics.tool_usage[tool] = analytics.tool_usage.get(tool, 0) + 1
        analytics.daily_usage[today] = analytics.daily_usage.get(today, 0) + 1

        # Keep only the most recent MAX_DAILY_ENTRIES dates
        dates = sorted(analytics.daily_usage, reverse=True)
        for date in dates[MAX_DAILY_ENTRIES:]:
            del analytics.daily_usage[date]

        analytics.last_updated = self._clock.timestamp_ms()

        outcome = write_json(self._store, ANALYTICS_KEY, analytics.to_dict())
        if not outcome.ok:
            logger.debug(f"Dropped analytics update for {tool}: {outcome.error}")

    def _sum_days(self, daily_usage: dict, start: int, end: int) -> int:
        """Sum of counts from `start` to `end - 1` days ago"""
        return sum(daily_usage.get(self._clock.days_ago(i), 0) for i in range(start, end))

    def get_recent_usage(self, days: int) -> List[DailyCount]:
        """Dense series of the last `days` days, oldest first, ending today"""
        if days <= 0:
            return []
        daily_usage = self.get_analytics().daily_usage
        result = []
        for i in range(days - 1, -1, -1):
            date = self._clock.days_ago(i)
            result.append(DailyCount(date=date, count=daily_usage.get(date, 0)))
        return result

    def get_top_tools(self, limit: int = 5) -> List[ToolCount]:
        tool_usage = self.get_analytics().tool_usage
        ranked = sorted(tool_usage.items(), key=lambda entry: -entry[1])
        return [ToolCount(tool=tool, count=count) for tool, count in ranked[:limit]]

    def get_weekly_change(self) -> WeeklyChange:
        daily_usage = self.get_analytics().daily_usage
        current = self._sum_days(daily_usage, 0, 7)
        previous = self._sum_days(daily_usage, 7, 14)

        if previous == 0:
            change = 100 if current > 0 else 0
        else:
            # Round half up
            change = math.floor((current - previous) / previous * 100 + 0.5)

        return WeeklyChange(current=current, previous=previous, change=change)

    def get_monthly_total(self) -> int:
        """Files processed in the last 30 calendar days, today included"""
        return self._sum_days(self.get_analytics().daily_usage, 0, 30)

    def clear_analytics(self):
        outcome = remove_key(self._store, ANALYTICS_KEY)
        if not outcome.ok:
            logger.debug(f"Could not clear analytics: {outcome.error}")


def format_bytes(size_bytes: float) -> str:
    """Human readable size at base 1024 with at most one decimal"""
    if size_bytes <= 0:
        return "0 B"
    k = 1024
    i = 0
    while i < len(_SIZE_UNITS) - 1 and size_bytes >= k ** (i + 1):
        i += 1
    text = f"{size_bytes / k ** i:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text} {_SIZE_UNITS[i]}"


# Global singleton instance
_analytics: Optional[AnalyticsAggregator] = None


def get_analytics_aggregator() -> AnalyticsAggregator:
    """Get the global analytics aggregator instance"""
    global _analytics
    if _analytics is None:
        _analytics = AnalyticsAggregator()
    return _analytics
