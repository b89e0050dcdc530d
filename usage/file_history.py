"""
File History - recent files processed in this browser/device

Entries are kept most-recent-first, one per (original name, tool) pair.
The list is bounded by tier:
- Free: 10 entries, 7 days
- Pro: 50 entries, 30 days

Expired entries are filtered out on every read and only leave storage when
the next write rewrites the list.
"""

import secrets
import string
from typing import Callable, List, Optional

from usage.clock import Clock, get_clock
from usage.entitlement import EntitlementCache
from usage.models import FileHistoryItem, HistoryStats, Tier
from usage.storage import (
    HISTORY_KEY,
    KeyValueStore,
    get_storage,
    read_json,
    remove_key,
    write_json,
)
from utils.logger import logger


DAY_MS = 24 * 60 * 60 * 1000
_ID_ALPHABET = string.digits + string.ascii_lowercase


def _generate_id(timestamp_ms: int) -> str:
    """Time plus 9 random base36 characters"""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{timestamp_ms}-{suffix}"


class FileHistoryLog:
    """Bounded, deduplicated log of processed files"""

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        clock: Optional[Clock] = None,
        entitlement: Optional[EntitlementCache] = None,
        id_factory: Optional[Callable[[int], str]] = None,
    ):
        self._store = store or get_storage()
        self._clock = clock or get_clock()
        self._entitlement = entitlement or EntitlementCache(self._store)
        self._id_factory = id_factory or _generate_id

    def _load(self) -> List[FileHistoryItem]:
        """All stored entries, expired or not"""
        outcome = read_json(self._store, HISTORY_KEY)
        if not outcome.ok:
            logger.debug(f"File history unreadable: {outcome.error}")
            return []
        if not isinstance(outcome.value, list):
            return []

        items = []
        for raw in outcome.value:
            try:
                items.append(FileHistoryItem.from_dict(raw))
            except (KeyError, TypeError, ValueError) as e:
                logger.debug(f"Skipping malformed history entry: {e}")
        return items

    def _save(self, items: List[FileHistoryItem]) -> bool:
        outcome = write_json(self._store, HISTORY_KEY, [item.to_dict() for item in items])
        if not outcome.ok:
            logger.debug(f"Dropped file history write: {outcome.error}")
        return outcome.ok

    def get_file_history(self, is_pro: Optional[bool] = None) -> List[FileHistoryItem]:
        """Non-expired entries, most recent first"""
        tier = self._entitlement.resolve(is_pro)
        cutoff = self._clock.timestamp_ms() - tier.limits.retention_days * DAY_MS
        return [item for item in self._load() if item.timestamp > cutoff]

    def add_to_file_history(
        self,
        file_name: str,
        original_name: str,
        tool: str,
        tool_name: str,
        tool_icon: str,
        file_size: Optional[int] = None,
        output_size: Optional[int] = None,
        page_count: Optional[int] = None,
        result_url: Optional[str] = None,
        is_pro: Optional[bool] = None,
    ) -> Optional[FileHistoryItem]:
        """
        Record a processed file at the top of the history.

        Any earlier entry for the same original name and tool is replaced.
        Returns the new entry, or None if it could not be stored.
        """
        tier = self._entitlement.resolve(is_pro)
        history = self.get_file_history(tier == Tier.PRO)

        now = self._clock.timestamp_ms()
        item = FileHistoryItem(
            id=self._id_factory(now),
            file_name=file_name,
            original_name=original_name,
            tool=tool,
            tool_name=tool_name,
            tool_icon=tool_icon,
            timestamp=now,
            file_size=file_size,
            output_size=output_size,
            page_count=page_count,
            result_url=result_url,
        )

        remaining = [
            h for h in history
            if not (h.original_name == original_name and h.tool == tool)
        ]
        updated = [item] + remaining
        updated = updated[:tier.limits.history_capacity]

        if not self._save(updated):
            return None
        return item

    def remove_from_history(self, item_id: str, is_pro: Optional[bool] = None):
        history = self.get_file_history(is_pro)
        self._save([item for item in history if item.id != item_id])

    def clear_file_history(self):
        outcome = remove_key(self._store, HISTORY_KEY)
        if not outcome.ok:
            logger.debug(f"Could not clear file history: {outcome.error}")

    def get_history_by_tool(self, tool: str, is_pro: Optional[bool] = None) -> List[FileHistoryItem]:
        return [item for item in self.get_file_history(is_pro) if item.tool == tool]

    def search_history(self, query: str, is_pro: Optional[bool] = None) -> List[FileHistoryItem]:
        """Case-insensitive match on the original file name or the tool name"""
        needle = query.lower()
        return [
            item for item in self.get_file_history(is_pro)
            if needle in item.original_name.lower() or needle in item.tool_name.lower()
        ]

    def get_history_stats(self, is_pro: Optional[bool] = None) -> HistoryStats:
        history = self.get_file_history(is_pro)
        stats = HistoryStats(total_files=len(history))
        for item in history:
            stats.total_size += item.file_size or 0
            stats.tool_breakdown[item.tool] = stats.tool_breakdown.get(item.tool, 0) + 1
        return stats


def format_file_size(size_bytes: Optional[int]) -> str:
    """Short size label for history rows ("" when unknown)"""
    if not size_bytes:
        return ""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / (1024 * 1024):.1f} MB"


def format_relative_time(timestamp_ms: int, now_ms: Optional[int] = None) -> str:
    """Relative age label: "Just now", "5m ago", "3h ago", "Yesterday", "4d ago" """
    if now_ms is None:
        now_ms = get_clock().timestamp_ms()
    diff = now_ms - timestamp_ms

    minutes = diff // 60000
    hours = diff // 3600000
    days = diff // 86400000

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days == 1:
        return "Yesterday"
    return f"{days}d ago"


# Global singleton instance
_history_log: Optional[FileHistoryLog] = None


def get_history_log() -> FileHistoryLog:
    """Get the global file history log instance"""
    global _history_log
    if _history_log is None:
        _history_log = FileHistoryLog()
    return _history_log
