"""
Usage Data Models

Defines the subscription tiers, their limits, and the records persisted by
the usage ledger, the file history log and the analytics aggregator.

Stored records keep the camelCase field names used by the web client so
persisted data stays interchangeable with it.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Dict, Any


class Tier(str, Enum):
    """
    Subscription tiers.

    - FREE: anonymous or unsubscribed visitors (2 basic files/day, 4 premium uses total)
    - PRO: paid subscribers ("pro" and "team" plans) with no usage caps
    """
    FREE = "free"
    PRO = "pro"

    @classmethod
    def from_is_pro(cls, is_pro: bool) -> "Tier":
        return cls.PRO if is_pro else cls.FREE

    @classmethod
    def from_plan(cls, plan: Optional[str]) -> "Tier":
        """Map a subscriptions-table plan name to a tier"""
        return cls.PRO if plan in PRO_PLANS else cls.FREE

    @property
    def limits(self) -> "TierLimits":
        return TierLimits.for_tier(self)


# Plans in the subscriptions table that grant Pro access
PRO_PLANS = ("pro", "team")


class UsageCategory(str, Enum):
    """Which counter a tool invocation is charged against"""
    BASIC = "basic"      # daily counter
    PREMIUM = "premium"  # lifetime allowance


@dataclass(frozen=True)
class TierLimits:
    """
    Limits per subscription tier.

    None means unlimited. This is the single source of truth for tier limits.
    """
    daily_file_quota: Optional[int] = 2
    premium_tool_quota: Optional[int] = 4
    max_file_size_mb: int = 10
    history_capacity: int = 10
    retention_days: int = 7

    @classmethod
    def for_tier(cls, tier: Tier) -> "TierLimits":
        """Get limits for a specific tier"""
        if tier == Tier.PRO:
            return cls.pro_limits()
        return cls.free_limits()

    @classmethod
    def free_limits(cls) -> "TierLimits":
        return cls(
            daily_file_quota=2,
            premium_tool_quota=4,
            max_file_size_mb=10,
            history_capacity=10,
            retention_days=7,
        )

    @classmethod
    def pro_limits(cls) -> "TierLimits":
        return cls(
            daily_file_quota=None,
            premium_tool_quota=None,
            max_file_size_mb=100,
            history_capacity=50,
            retention_days=30,
        )


@dataclass
class UsageData:
    """Daily counter for basic tools, replaced when the date changes"""
    date: str
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date, "count": self.count}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UsageData":
        """Create from dictionary. Raises on malformed input."""
        if not isinstance(data, dict):
            raise TypeError(f"Expected an object, got {type(data).__name__}")
        return cls(date=str(data["date"]), count=int(data.get("count", 0)))


@dataclass
class PremiumUsageData:
    """Lifetime counter of premium tool uses for a free visitor"""
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"count": self.count}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PremiumUsageData":
        if not isinstance(data, dict):
            raise TypeError(f"Expected an object, got {type(data).__name__}")
        return cls(count=int(data.get("count", 0)))


@dataclass
class FileHistoryItem:
    """A processed file, as shown in the recent files list"""
    id: str
    file_name: str
    original_name: str
    tool: str
    tool_name: str
    tool_icon: str
    timestamp: int  # epoch milliseconds
    file_size: Optional[int] = None
    output_size: Optional[int] = None
    page_count: Optional[int] = None
    result_url: Optional[str] = None  # only meaningful within one session

    _OPTIONAL_FIELDS = (
        ("file_size", "fileSize"),
        ("output_size", "outputSize"),
        ("page_count", "pageCount"),
        ("result_url", "resultUrl"),
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage, omitting unset optional fields"""
        data = {
            "id": self.id,
            "fileName": self.file_name,
            "originalName": self.original_name,
            "tool": self.tool,
            "toolName": self.tool_name,
            "toolIcon": self.tool_icon,
            "timestamp": self.timestamp,
        }
        for attr, key in self._OPTIONAL_FIELDS:
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        return data

    _TEXT_FIELDS = ("fileName", "originalName", "tool", "toolName", "toolIcon")
    _NUMBER_FIELDS = ("fileSize", "outputSize", "pageCount")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileHistoryItem":
        """Create from dictionary. Raises on missing or mistyped fields."""
        if not isinstance(data, dict):
            raise TypeError(f"Expected an object, got {type(data).__name__}")

        for key in cls._TEXT_FIELDS:
            if not isinstance(data[key], str):
                raise TypeError(f"{key} must be a string, got {type(data[key]).__name__}")
        for key in cls._NUMBER_FIELDS:
            value = data.get(key)
            if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
                raise TypeError(f"{key} must be a number, got {type(value).__name__}")
        result_url = data.get("resultUrl")
        if result_url is not None and not isinstance(result_url, str):
            raise TypeError(f"resultUrl must be a string, got {type(result_url).__name__}")

        return cls(
            id=str(data["id"]),
            file_name=data["fileName"],
            original_name=data["originalName"],
            tool=data["tool"],
            tool_name=data["toolName"],
            tool_icon=data["toolIcon"],
            timestamp=int(data["timestamp"]),
            file_size=data.get("fileSize"),
            output_size=data.get("outputSize"),
            page_count=data.get("pageCount"),
            result_url=result_url,
        )


@dataclass
class AnalyticsData:
    """Lifetime and per-day counters for the Pro dashboard"""
    total_files_processed: int = 0
    total_bytes_processed: int = 0
    tool_usage: Dict[str, int] = field(default_factory=dict)
    daily_usage: Dict[str, int] = field(default_factory=dict)  # "YYYY-MM-DD" -> count
    last_updated: int = 0  # epoch milliseconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalFilesProcessed": self.total_files_processed,
            "totalBytesProcessed": self.total_bytes_processed,
            "toolUsage": dict(self.tool_usage),
            "dailyUsage": dict(self.daily_usage),
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalyticsData":
        if not isinstance(data, dict):
            raise TypeError(f"Expected an object, got {type(data).__name__}")
        return cls(
            total_files_processed=int(data.get("totalFilesProcessed", 0)),
            total_bytes_processed=int(data.get("totalBytesProcessed", 0)),
            tool_usage={str(k): int(v) for k, v in dict(data.get("toolUsage", {})).items()},
            daily_usage={str(k): int(v) for k, v in dict(data.get("dailyUsage", {})).items()},
            last_updated=int(data.get("lastUpdated", 0)),
        )


@dataclass
class HistoryStats:
    """Aggregate over the non-expired history entries"""
    total_files: int = 0
    total_size: int = 0
    tool_breakdown: Dict[str, int] = field(default_factory=dict)


@dataclass
class DailyCount:
    date: str
    count: int


@dataclass
class ToolCount:
    tool: str
    count: int


@dataclass
class WeeklyChange:
    """Last 7 days against the 7 days before them"""
    current: int
    previous: int
    change: int  # percent
