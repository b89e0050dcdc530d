"""
Usage Accounting for PDFflow

Client-side, best-effort bookkeeping behind the free/Pro tiers:
- Usage ledger: daily basic-tool counter and lifetime premium allowance
- File history: recent processed files, bounded by tier
- Analytics: lifetime and per-day counters for the Pro dashboard
- Entitlement: the cached "is Pro" flag refreshed from Supabase

Architecture:
- Everything persists through a KeyValueStore port (memory or JSON file)
- "Today" comes from an injectable Clock (UTC dates)
- Storage failures never reach the caller; they degrade to defaults
"""

from usage.models import (
    Tier,
    TierLimits,
    UsageCategory,
    UsageData,
    PremiumUsageData,
    FileHistoryItem,
    AnalyticsData,
    HistoryStats,
    DailyCount,
    ToolCount,
    WeeklyChange,
)
from usage.clock import Clock, SystemClock, FixedClock, get_clock
from usage.storage import (
    KeyValueStore,
    MemoryStore,
    JSONFileStore,
    StorageError,
    StorageOutcome,
    get_storage,
)
from usage.entitlement import (
    EntitlementCache,
    SubscriptionLookup,
    create_subscription_lookup,
    get_entitlement_cache,
)
from usage.ledger import UsageLedger, get_usage_ledger
from usage.file_history import (
    FileHistoryLog,
    format_file_size,
    format_relative_time,
    get_history_log,
)
from usage.analytics import AnalyticsAggregator, format_bytes, get_analytics_aggregator
from usage.tool_catalog import ToolCategory, ToolInfo, get_tool, is_tool_premium
from usage.tool_usage import ToolUsageService, ToolUsageStatus, get_tool_usage_service

__all__ = [
    # Models
    'Tier',
    'TierLimits',
    'UsageCategory',
    'UsageData',
    'PremiumUsageData',
    'FileHistoryItem',
    'AnalyticsData',
    'HistoryStats',
    'DailyCount',
    'ToolCount',
    'WeeklyChange',
    # Clock and storage
    'Clock',
    'SystemClock',
    'FixedClock',
    'get_clock',
    'KeyValueStore',
    'MemoryStore',
    'JSONFileStore',
    'StorageError',
    'StorageOutcome',
    'get_storage',
    # Entitlement
    'EntitlementCache',
    'SubscriptionLookup',
    'create_subscription_lookup',
    'get_entitlement_cache',
    # Components
    'UsageLedger',
    'get_usage_ledger',
    'FileHistoryLog',
    'format_file_size',
    'format_relative_time',
    'get_history_log',
    'AnalyticsAggregator',
    'format_bytes',
    'get_analytics_aggregator',
    # Tools
    'ToolCategory',
    'ToolInfo',
    'get_tool',
    'is_tool_premium',
    'ToolUsageService',
    'ToolUsageStatus',
    'get_tool_usage_service',
]
