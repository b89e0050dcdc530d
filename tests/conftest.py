#!/usr/bin/env python3
"""
Pytest Configuration and Shared Fixtures

Provides shared fixtures and configuration for all tests.
"""

import pytest
import tempfile
import sys
import os
from datetime import datetime, timezone
from pathlib import Path

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Keep the global store off the real data directory
os.environ.setdefault("STORAGE_BACKEND", "memory")

from usage.analytics import AnalyticsAggregator
from usage.clock import FixedClock
from usage.entitlement import EntitlementCache
from usage.file_history import FileHistoryLog
from usage.ledger import UsageLedger
from usage.storage import MemoryStore
from usage.tool_usage import ToolUsageService


# Friday 2024-01-12, midday UTC
NOW = datetime(2024, 1, 12, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# TEMPORARY DIRECTORIES
# ============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ============================================================================
# CLOCK AND STORAGE
# ============================================================================

@pytest.fixture
def clock():
    """Clock pinned to NOW"""
    return FixedClock(NOW)


@pytest.fixture
def store():
    """Empty in-memory store"""
    return MemoryStore()


@pytest.fixture
def entitlement(store):
    return EntitlementCache(store)


# ============================================================================
# COMPONENTS
# ============================================================================

@pytest.fixture
def ledger(store, clock):
    return UsageLedger(store=store, clock=clock)


@pytest.fixture
def history(store, clock, entitlement):
    return FileHistoryLog(store=store, clock=clock, entitlement=entitlement)


@pytest.fixture
def analytics(store, clock):
    return AnalyticsAggregator(store=store, clock=clock)


@pytest.fixture
def service(ledger, history, analytics, entitlement):
    """Tool usage service with the daily basic-tool quota not enforced"""
    return ToolUsageService(
        ledger=ledger,
        history=history,
        analytics=analytics,
        entitlement=entitlement,
        enforce_daily_limit=False,
    )
