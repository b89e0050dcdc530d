#!/usr/bin/env python3
"""
Tool Catalog and Tool Usage Service Tests

Validates what a tool page sees:
- Which tools are premium
- Status and usage display per tier and tool type
- Size checks and limit messages
- The record / track / analytics flow after processing
"""

import pytest

from usage.ledger import UsageLedger
from usage.file_history import FileHistoryLog
from usage.analytics import AnalyticsAggregator
from usage.entitlement import EntitlementCache
from usage.models import UsageCategory
from usage.storage import MemoryStore
from usage.tool_catalog import (
    TOOLS,
    ToolCategory,
    get_free_tools_count,
    get_premium_tools_count,
    get_tool,
    get_tool_meta,
    get_tools_by_category,
    is_tool_premium,
    search_tools,
)
from usage.tool_usage import ToolUsageService

MB = 1024 * 1024


# ============================================================================
# TOOL CATALOG
# ============================================================================

class TestToolCatalog:
    """Tests for the tool registry"""

    def test_lookup_by_slug_or_href(self):
        assert get_tool("merge").name == "Merge PDF"
        assert get_tool("/merge") == get_tool("merge")
        assert get_tool("/merge").href == "/merge"
        assert get_tool("does-not-exist") is None

    def test_premium_flags(self):
        assert is_tool_premium("pdf-to-word") is True
        assert is_tool_premium("/encrypt") is True
        assert is_tool_premium("merge") is False
        assert is_tool_premium("unknown-tool") is False

    def test_slugs_are_unique(self):
        slugs = [tool.slug for tool in TOOLS]
        assert len(slugs) == len(set(slugs))

    def test_counts_add_up(self):
        assert get_free_tools_count() + get_premium_tools_count() == len(TOOLS)

    def test_security_tools_are_all_premium(self):
        security = get_tools_by_category(ToolCategory.SECURITY)
        assert security
        assert all(tool.premium for tool in security)

    def test_core_tools_are_all_free(self):
        assert not any(tool.premium for tool in get_tools_by_category(ToolCategory.CORE))

    def test_all_categories(self):
        assert len(get_tools_by_category()) == len(TOOLS)

    def test_search_tools(self):
        names = [tool.name for tool in search_tools("EXCEL")]
        assert names == ["PDF to Excel"]

    def test_tool_meta(self):
        assert get_tool_meta("merge") == {"name": "Merge PDF", "icon": "Combine"}
        assert get_tool_meta("mystery") == {"name": "mystery", "icon": "FileText"}


# ============================================================================
# STATUS
# ============================================================================

class TestToolUsageStatus:
    """Tests for get_status()"""

    def test_free_basic_tool_is_unlimited(self, service):
        status = service.get_status("merge")
        assert status.is_pro is False
        assert status.is_premium_tool is False
        assert status.is_unlimited is True
        assert status.remaining_usage is None
        assert status.can_process is True
        assert status.max_file_size == 10
        assert status.usage_display == "Free · Unlimited"

    def test_free_premium_tool_shows_allowance(self, service):
        status = service.get_status("pdf-to-word")
        assert status.is_premium_tool is True
        assert status.is_unlimited is False
        assert status.remaining_usage == 4
        assert status.can_process is True
        assert status.usage_display == "4 of 4 free uses"

    def test_pro_is_unlimited(self, service):
        status = service.get_status("pdf-to-word", is_pro=True)
        assert status.is_pro is True
        assert status.is_unlimited is True
        assert status.can_process is True
        assert status.max_file_size == 100
        assert status.usage_display == "Unlimited"

    def test_pro_from_cached_flag(self, service, entitlement):
        entitlement.set_pro(True)
        assert service.get_status("encrypt").is_pro is True

    def test_category_for(self):
        assert ToolUsageService.category_for("merge") == UsageCategory.BASIC
        assert ToolUsageService.category_for("ocr") == UsageCategory.PREMIUM


# ============================================================================
# RECORDING
# ============================================================================

class TestRecordUsage:
    """Tests for record_usage()"""

    def test_premium_allowance_consumed(self, service):
        for _ in range(3):
            service.record_usage("pdf-to-word")
        status = service.record_usage("pdf-to-word")
        assert status.remaining_usage == 0
        assert status.can_process is False
        assert status.usage_display == "0 of 4 free uses"

    def test_allowance_shared_across_premium_tools(self, service):
        service.record_usage("pdf-to-word")
        service.record_usage("encrypt")
        assert service.get_status("ocr").remaining_usage == 2

    def test_pro_usage_not_counted(self, service, ledger):
        service.record_usage("pdf-to-word", is_pro=True)
        assert ledger.get_remaining_premium_usage() == 4

    def test_basic_tool_counts_daily_but_stays_open(self, service, ledger):
        for _ in range(3):
            service.record_usage("merge")
        assert ledger.get_remaining_daily_usage() == 0
        assert service.get_status("merge").can_process is True

    def test_daily_limit_enforced_when_enabled(self, ledger, history, analytics, entitlement):
        service = ToolUsageService(
            ledger=ledger, history=history, analytics=analytics,
            entitlement=entitlement, enforce_daily_limit=True,
        )
        assert service.get_status("merge").usage_display == "2 of 2 free files today"
        service.record_usage("merge")
        service.record_usage("merge")

        status = service.get_status("merge")
        assert status.can_process is False
        allowed, message = service.check_file("merge", 1024)
        assert allowed is False
        assert "Daily limit reached" in message


# ============================================================================
# FILE CHECKS
# ============================================================================

class TestCheckFile:
    """Tests for check_file()"""

    def test_small_file_allowed(self, service):
        assert service.check_file("merge", 2 * MB) == (True, None)

    def test_free_size_limit(self, service):
        allowed, message = service.check_file("merge", 12 * MB)
        assert allowed is False
        assert "10 MB" in message
        assert "12.0 MB" in message

    def test_pro_size_limit(self, service):
        assert service.check_file("merge", 50 * MB, is_pro=True) == (True, None)
        allowed, message = service.check_file("merge", 101 * MB, is_pro=True)
        assert allowed is False
        assert "100 MB" in message

    def test_premium_exhausted(self, service):
        for _ in range(4):
            service.record_usage("redact")
        allowed, message = service.check_file("redact", 1024)
        assert allowed is False
        assert "4 free premium uses" in message


# ============================================================================
# COMPLETE FLOW
# ============================================================================

class TestCompleteOperation:
    """Tests for complete_operation() and track_file()"""

    def test_updates_ledger_history_and_analytics(self, service, ledger, history, analytics):
        service.complete_operation(
            "pdf-to-word", "thesis.pdf", "thesis.docx",
            file_size=4096, output_size=2048, page_count=12,
        )

        assert ledger.get_remaining_premium_usage() == 3

        entries = history.get_file_history()
        assert len(entries) == 1
        entry = entries[0]
        assert entry.tool == "pdf-to-word"
        assert entry.tool_name == "PDF to Word"
        assert entry.tool_icon == "FileText"
        assert entry.original_name == "thesis.pdf"
        assert entry.file_name == "thesis.docx"
        assert entry.output_size == 2048
        assert entry.page_count == 12

        data = analytics.get_analytics()
        assert data.total_files_processed == 1
        assert data.total_bytes_processed == 4096
        assert data.tool_usage == {"pdf-to-word": 1}

    def test_unknown_size_counts_zero_bytes(self, service, analytics):
        service.complete_operation("merge", "a.pdf", "merged.pdf")
        assert analytics.get_analytics().total_bytes_processed == 0

    def test_track_unknown_tool_uses_fallback_meta(self, service, history):
        service.track_file("mystery", "a.pdf", "out.pdf")
        entry = history.get_file_history()[0]
        assert entry.tool_name == "mystery"
        assert entry.tool_icon == "FileText"

    def test_full_storage_never_blocks(self, clock):
        store = MemoryStore(quota_bytes=8)
        entitlement = EntitlementCache(store)
        service = ToolUsageService(
            ledger=UsageLedger(store=store, clock=clock),
            history=FileHistoryLog(store=store, clock=clock, entitlement=entitlement),
            analytics=AnalyticsAggregator(store=store, clock=clock),
            entitlement=entitlement,
            enforce_daily_limit=False,
        )
        status = service.complete_operation("pdf-to-word", "a.pdf", "a.docx", file_size=10)
        assert status.can_process is True
        assert status.remaining_usage == 4
