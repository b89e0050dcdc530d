"""
PDFflow Usage Test Suite

Tests for:
- Storage port (memory and JSON file stores) and the clock
- Usage ledger (daily and premium counters, size ceilings)
- File history (dedup, capacity, retention, search, stats)
- Analytics (pruning, dense series, trends, byte formatting)
- Entitlement cache and subscription lookup
- Tool catalog and tool usage service

Run tests with:
    pytest tests/ -v
"""
