"""
Test Suite for Alkansya

Test Structure:
- unit/: Unit tests mirroring src/ package structure
- integration/: CLI, configuration and end-to-end workflow tests

Test Categories:
- Core utilities (currency, money, dates, models, config)
- Ledger operations, persistence and CSV export/import
- Command-line interface

All tests run against in-memory stores or per-test temporary directories.
Real savings data is never touched.
"""
