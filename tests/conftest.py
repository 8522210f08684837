"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from datetime import date
from pathlib import Path

import pytest

from alkansya.core import config as config_module
from alkansya.core.datastore import MemoryStore
from alkansya.core.dates import FinancialDate
from alkansya.core.money import Money
from alkansya.ledger.manager import LedgerManager

FIXED_TODAY = FinancialDate(date=date(2024, 3, 10))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def memory_store() -> MemoryStore:
    """Empty in-memory key-value store."""
    return MemoryStore()


@pytest.fixture
def ledger(memory_store) -> LedgerManager:
    """Fresh ledger backed by an in-memory store, with today fixed to 2024-03-10."""
    return LedgerManager.load(memory_store, today=lambda: FIXED_TODAY)


@pytest.fixture
def sample_csv_text() -> str:
    """CSV export with three deposits, a vault total and a goal."""
    return (
        "Date,Amount,Quantity,Total,Note\n"
        '"2024-01-15","50.00","2","100.00","lunch money"\n'
        '"2024-01-20","20.00","5","100.00","coins"\n'
        '"2024-02-01","1000.00","1","1000.00",""\n'
        "\n"
        "Vault Total,1500\n"
        "Goal,10000\n"
    )


@pytest.fixture
def deposit_cases() -> list[dict]:
    """(amount, quantity) deposits with their expected totals in centavos."""
    return [
        {"amount": Money.from_pesos("50.00"), "quantity": 2, "total_cents": 10000},
        {"amount": Money.from_pesos("0.25"), "quantity": 4, "total_cents": 100},
        {"amount": Money.from_pesos("1000"), "quantity": 1, "total_cents": 100000},
        {"amount": Money.from_pesos("12.34"), "quantity": 3, "total_cents": 3702},
    ]


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Point configuration at a per-test data directory."""
    # Ensure tests don't use real savings data
    monkeypatch.setenv("ALKANSYA_ENV", "test")
    monkeypatch.setenv("ALKANSYA_DATA_DIR", str(tmp_path / "alkansya_data"))
    monkeypatch.delenv("ALKANSYA_EXPORT_DIR", raising=False)
    monkeypatch.delenv("ALKANSYA_QUICK_ADD", raising=False)
    monkeypatch.delenv("ALKANSYA_DEFAULT_GOAL", raising=False)
    monkeypatch.delenv("ALKANSYA_STATE_KEY", raising=False)
    monkeypatch.delenv("ALKANSYA_CURRENCY_SYMBOL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    # Drop any configuration cached by an earlier test
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "csv: Tests for CSV export and import")
    config.addinivalue_line("markers", "ledger: Tests for ledger state operations")
