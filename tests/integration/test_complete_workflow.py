#!/usr/bin/env python3
"""Integration tests for complete savings workflows."""

import pytest

from alkansya.core.datastore import JsonFileStore
from alkansya.core.dates import FinancialDate
from alkansya.core.models import Theme
from alkansya.core.money import Money
from alkansya.ledger import LedgerActions, LedgerManager
from tests.conftest import FIXED_TODAY


def _open(data_dir, answer=True) -> LedgerActions:
    manager = LedgerManager.load(JsonFileStore(data_dir), today=lambda: FIXED_TODAY)
    return LedgerActions(manager, confirm=lambda question: answer, today=lambda: FIXED_TODAY)


@pytest.mark.integration
class TestSavingsWorkflow:
    """Test a saving cycle persisted to disk between sessions."""

    def test_save_empty_and_reopen(self, temp_dir):
        """Test deposits, goal progress and vault transfer across reloads."""
        actions = _open(temp_dir)
        actions.add("50", "2", "lunch money", "2024-01-15")
        actions.quick_add("20")
        actions.set_goal("240")
        actions.toggle_theme()

        reopened = _open(temp_dir).manager
        assert reopened.current_balance() == Money.from_pesos(120)
        assert reopened.progress_percentage() == 50
        assert reopened.state.theme is Theme.DARK
        assert reopened.sorted_transactions()[0].date == FIXED_TODAY

        _open(temp_dir).empty()

        final = _open(temp_dir).manager
        assert final.state.transactions == {}
        assert final.state.vault_total == Money.from_pesos(120)
        assert final.state.goal == Money.from_pesos(240)

    def test_goal_reached_is_capped(self, temp_dir):
        """Test that progress stops at 100%."""
        actions = _open(temp_dir)
        actions.add("50", "2")
        actions.set_goal("100")
        assert actions.manager.progress_percentage() == 100

        actions.add("1")
        assert actions.manager.progress_percentage() == 100


@pytest.mark.integration
class TestCsvWorkflow:
    """Test moving a ledger between data directories via CSV."""

    def test_export_from_one_ledger_import_into_another(self, temp_dir):
        """Test that export then import reproduces vault, goal and transactions."""
        source = _open(temp_dir / "phone")
        source.add("50", "2", "lunch money", "2024-01-15")
        source.add("0.25", "40", "", "2024-01-16")
        source.add("1000", "1", "bonus", "2024-02-01")
        source.empty()
        source.add("10", "3", "after emptying", "2024-03-01")
        source.set_goal("5000")
        exported = source.export_csv(temp_dir / "exports")

        target = _open(temp_dir / "laptop")
        target.add("1", "1", "will be replaced")
        assert target.import_csv(exported) == 1

        state = target.manager.state
        assert state.vault_total == Money.from_pesos(1110)
        assert state.goal == Money.from_pesos(5000)
        (t,) = state.transactions.values()
        assert (t.amount, t.quantity, t.note, t.date) == (
            Money.from_pesos(10),
            3,
            "after emptying",
            FinancialDate.from_string("2024-03-01"),
        )

        # The import was persisted
        assert _open(temp_dir / "laptop").manager.state == state
