#!/usr/bin/env python3
"""
Unit tests for the LedgerManager.

Covers every state operation, write-through persistence, and the behaviour
when the store fails underneath the ledger.
"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from alkansya.core.dates import FinancialDate
from alkansya.core.errors import ImportParseError, NoOpError, NotFoundError, PersistenceError, ValidationError
from alkansya.core.models import Theme
from alkansya.core.money import Money
from alkansya.ledger.csv_codec import ImportResult, decode
from alkansya.ledger.manager import LedgerManager
from alkansya.ledger.storage import STATE_KEY, load_state

pesos = Money.from_pesos


def _reload(store) -> LedgerManager:
    """A second manager reading what the first one persisted."""
    return LedgerManager.load(store)


@pytest.mark.ledger
class TestAddTransaction:
    """Test adding deposits."""

    def test_add_returns_record_and_persists(self, ledger, memory_store):
        """Test that a valid deposit is stored and written through."""
        t = ledger.add_transaction(pesos(50), 2, "test", "2024-01-01")

        assert t.total == pesos(100)
        assert ledger.get_transaction(t.id) == t
        assert _reload(memory_store).state.transactions == {t.id: t}

    def test_add_accepts_financial_date(self, ledger):
        """Test passing a FinancialDate instead of text."""
        t = ledger.add_transaction(pesos(5), 1, "", FinancialDate.from_string("2024-02-02"))
        assert t.date.to_iso_string() == "2024-02-02"

    @pytest.mark.parametrize(
        "amount,quantity,date",
        [
            (pesos(0), 1, "2024-01-01"),
            (pesos(-10), 1, "2024-01-01"),
            (pesos(10), 0, "2024-01-01"),
            (pesos(10), -1, "2024-01-01"),
            (pesos(10), 1, ""),
            (pesos(10), 1, None),
            (pesos(10), 1, "2024-02-31"),
        ],
        ids=["zero", "negative", "zero_qty", "negative_qty", "empty_date", "no_date", "impossible_date"],
    )
    def test_invalid_input_fails_and_leaves_state(self, ledger, memory_store, amount, quantity, date):
        """Test that invalid deposits raise ValidationError and change nothing."""
        ledger.add_transaction(pesos(1), 1, "", "2024-01-01")
        before = dict(ledger.state.transactions)

        with pytest.raises(ValidationError):
            ledger.add_transaction(amount, quantity, "", date)

        assert ledger.state.transactions == before
        assert _reload(memory_store).state.transactions == before

    def test_quick_add_uses_today_and_single_unit(self, ledger):
        """Test quick_add defaults."""
        t = ledger.quick_add(pesos(20))

        assert t.quantity == 1
        assert t.note == ""
        assert t.date.to_iso_string() == "2024-03-10"

    def test_quick_add_rejects_non_positive(self, ledger):
        """Test quick_add validation."""
        with pytest.raises(ValidationError):
            ledger.quick_add(pesos(0))


@pytest.mark.ledger
class TestEditAndDelete:
    """Test editing and deleting deposits."""

    def test_edit_replaces_fields_in_place(self, ledger, memory_store):
        """Test that an edit keeps id and position."""
        first = ledger.add_transaction(pesos(10), 1, "first", "2024-01-01")
        second = ledger.add_transaction(pesos(20), 1, "second", "2024-01-02")

        edited = ledger.edit_transaction(first.id, pesos(30), 3, "changed", "2024-01-05")

        assert edited.id == first.id
        assert list(ledger.state.transactions) == [first.id, second.id]
        assert ledger.get_transaction(first.id).note == "changed"
        assert _reload(memory_store).get_transaction(first.id) == edited

    def test_edit_missing_id_raises_not_found(self, ledger):
        """Test editing an unknown id."""
        with pytest.raises(NotFoundError) as exc_info:
            ledger.edit_transaction("nope", pesos(1), 1, "", "2024-01-01")
        assert exc_info.value.transaction_id == "nope"

    def test_edit_with_invalid_fields_keeps_original(self, ledger):
        """Test that a failed edit changes nothing."""
        t = ledger.add_transaction(pesos(10), 1, "keep", "2024-01-01")
        with pytest.raises(ValidationError):
            ledger.edit_transaction(t.id, pesos(10), 0, "lost", "2024-01-01")
        assert ledger.get_transaction(t.id) == t

    def test_delete_removes_and_persists(self, ledger, memory_store):
        """Test deleting a deposit."""
        t = ledger.add_transaction(pesos(10), 1, "", "2024-01-01")

        removed = ledger.delete_transaction(t.id)

        assert removed == t
        assert ledger.state.transactions == {}
        assert _reload(memory_store).state.transactions == {}

    def test_delete_missing_id_raises_not_found(self, ledger):
        """Test deleting an unknown id."""
        with pytest.raises(NotFoundError):
            ledger.delete_transaction("nope")


@pytest.mark.ledger
class TestBalanceAndProgress:
    """Test derived values."""

    def test_balance_matches_sum_after_every_operation(self, ledger):
        """Test the balance invariant across add, edit and delete."""

        def expected():
            return sum(t.amount.to_cents() * t.quantity for t in ledger.state.transactions.values())

        a = ledger.add_transaction(pesos("12.34"), 3, "", "2024-01-01")
        assert ledger.current_balance().to_cents() == expected() == 3702
        b = ledger.add_transaction(pesos("0.25"), 4, "", "2024-01-02")
        assert ledger.current_balance().to_cents() == expected()
        ledger.edit_transaction(a.id, pesos(100), 2, "", "2024-01-01")
        assert ledger.current_balance().to_cents() == expected() == 20100
        ledger.delete_transaction(b.id)
        assert ledger.current_balance().to_cents() == expected() == 20000

    def test_empty_ledger_balance_is_zero(self, ledger):
        """Test the balance of a fresh ledger."""
        assert ledger.current_balance() == Money.zero()

    def test_progress_is_percentage_of_goal(self, ledger):
        """Test a partial progress value."""
        ledger.set_goal(pesos(400))
        ledger.add_transaction(pesos(50), 2, "", "2024-01-01")
        assert ledger.progress_percentage() == Decimal(25)

    def test_progress_is_clamped_to_100(self, ledger):
        """Test that exceeding the goal still reports 100."""
        ledger.set_goal(pesos(100))
        ledger.add_transaction(pesos(500), 1, "", "2024-01-01")
        assert ledger.progress_percentage() == Decimal(100)

    def test_progress_is_zero_without_positive_goal(self, ledger):
        """Test that a zero goal (e.g. from old saved data) doesn't divide by zero."""
        ledger.add_transaction(pesos(50), 1, "", "2024-01-01")
        ledger.state.goal = Money.zero()
        assert ledger.progress_percentage() == Decimal(0)


@pytest.mark.ledger
class TestEmptyLedger:
    """Test moving the balance into the vault."""

    def test_empty_moves_balance_to_vault(self, ledger, memory_store):
        """Test vault' = vault + B and transactions' = []."""
        ledger.state.vault_total = pesos(1000)
        ledger.add_transaction(pesos(50), 2, "", "2024-01-01")

        moved = ledger.empty_ledger()

        assert moved == pesos(100)
        assert ledger.state.vault_total == pesos(1100)
        assert ledger.state.transactions == {}
        reloaded = _reload(memory_store).state
        assert reloaded.vault_total == pesos(1100)
        assert reloaded.transactions == {}

    def test_second_empty_raises_no_op(self, ledger):
        """Test that emptying twice fails the second time."""
        ledger.add_transaction(pesos(50), 1, "", "2024-01-01")
        ledger.empty_ledger()

        with pytest.raises(NoOpError):
            ledger.empty_ledger()
        assert ledger.state.vault_total == pesos(50)

    def test_empty_on_fresh_ledger_raises_no_op(self, ledger):
        """Test emptying a ledger with no deposits."""
        with pytest.raises(NoOpError, match="already empty"):
            ledger.empty_ledger()


@pytest.mark.ledger
class TestGoalAndTheme:
    """Test goal and theme preferences."""

    def test_set_goal_persists(self, ledger, memory_store):
        """Test changing the goal."""
        ledger.set_goal(pesos(25000))
        assert _reload(memory_store).state.goal == pesos(25000)

    @pytest.mark.parametrize("goal", [Money.zero(), Money.from_cents(-1)])
    def test_set_goal_rejects_non_positive(self, ledger, goal):
        """Test goal validation."""
        with pytest.raises(ValidationError, match="goal"):
            ledger.set_goal(goal)
        assert ledger.state.goal == pesos(10000)

    def test_toggle_theme_persists(self, ledger, memory_store):
        """Test switching theme back and forth."""
        assert ledger.toggle_theme() is Theme.DARK
        assert _reload(memory_store).state.theme is Theme.DARK
        assert ledger.toggle_theme() is Theme.LIGHT

    def test_theme_does_not_touch_money(self, ledger):
        """Test that the theme is inert to balances."""
        ledger.add_transaction(pesos(50), 1, "", "2024-01-01")
        ledger.set_theme(Theme.DARK)
        assert ledger.current_balance() == pesos(50)
        assert ledger.state.vault_total == Money.zero()


@pytest.mark.ledger
class TestOrderingAndSnapshot:
    """Test display ordering and snapshots."""

    def test_sorted_newest_first_with_stable_ties(self, ledger):
        """Test newest-date-first ordering; same-day entries keep insertion order."""
        old = ledger.add_transaction(pesos(1), 1, "old", "2024-01-01")
        same_a = ledger.add_transaction(pesos(2), 1, "a", "2024-02-01")
        new = ledger.add_transaction(pesos(3), 1, "new", "2024-03-01")
        same_b = ledger.add_transaction(pesos(4), 1, "b", "2024-02-01")

        assert [t.note for t in ledger.sorted_transactions()] == ["new", "a", "b", "old"]
        assert {old.id, same_a.id, new.id, same_b.id} == set(ledger.state.transactions)

    def test_snapshot_reflects_state(self, ledger):
        """Test the render snapshot."""
        ledger.state.vault_total = pesos(7)
        ledger.set_goal(pesos(200))
        ledger.add_transaction(pesos(50), 1, "", "2024-01-01")

        snapshot = ledger.snapshot()

        assert snapshot.balance == pesos(50)
        assert snapshot.vault_total == pesos(7)
        assert snapshot.goal == pesos(200)
        assert snapshot.progress == Decimal(25)
        assert snapshot.theme is Theme.LIGHT
        assert len(snapshot.transactions) == 1


@pytest.mark.ledger
class TestReplaceTransactions:
    """Test the full-replace import."""

    def test_import_replaces_instead_of_merging(self, ledger, sample_csv_text):
        """Test that T1 is gone after importing T2."""
        existing = ledger.add_transaction(pesos(999), 1, "T1", "2023-12-31")

        count = ledger.replace_transactions(decode(sample_csv_text))

        assert count == 3
        assert existing.id not in ledger.state.transactions
        notes = sorted(t.note for t in ledger.state.transactions.values())
        assert notes == ["", "coins", "lunch money"]
        assert ledger.current_balance() == pesos(1200)

    def test_import_applies_metadata(self, ledger, sample_csv_text):
        """Test that vault total and goal come from the file."""
        ledger.replace_transactions(decode(sample_csv_text))
        assert ledger.state.vault_total == pesos(1500)
        assert ledger.state.goal == pesos(10000)

    def test_import_without_metadata_keeps_vault_and_goal(self, ledger):
        """Test that missing metadata leaves the current values."""
        ledger.state.vault_total = pesos(42)
        ledger.set_goal(pesos(300))

        ledger.replace_transactions(decode('Date,Amount,Quantity,Total,Note\n"2024-01-01","5","1","5",""\n'))

        assert ledger.state.vault_total == pesos(42)
        assert ledger.state.goal == pesos(300)

    def test_empty_import_raises_and_changes_nothing(self, ledger):
        """Test that an import with zero valid rows is rejected."""
        t = ledger.add_transaction(pesos(10), 1, "", "2024-01-01")

        with pytest.raises(ImportParseError):
            ledger.replace_transactions(ImportResult(vault_total=pesos(5)))

        assert list(ledger.state.transactions) == [t.id]
        assert ledger.state.vault_total == Money.zero()


@pytest.mark.ledger
class TestPersistence:
    """Test loading and write failures."""

    def test_load_uses_defaults_for_fresh_store(self, memory_store):
        """Test the first start."""
        state = LedgerManager.load(memory_store).state
        assert state.transactions == {}
        assert state.goal == pesos(10000)

    def test_load_uses_custom_default_goal(self, memory_store):
        """Test a configured default goal."""
        assert LedgerManager.load(memory_store, default_goal=pesos(500)).state.goal == pesos(500)

    def test_write_failure_keeps_in_memory_state(self, ledger):
        """Test that a failed save raises PersistenceError without losing the change."""
        failing_store = MagicMock()
        failing_store.set.side_effect = OSError("disk full")
        manager = LedgerManager(ledger.state, failing_store)

        with pytest.raises(PersistenceError, match="disk full"):
            manager.add_transaction(pesos(50), 2, "", "2024-01-01")

        assert manager.current_balance() == pesos(100)

    def test_write_failure_during_empty_keeps_vault_consistent(self, memory_store):
        """Test that emptying is all-or-nothing in memory even if the save fails."""
        manager = LedgerManager.load(memory_store)
        manager.add_transaction(pesos(50), 1, "", "2024-01-01")

        failing_store = MagicMock()
        failing_store.set.side_effect = OSError("quota exceeded")
        failing = LedgerManager(manager.state, failing_store)

        with pytest.raises(PersistenceError):
            failing.empty_ledger()

        assert failing.state.vault_total == pesos(50)
        assert failing.state.transactions == {}
        # The last successful write is still intact in the original store
        assert load_state(memory_store, STATE_KEY).balance() == pesos(50)
