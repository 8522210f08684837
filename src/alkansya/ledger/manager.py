#!/usr/bin/env python3
"""
Ledger Manager

Owns the savings ledger state and every operation that changes it. Each
mutation is validated first, applied in memory, and then written through to
the key-value store before the call returns.

If the write fails a PersistenceError is raised, but the in-memory state keeps
the change: it stays the source of truth for the rest of the session and the
next successful write catches the store up.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from ..core.dates import FinancialDate
from ..core.datastore import KeyValueStore
from ..core.errors import ImportParseError, NoOpError, NotFoundError, ValidationError
from ..core.models import DATE_ERROR, DEFAULT_GOAL, LedgerState, Theme, Transaction, validate_goal
from ..core.money import Money
from .csv_codec import ImportResult
from .storage import STATE_KEY, load_state, save_state

logger = logging.getLogger(__name__)

HUNDRED = Decimal(100)

DateInput = FinancialDate | str | None


@dataclass(frozen=True)
class LedgerSnapshot:
    """Read-only view of the ledger for rendering."""

    balance: Money
    vault_total: Money
    goal: Money
    progress: Decimal
    theme: Theme
    transactions: tuple[Transaction, ...]


def _coerce_date(value: DateInput) -> FinancialDate:
    if isinstance(value, FinancialDate):
        return value
    if value is None or not value.strip():
        raise ValidationError(DATE_ERROR)
    try:
        return FinancialDate.from_string(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD") from e


class LedgerManager:
    """
    The savings ledger: transactions, vault, goal and theme.

    The manager owns one LedgerState instance. There is no global state;
    whoever builds the manager decides which store and which state it works on.
    """

    def __init__(
        self,
        state: LedgerState,
        store: KeyValueStore,
        state_key: str = STATE_KEY,
        today: Callable[[], FinancialDate] = FinancialDate.today,
    ):
        """
        Initialize the manager.

        Args:
            state: The state to own and mutate
            store: Where every mutation is written through to
            state_key: Key the state is stored under
            today: Provider of the current date, used by quick_add
        """
        self._state = state
        self._store = store
        self._state_key = state_key
        self._today = today

    @classmethod
    def load(
        cls,
        store: KeyValueStore,
        state_key: str = STATE_KEY,
        default_goal: Money = DEFAULT_GOAL,
        today: Callable[[], FinancialDate] = FinancialDate.today,
    ) -> "LedgerManager":
        """Build a manager from the persisted state, or defaults if there is none."""
        state = load_state(store, state_key, default_goal)
        return cls(state, store, state_key=state_key, today=today)

    @property
    def state(self) -> LedgerState:
        """The owned state. Treat as read-only; mutate through the manager."""
        return self._state

    def _persist(self) -> None:
        save_state(self._store, self._state, self._state_key)

    # Transactions

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Look up a transaction by id, raising NotFoundError if absent."""
        try:
            return self._state.transactions[transaction_id]
        except KeyError:
            raise NotFoundError(transaction_id) from None

    def add_transaction(self, amount: Money, quantity: int, note: str, date: DateInput) -> Transaction:
        """
        Record a deposit of quantity units of amount each.

        Raises:
            ValidationError: If amount <= 0, quantity < 1, or date is missing/invalid
        """
        transaction = Transaction.create(amount, quantity, note, _coerce_date(date))
        self._state.transactions[transaction.id] = transaction
        logger.info(f"Added {transaction.quantity} x {transaction.amount} ({transaction.total}) on {transaction.date}")
        self._persist()
        return transaction

    def quick_add(self, amount: Money) -> Transaction:
        """Record a single unit of amount dated today with no note."""
        return self.add_transaction(amount, 1, "", self._today())

    def edit_transaction(
        self, transaction_id: str, amount: Money, quantity: int, note: str, date: DateInput
    ) -> Transaction:
        """
        Replace the fields of an existing transaction, keeping its id and position.

        Raises:
            NotFoundError: If no transaction has this id
            ValidationError: If the new fields are invalid
        """
        current = self.get_transaction(transaction_id)
        updated = current.with_fields(amount, quantity, note, _coerce_date(date))
        self._state.transactions[transaction_id] = updated
        logger.info(f"Edited transaction {transaction_id}: {current.total} -> {updated.total}")
        self._persist()
        return updated

    def delete_transaction(self, transaction_id: str) -> Transaction:
        """
        Remove a transaction. Confirming with the user is the caller's job.

        Returns:
            The removed transaction

        Raises:
            NotFoundError: If no transaction has this id
        """
        removed = self.get_transaction(transaction_id)
        del self._state.transactions[transaction_id]
        logger.info(f"Deleted transaction {transaction_id} ({removed.total})")
        self._persist()
        return removed

    def sorted_transactions(self) -> list[Transaction]:
        """Transactions newest date first; same-day entries keep recording order."""
        return sorted(self._state.transactions.values(), key=lambda t: t.date, reverse=True)

    def replace_transactions(self, result: ImportResult) -> int:
        """
        Replace the whole ledger with imported transactions.

        Import never merges: existing transactions are dropped. Vault total and
        goal are taken from the import when it carried valid values for them.

        Returns:
            Number of transactions now in the ledger

        Raises:
            ImportParseError: If the import holds no valid transactions
        """
        if result.is_empty:
            raise ImportParseError("No valid transactions found in CSV")

        transactions = {t.id: t for t in result.transactions}
        self._state.transactions = transactions
        if result.vault_total is not None:
            self._state.vault_total = result.vault_total
        if result.goal is not None:
            self._state.goal = result.goal

        logger.info(f"Imported {len(transactions)} transactions, replacing the ledger")
        self._persist()
        return len(transactions)

    # Balance, vault and goal

    def current_balance(self) -> Money:
        """Sum of amount × quantity over all transactions."""
        return self._state.balance()

    def empty_ledger(self) -> Money:
        """
        Move the whole balance into the vault and clear the transactions.

        Returns:
            The amount moved into the vault

        Raises:
            NoOpError: If the balance is already zero
        """
        balance = self.current_balance()
        if balance.is_zero():
            raise NoOpError("Alkansya is already empty!")

        new_vault_total = self._state.vault_total + balance
        self._state.vault_total = new_vault_total
        self._state.transactions = {}
        logger.info(f"Moved {balance} into the vault (vault total {new_vault_total})")
        self._persist()
        return balance

    def set_goal(self, goal: Money) -> None:
        """
        Change the savings goal.

        Raises:
            ValidationError: If goal <= 0
        """
        validate_goal(goal)
        self._state.goal = goal
        logger.info(f"Goal set to {goal}")
        self._persist()

    def progress_percentage(self) -> Decimal:
        """Balance as a percentage of the goal, clamped to [0, 100]; 0 without a positive goal."""
        goal = self._state.goal
        if not goal.is_positive():
            return Decimal(0)
        percentage = Decimal(self.current_balance().to_cents()) * HUNDRED / Decimal(goal.to_cents())
        return min(max(percentage, Decimal(0)), HUNDRED)

    # Display preferences

    def set_theme(self, theme: Theme) -> None:
        """Persist the display theme."""
        self._state.theme = theme
        self._persist()

    def toggle_theme(self) -> Theme:
        """Switch between light and dark and return the new theme."""
        self.set_theme(self._state.theme.toggled())
        return self._state.theme

    def snapshot(self) -> LedgerSnapshot:
        """Everything a presentation layer needs to re-render."""
        return LedgerSnapshot(
            balance=self.current_balance(),
            vault_total=self._state.vault_total,
            goal=self._state.goal,
            progress=self.progress_percentage(),
            theme=self._state.theme,
            transactions=tuple(self.sorted_transactions()),
        )
