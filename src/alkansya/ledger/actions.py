#!/usr/bin/env python3
"""
Ledger Actions - the layer between a user interface and the LedgerManager.

Turns raw form input into typed values, asks the user before destructive
operations, and produces the short messages a UI shows after each action.

The confirmation prompt is injected as a plain callable so that any front end
(a terminal prompt, a dialog, a test returning a fixed answer) can drive it.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from ..core.currency import DEFAULT_CURRENCY_SYMBOL
from ..core.dates import FinancialDate
from ..core.errors import ImportParseError, NoOpError, ValidationError
from ..core.models import AMOUNT_ERROR, DATE_ERROR, GOAL_ERROR, QUANTITY_ERROR, Theme, Transaction
from ..core.money import Money
from .csv_codec import export_filename, read_csv, write_csv
from .manager import LedgerManager

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str], bool]
NotifyFn = Callable[[str], None]

EMPTY_QUESTION = "Transfer {amount} to vault?\n\nThis will clear all transactions and add the total to your vault."
IMPORT_QUESTION = (
    "Import CSV?\n\nThis will replace all current transactions. "
    "Make sure to export first if you want to keep your data!"
)


def parse_amount(text: str, error: str = AMOUNT_ERROR) -> Money:
    """Parse a positive peso amount typed by the user."""
    try:
        amount = Money.from_pesos(text)
    except ValueError:
        raise ValidationError(error) from None
    if not amount.is_positive():
        raise ValidationError(error)
    return amount


def parse_quantity(text: str | int) -> int:
    """Parse a whole unit count of at least 1."""
    try:
        quantity = int(str(text).strip())
    except ValueError:
        raise ValidationError(QUANTITY_ERROR) from None
    if quantity < 1:
        raise ValidationError(QUANTITY_ERROR)
    return quantity


def parse_date(text: str | None) -> FinancialDate:
    """Parse a YYYY-MM-DD date typed by the user."""
    if text is None or not text.strip():
        raise ValidationError(DATE_ERROR)
    try:
        return FinancialDate.from_string(text)
    except ValueError:
        raise ValidationError(f"Invalid date {text!r}, expected YYYY-MM-DD") from None


def parse_goal(text: str) -> Money:
    """Parse a positive goal amount."""
    return parse_amount(text, error=GOAL_ERROR)


class LedgerActions:
    """User-facing operations on a LedgerManager."""

    def __init__(
        self,
        manager: LedgerManager,
        confirm: ConfirmFn,
        notify: NotifyFn | None = None,
        today: Callable[[], FinancialDate] = FinancialDate.today,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
    ):
        """
        Args:
            manager: Ledger to operate on
            confirm: Asked a yes/no question before destructive operations
            notify: Receives a short message after each successful action
            today: Provider of the current date (default dates, export names)
            currency_symbol: Symbol used in questions and messages
        """
        self.manager = manager
        self._confirm = confirm
        self._notify = notify or (lambda message: logger.info(message))
        self._today = today
        self._symbol = currency_symbol

    def _fmt(self, money: Money) -> str:
        return money.format(self._symbol)

    def add(
        self, amount_text: str, quantity_text: str = "1", note: str = "", date_text: str | None = None
    ) -> Transaction:
        """Add a transaction from form input; the date defaults to today."""
        amount = parse_amount(amount_text)
        quantity = parse_quantity(quantity_text)
        date = self._today() if date_text is None else parse_date(date_text)

        transaction = self.manager.add_transaction(amount, quantity, note, date)
        self._notify(f"Added {self._fmt(transaction.total)} to alkansya!")
        return transaction

    def quick_add(self, amount_text: str) -> Transaction:
        """Add one unit of a denomination dated today."""
        transaction = self.manager.quick_add(parse_amount(amount_text))
        self._notify(f"Added {self._fmt(transaction.amount)} to alkansya!")
        return transaction

    def edit(
        self, transaction_id: str, amount_text: str, quantity_text: str, note: str, date_text: str
    ) -> Transaction:
        """Replace a transaction's fields from form input."""
        amount = parse_amount(amount_text)
        quantity = parse_quantity(quantity_text)
        date = parse_date(date_text)

        transaction = self.manager.edit_transaction(transaction_id, amount, quantity, note, date)
        self._notify("Transaction updated")
        return transaction

    def delete(self, transaction_id: str) -> bool:
        """
        Delete a transaction after the user confirms.

        Returns:
            True if deleted, False if the user declined
        """
        transaction = self.manager.get_transaction(transaction_id)
        if not self._confirm(f"Delete {self._fmt(transaction.total)} transaction?"):
            return False

        self.manager.delete_transaction(transaction_id)
        self._notify("Transaction deleted")
        return True

    def empty(self) -> Money | None:
        """
        Move the balance into the vault after the user confirms.

        Returns:
            The amount moved, or None if the user declined

        Raises:
            NoOpError: If there is nothing to move
        """
        balance = self.manager.current_balance()
        if balance.is_zero():
            raise NoOpError("Alkansya is already empty!")
        if not self._confirm(EMPTY_QUESTION.format(amount=self._fmt(balance))):
            return None

        moved = self.manager.empty_ledger()
        self._notify(f"{self._fmt(moved)} transferred to vault!")
        return moved

    def set_goal(self, goal_text: str) -> Money:
        """Change the goal from form input."""
        goal = parse_goal(goal_text)
        self.manager.set_goal(goal)
        self._notify("Goal updated!")
        return goal

    def toggle_theme(self) -> Theme:
        """Switch between light and dark themes."""
        return self.manager.toggle_theme()

    def export_csv(self, directory: str | Path) -> Path:
        """
        Write the ledger to <directory>/alkansya-<today>.csv.

        Raises:
            NoOpError: If there are no transactions to export
        """
        state = self.manager.state
        if not state.transactions:
            raise NoOpError("No transactions to export!")

        path = write_csv(Path(directory) / export_filename(self._today()), state)
        self._notify("CSV exported successfully!")
        return path

    def import_csv(self, path: str | Path) -> int | None:
        """
        Replace the ledger with the transactions in a CSV file, after the user confirms.

        Returns:
            Number of imported transactions, or None if the user declined

        Raises:
            ImportParseError: If the file can't be read, is too short, or holds no valid rows
        """
        try:
            result = read_csv(path)
        except (OSError, UnicodeDecodeError) as e:
            raise ImportParseError(f"Error importing CSV: {e}") from e

        if result.line_count < 2:
            raise ImportParseError("Invalid CSV file")
        if result.is_empty:
            raise ImportParseError("No valid transactions found in CSV")
        if not self._confirm(IMPORT_QUESTION):
            return None

        count = self.manager.replace_transactions(result)
        self._notify(f"Imported {count} transactions!")
        return count
