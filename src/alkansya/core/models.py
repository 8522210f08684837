#!/usr/bin/env python3
"""
Core Data Models for Alkansya

Data structures for the savings ledger: individual deposit transactions and the
whole persisted ledger state, plus the validation rules that keep them sound.
"""

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .dates import FinancialDate
from .errors import ValidationError
from .money import Money

DEFAULT_GOAL = Money.from_pesos(10000)

AMOUNT_ERROR = "Please enter a valid amount greater than 0"
QUANTITY_ERROR = "Quantity must be at least 1"
DATE_ERROR = "Please select a date"
GOAL_ERROR = "Please enter a valid goal amount greater than 0"


class Theme(Enum):
    """Display theme preference. Has no effect on financial logic."""

    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        """The other theme."""
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


def new_transaction_id() -> str:
    """Generate a fresh opaque transaction id."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Transaction:
    """
    One recorded deposit into the alkansya.

    A deposit is a number of identical units (e.g. 3 × ₱20 coins), so the
    total is always derived from amount and quantity rather than stored.
    Records are immutable; an edit produces a new record with the same id.
    """

    id: str
    amount: Money
    quantity: int
    date: FinancialDate
    note: str = ""

    @property
    def total(self) -> Money:
        """Amount multiplied by quantity."""
        return self.amount * self.quantity

    @classmethod
    def create(cls, amount: Money, quantity: int, note: str, date: FinancialDate) -> "Transaction":
        """Validate the fields and create a record with a fresh id."""
        validate_transaction_fields(amount, quantity, date)
        return cls(id=new_transaction_id(), amount=amount, quantity=quantity, date=date, note=(note or "").strip())

    def with_fields(self, amount: Money, quantity: int, note: str, date: FinancialDate) -> "Transaction":
        """Validate the fields and return an updated copy that keeps this id."""
        validate_transaction_fields(amount, quantity, date)
        return replace(self, amount=amount, quantity=quantity, note=(note or "").strip(), date=date)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "amount": self.amount.to_json(),
            "quantity": self.quantity,
            "note": self.note,
            "date": self.date.to_iso_string(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transaction":
        """
        Create Transaction from its persisted dictionary form.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a field cannot be parsed
            ValidationError: If the parsed values break a ledger invariant
        """
        transaction_id = data["id"]
        if not isinstance(transaction_id, str) or not transaction_id:
            raise ValueError(f"Invalid transaction id: {transaction_id!r}")

        amount = Money.from_pesos(data["amount"])
        quantity = _parse_whole_number(data["quantity"])
        date = FinancialDate.from_string(data["date"])
        validate_transaction_fields(amount, quantity, date)

        note = data.get("note") or ""
        if not isinstance(note, str):
            raise ValueError(f"Invalid note: {note!r}")

        return cls(id=transaction_id, amount=amount, quantity=quantity, date=date, note=note)


@dataclass
class LedgerState:
    """
    Everything the application persists.

    Transactions are keyed by id; insertion order is retained so that
    same-day entries list in the order they were recorded.
    """

    transactions: dict[str, Transaction] = field(default_factory=dict)
    vault_total: Money = field(default_factory=Money.zero)
    goal: Money = DEFAULT_GOAL
    theme: Theme = Theme.LIGHT

    def balance(self) -> Money:
        """Sum of all transaction totals."""
        total = Money.zero()
        for transaction in self.transactions.values():
            total = total + transaction.total
        return total

    def to_dict(self) -> dict[str, Any]:
        """Persisted JSON layout."""
        return {
            "transactions": [t.to_dict() for t in self.transactions.values()],
            "vaultTotal": self.vault_total.to_json(),
            "goal": self.goal.to_json(),
            "theme": self.theme.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LedgerState":
        """
        Rebuild state from its persisted form.

        Missing top-level fields take their defaults. Anything present but
        malformed raises, so the caller can discard the blob as a whole.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")

        transactions: dict[str, Transaction] = {}
        for item in data.get("transactions", []):
            transaction = Transaction.from_dict(item)
            if transaction.id in transactions:
                raise ValueError(f"Duplicate transaction id: {transaction.id}")
            transactions[transaction.id] = transaction

        vault_total = Money.from_pesos(data["vaultTotal"]) if "vaultTotal" in data else Money.zero()
        if vault_total < Money.zero():
            raise ValueError(f"Negative vault total: {vault_total}")

        goal = Money.from_pesos(data["goal"]) if "goal" in data else DEFAULT_GOAL
        if not goal.is_positive():
            raise ValueError(f"Goal must be positive: {goal}")
        theme = Theme(data.get("theme", Theme.LIGHT.value))

        return cls(transactions=transactions, vault_total=vault_total, goal=goal, theme=theme)


def _parse_whole_number(value: Any) -> int:
    """Accept 2, 2.0 or "2"; reject 2.5, booleans and non-numbers."""
    if isinstance(value, bool):
        raise ValueError(f"Not a whole number: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Not a whole number: {value!r}")
        return int(value)
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        number = float(text)
        if not number.is_integer():
            raise
        return int(number)


def validate_amount(amount: Money) -> None:
    """Raise ValidationError unless the per-unit amount is positive."""
    if not amount.is_positive():
        raise ValidationError(AMOUNT_ERROR)


def validate_quantity(quantity: int) -> None:
    """Raise ValidationError unless quantity is a whole number of at least 1."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError(QUANTITY_ERROR)


def validate_date(date: FinancialDate | None) -> None:
    """Raise ValidationError when no date was given."""
    if date is None:
        raise ValidationError(DATE_ERROR)


def validate_goal(goal: Money) -> None:
    """Raise ValidationError unless the goal is positive."""
    if not goal.is_positive():
        raise ValidationError(GOAL_ERROR)


def validate_transaction_fields(amount: Money, quantity: int, date: FinancialDate | None) -> None:
    """Validate all user-editable transaction fields, amount first."""
    validate_amount(amount)
    validate_quantity(quantity)
    validate_date(date)
