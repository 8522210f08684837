#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer centavos internally.
Prevents floating-point errors and provides type-safe currency operations.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import (
    centavos_to_json_number,
    centavos_to_pesos_str,
    centavos_to_plain_str,
    format_centavos,
    parse_pesos_to_centavos,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in centavos (PHP).

    Savings deposits are always positive; Money itself also holds zero,
    which is what an empty ledger balances to.

    Examples:
        >>> deposit = Money.from_pesos("50.00")
        >>> str(deposit * 2)
        '₱100.00'
        >>> (deposit * 2).to_cents()
        10000
        >>> Money.zero() + deposit
        Money(cents=5000)
    """

    cents: int

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from centavos."""
        return cls(cents=cents)

    @classmethod
    def from_pesos(cls, pesos: str | int | float | Decimal) -> "Money":
        """
        Parse from a peso amount like '₱1,234.50', '50', a JSON number or a Decimal.

        Raises:
            ValueError: If the amount is not a finite number
        """
        return cls(cents=parse_pesos_to_centavos(pesos))

    @classmethod
    def zero(cls) -> "Money":
        """Zero pesos."""
        return cls(cents=0)

    def to_cents(self) -> int:
        """Get value in centavos."""
        return self.cents

    def to_fixed_str(self) -> str:
        """Two-decimal number string without symbol, e.g. '50.00'."""
        return centavos_to_pesos_str(self.cents)

    def to_plain_str(self) -> str:
        """Shortest number string without symbol, e.g. '1500' or '12.50'."""
        return centavos_to_plain_str(self.cents)

    def to_json(self) -> int | float:
        """JSON number for persisted state."""
        return centavos_to_json_number(self.cents)

    def format(self, symbol: str | None = None) -> str:
        """Display string with a custom currency symbol."""
        if symbol is None:
            return str(self)
        return format_centavos(self.cents, symbol)

    def is_positive(self) -> bool:
        """True when strictly greater than zero."""
        return self.cents > 0

    def is_zero(self) -> bool:
        """True when exactly zero."""
        return self.cents == 0

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(cents=self.cents * scalar)

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.cents == other.cents

    def __hash__(self) -> int:
        return hash(self.cents)

    def __lt__(self, other: "Money") -> bool:
        """Less than comparison."""
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        """Less than or equal comparison."""
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        """Greater than comparison."""
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        """Greater than or equal comparison."""
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as peso string."""
        return format_centavos(self.cents)

    def __repr__(self) -> str:
        """Repr format."""
        return f"Money(cents={self.cents})"
