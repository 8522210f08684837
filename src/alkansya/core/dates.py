#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable date wrapper with consistent formatting for savings records.
Transactions carry a calendar date only; there is no time component.
"""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, date_format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse (surrounding whitespace ignored)
            date_format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object

        Raises:
            ValueError: If the value is not a string, is empty, or does not match the format
        """
        if not isinstance(date_str, str):
            raise ValueError(f"Not a date string: {date_str!r}")
        return cls(date=datetime.strptime(date_str.strip(), date_format).date())

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def to_display_string(self) -> str:
        """Format for listings, e.g. 'Jan 15, 2024'."""
        return f"{self.date:%b} {self.date.day}, {self.date.year}"

    def __str__(self) -> str:
        """String representation."""
        return self.to_iso_string()

    def __lt__(self, other: "FinancialDate") -> bool:
        """Less than comparison."""
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        """Less than or equal comparison."""
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        """Greater than comparison."""
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        """Greater than or equal comparison."""
        return self.date >= other.date

    def __repr__(self) -> str:
        """Repr format."""
        return f"FinancialDate(date={self.date!r})"
