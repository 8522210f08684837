#!/usr/bin/env python3
"""
Ledger Error Types

Every failure a ledger operation can report. Each error carries a message that
is safe to show to the user as-is. No error is fatal: callers catch
LedgerError, show the message, and carry on with the unchanged state.
"""


class LedgerError(Exception):
    """Base class for all recoverable ledger failures."""


class ValidationError(LedgerError):
    """Bad amount, quantity, date or goal input. State is unchanged."""


class NotFoundError(LedgerError):
    """An edit or delete referenced a transaction id that does not exist."""

    def __init__(self, transaction_id: str):
        super().__init__(f"Transaction not found: {transaction_id}")
        self.transaction_id = transaction_id


class NoOpError(LedgerError):
    """The requested operation would change nothing (e.g. emptying an empty ledger)."""


class ImportParseError(LedgerError):
    """A CSV import recovered no usable transactions."""


class PersistenceError(LedgerError):
    """
    Saving state to the store failed.

    The in-memory state already reflects the operation and remains the source
    of truth for the session.
    """
