"""
Alkansya - Personal Savings Tracker

Record cash deposits toward a savings goal, move the accumulated balance into
a vault, and export or import the transaction history as CSV.

Packages:
- core: Money and date primitives, data models, storage, configuration
- ledger: The ledger manager, CSV codec, and user-facing actions
- cli: Command-line interface

Example Usage:
    from alkansya.core import JsonFileStore, Money
    from alkansya.ledger import LedgerManager

    ledger = LedgerManager.load(JsonFileStore(data_dir))
    ledger.add_transaction(Money.from_pesos(50), 2, "lunch money", "2024-01-15")
    ledger.current_balance()  # Money(cents=10000)
"""

__version__ = "0.1.0"
__author__ = "Alkansya Developers"

from .core.errors import LedgerError
from .core.models import LedgerState, Transaction
from .core.money import Money
from .ledger.manager import LedgerManager

__all__ = [
    "LedgerError",
    "LedgerManager",
    "LedgerState",
    "Money",
    "Transaction",
]
