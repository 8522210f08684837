"""
Ledger Package

The savings ledger and its file format.

Components:
- LedgerManager: Owns state, validates and applies every mutation, writes through to storage
- csv_codec: CSV export and lenient CSV import
- LedgerActions: Form-input parsing, confirmations and messages for user interfaces
"""

from .actions import LedgerActions
from .csv_codec import ImportResult, decode, encode
from .manager import LedgerManager, LedgerSnapshot
from .storage import STATE_KEY, load_state, save_state

__all__ = [
    "ImportResult",
    "LedgerActions",
    "LedgerManager",
    "LedgerSnapshot",
    "STATE_KEY",
    "decode",
    "encode",
    "load_state",
    "save_state",
]
