"""
Core Utilities Package

Primitives and services shared by the ledger and the CLI.

This package provides:
- Currency handling with integer centavo arithmetic
- Transaction and ledger state models with validation
- The error taxonomy for ledger operations
- Key-value storage for persisted state
- Configuration management for environment-specific settings
"""

from .config import (
    Config,
    Environment,
    get_config,
    reload_config,
)
from .currency import (
    centavos_to_pesos_str,
    format_centavos,
    parse_decimal,
    parse_pesos_to_centavos,
)
from .datastore import JsonFileStore, KeyValueStore, MemoryStore
from .dates import FinancialDate
from .errors import (
    ImportParseError,
    LedgerError,
    NoOpError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from .models import DEFAULT_GOAL, LedgerState, Theme, Transaction
from .money import Money

__all__ = [
    # Configuration
    "Config",
    "DEFAULT_GOAL",
    "Environment",
    "FinancialDate",
    "ImportParseError",
    "JsonFileStore",
    "KeyValueStore",
    # Errors
    "LedgerError",
    # Data models
    "LedgerState",
    "MemoryStore",
    "Money",
    "NoOpError",
    "NotFoundError",
    "PersistenceError",
    "Theme",
    "Transaction",
    "ValidationError",
    # Currency utilities
    "centavos_to_pesos_str",
    "format_centavos",
    "get_config",
    "parse_decimal",
    "parse_pesos_to_centavos",
    "reload_config",
]
