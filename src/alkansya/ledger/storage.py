#!/usr/bin/env python3
"""
Ledger State Persistence

Loads and saves the whole LedgerState as a single JSON blob under a fixed key.
Loading never fails: missing or corrupt state falls back to the defaults.
"""

import logging

from ..core.datastore import KeyValueStore
from ..core.errors import LedgerError, PersistenceError
from ..core.models import DEFAULT_GOAL, LedgerState
from ..core.money import Money

logger = logging.getLogger(__name__)

STATE_KEY = "alkansya_state"


def default_state(goal: Money = DEFAULT_GOAL) -> LedgerState:
    """Fresh state: no transactions, empty vault, light theme."""
    return LedgerState(goal=goal)


def load_state(store: KeyValueStore, key: str = STATE_KEY, default_goal: Money = DEFAULT_GOAL) -> LedgerState:
    """
    Load ledger state from the store.

    Args:
        store: Key-value store holding the state blob
        key: Key the blob is stored under
        default_goal: Goal to use when nothing usable is stored

    Returns:
        The stored state, or default state if it is absent or corrupt
    """
    try:
        data = store.get(key)
    except (OSError, ValueError) as e:
        logger.warning(f"Discarding unreadable ledger state under {key!r}: {e}")
        return default_state(default_goal)

    if data is None:
        logger.info(f"No saved ledger state under {key!r}, starting fresh")
        return default_state(default_goal)

    try:
        state = LedgerState.from_dict(data)
    except (KeyError, TypeError, ValueError, LedgerError) as e:
        logger.warning(f"Discarding corrupt ledger state under {key!r}: {e}")
        return default_state(default_goal)

    logger.debug(f"Loaded {len(state.transactions)} transactions from {key!r}")
    return state


def save_state(store: KeyValueStore, state: LedgerState, key: str = STATE_KEY) -> None:
    """
    Write ledger state to the store.

    Raises:
        PersistenceError: If the store rejects the write
    """
    try:
        store.set(key, state.to_dict())
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Failed to save ledger state under {key!r}: {e}")
        raise PersistenceError(f"Could not save your savings data: {e}") from e
