#!/usr/bin/env python3
"""
Key-Value Store Protocol - Storage abstraction for persisted application state.

The ledger persists a single JSON-compatible blob under a fixed key. Stores
only need to map keys to JSON values; the ledger decides what the blob means.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

from .json_utils import format_json, parse_json, read_json, write_json

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """
    Protocol for key-value persistence of JSON-compatible values.

    Implementations must make set() durable before returning: the ledger
    treats a returned set() as a completed write.
    """

    def get(self, key: str) -> Any | None:
        """
        Load the value stored under key.

        Returns:
            Parsed JSON value, or None if nothing is stored

        Raises:
            ValueError: If the stored value cannot be parsed
            OSError: If the store cannot be read
        """
        ...

    def set(self, key: str, value: Any) -> None:
        """
        Store value under key, replacing any previous value.

        Raises:
            OSError: If the store cannot be written
            TypeError: If value is not JSON-serializable
        """
        ...


class JsonFileStore:
    """
    Key-value store backed by one pretty-printed JSON file per key.

    Files live at <data_dir>/<key>.json and are replaced atomically on write.
    """

    def __init__(self, data_dir: Path):
        """
        Initialize file store.

        Args:
            data_dir: Directory holding the JSON files (created on first write)
        """
        self.data_dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        """File that holds the value for key."""
        return self.data_dir / f"{key}.json"

    def exists(self, key: str) -> bool:
        """True if a file has been written for key."""
        return self.path_for(key).exists()

    def get(self, key: str) -> Any | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return read_json(path)

    def set(self, key: str, value: Any) -> None:
        path = self.path_for(key)
        write_json(path, value)
        logger.debug(f"Wrote {key} to {path}")

    def last_modified(self, key: str) -> datetime | None:
        """Get timestamp of the file for key, or None if it doesn't exist."""
        path = self.path_for(key)
        if not path.exists():
            return None
        return datetime.fromtimestamp(path.stat().st_mtime)

    def size_bytes(self, key: str) -> int | None:
        """Get size of the file for key in bytes, or None if it doesn't exist."""
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.stat().st_size


class MemoryStore:
    """
    In-memory key-value store.

    Values are held in their serialized JSON form, so get() hands back a fresh
    copy and unserializable values fail on set() just as they would on disk.
    """

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> Any | None:
        if key not in self._values:
            return None
        return parse_json(self._values[key])

    def set(self, key: str, value: Any) -> None:
        self._values[key] = format_json(value)

    def set_raw(self, key: str, text: str) -> None:
        """Store text as-is, bypassing serialization."""
        self._values[key] = text
