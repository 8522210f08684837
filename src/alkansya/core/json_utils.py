#!/usr/bin/env python3
"""
JSON Utilities Module

Centralized JSON reading and writing with consistent formatting.
Persisted state goes through these helpers so that files stay pretty-printed
and are replaced atomically.
"""

import json
import os
from pathlib import Path
from typing import Any


def write_json(filepath: str | Path, data: Any, ensure_ascii: bool = False, sort_keys: bool = False) -> None:
    """
    Write data to a JSON file with standard pretty-printing.

    The content is written to a sibling temp file first and then moved over
    the target, so a failed write never leaves a truncated file behind.

    Args:
        filepath: Path to the JSON file
        data: Data to write to the file
        ensure_ascii: If True, escape non-ASCII characters (default: False)
        sort_keys: If True, sort dictionary keys (default: False)
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    tmp_path = filepath.with_suffix(filepath.suffix + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=ensure_ascii, sort_keys=sort_keys)
    os.replace(tmp_path, filepath)


def read_json(filepath: str | Path) -> Any:
    """
    Read data from a JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        The parsed JSON data
    """
    with open(filepath, encoding="utf-8") as f:
        return json.load(f)


def format_json(data: Any, ensure_ascii: bool = False, sort_keys: bool = False) -> str:
    """
    Format data as a pretty-printed JSON string.

    Args:
        data: Data to format
        ensure_ascii: If True, escape non-ASCII characters (default: False)
        sort_keys: If True, sort dictionary keys (default: False)

    Returns:
        Pretty-printed JSON string
    """
    return json.dumps(data, indent=2, ensure_ascii=ensure_ascii, sort_keys=sort_keys)


def parse_json(text: str) -> Any:
    """Parse a JSON document held in a string."""
    return json.loads(text)
