#!/usr/bin/env python3
"""
CSV Export/Import for the Savings Ledger

File layout:

    Date,Amount,Quantity,Total,Note
    "2024-01-15","50.00","2","100.00","lunch money"

    Vault Total,1500
    Goal,10000

Every transaction field is written inside double quotes, verbatim. There is no
escaping, so a note containing a double quote does not survive a round trip;
commas inside a quoted note are fine. Line breaks in a note are written as
spaces so that every transaction stays on one line.

Decoding is lenient by contract: rows that cannot be turned into a valid
transaction are skipped and counted, never raised. The Total column is only
informational and is recomputed from amount and quantity.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..core.currency import parse_decimal
from ..core.dates import FinancialDate
from ..core.errors import LedgerError
from ..core.models import LedgerState, Transaction
from ..core.money import Money

logger = logging.getLogger(__name__)

HEADER = ("Date", "Amount", "Quantity", "Total", "Note")
VAULT_PREFIX = "Vault Total,"
GOAL_PREFIX = "Goal,"
MIN_ROW_FIELDS = 4


@dataclass
class ImportResult:
    """What decode() could recover from a CSV document."""

    transactions: list[Transaction] = field(default_factory=list)
    vault_total: Money | None = None
    goal: Money | None = None
    skipped_rows: int = 0
    line_count: int = 0

    @property
    def is_empty(self) -> bool:
        """True when no transaction row was usable."""
        return not self.transactions


def export_filename(day: FinancialDate | None = None) -> str:
    """Default export file name, e.g. 'alkansya-2024-01-15.csv'."""
    day = day or FinancialDate.today()
    return f"alkansya-{day.to_iso_string()}.csv"


def _single_line(text: str) -> str:
    # Same line boundaries decode() splits on
    return " ".join(text.splitlines())


def encode(state: LedgerState) -> str:
    """
    Serialize transactions plus vault and goal metadata to CSV text.

    Transactions are written in the order they were recorded.
    """
    lines = [",".join(HEADER)]
    for t in state.transactions.values():
        note = _single_line(t.note)
        cells = (t.date.to_iso_string(), t.amount.to_fixed_str(), str(t.quantity), t.total.to_fixed_str(), note)
        lines.append(",".join(f'"{cell}"' for cell in cells))

    lines.append("")
    lines.append(f"{VAULT_PREFIX}{state.vault_total.to_plain_str()}")
    lines.append(f"{GOAL_PREFIX}{state.goal.to_plain_str()}")
    return "\n".join(lines) + "\n"


def split_fields(line: str) -> list[str]:
    """
    Split one CSV line into fields.

    A field is either a double-quoted run, which ends at the next double quote
    and may contain commas, or an unquoted run up to the next comma (stripped
    of surrounding whitespace). Text between a closing quote and the next comma
    is dropped. An unterminated quote takes the rest of the line.

    Examples:
        split_fields('"2024-01-15","50","2"') -> ['2024-01-15', '50', '2']
        split_fields('a, b ,"c,d"') -> ['a', 'b', 'c,d']
    """
    fields: list[str] = []
    length = len(line)
    pos = 0

    while True:
        start = pos
        while start < length and line[start] in " \t":
            start += 1

        if start < length and line[start] == '"':
            close = line.find('"', start + 1)
            if close == -1:
                fields.append(line[start + 1 :])
                return fields
            fields.append(line[start + 1 : close])
            comma = line.find(",", close + 1)
        else:
            comma = line.find(",", pos)
            fields.append((line[pos:] if comma == -1 else line[pos:comma]).strip())

        if comma == -1:
            return fields
        pos = comma + 1


def _is_header(line: str) -> bool:
    return split_fields(line)[0].lower() == HEADER[0].lower()


def _parse_metadata_value(rest: str) -> Money | None:
    """Value of a 'Vault Total,' / 'Goal,' line, or None if it isn't a number."""
    cells = split_fields(rest)
    try:
        return Money.from_pesos(cells[0])
    except ValueError:
        return None


def _parse_quantity(text: str) -> int:
    value = parse_decimal(text)
    if value != value.to_integral_value():
        raise ValueError(f"Not a whole number: {text!r}")
    return int(value)


def parse_row(line: str) -> Transaction | None:
    """
    Turn one data line into a Transaction with a fresh id.

    Returns:
        The transaction, or None if the row is unusable
    """
    fields = split_fields(line)
    if len(fields) < MIN_ROW_FIELDS:
        return None

    date_text = fields[0].strip()
    if not date_text:
        return None

    note = fields[4] if len(fields) > 4 else ""
    try:
        date = FinancialDate.from_string(date_text)
        amount = Money.from_pesos(fields[1])
        quantity = _parse_quantity(fields[2])
        return Transaction.create(amount, quantity, note, date)
    except (ValueError, LedgerError):
        return None


def decode(text: str) -> ImportResult:
    """
    Parse CSV text produced by encode() (or edited by hand).

    Never raises on malformed content: unusable rows are skipped and counted
    in ImportResult.skipped_rows. Metadata values that aren't valid numbers
    (or are out of range) are ignored.
    """
    result = ImportResult()
    lines = [line for line in text.lstrip("\ufeff").splitlines() if line.strip()]
    result.line_count = len(lines)

    for line_number, line in enumerate(lines, start=1):
        if line_number == 1 and _is_header(line):
            continue

        if line.startswith(VAULT_PREFIX):
            vault_total = _parse_metadata_value(line[len(VAULT_PREFIX) :])
            if vault_total is not None and vault_total >= Money.zero():
                result.vault_total = vault_total
            continue

        if line.startswith(GOAL_PREFIX):
            goal = _parse_metadata_value(line[len(GOAL_PREFIX) :])
            if goal is not None and goal.is_positive():
                result.goal = goal
            continue

        transaction = parse_row(line)
        if transaction is None:
            logger.debug(f"Skipping unusable CSV row {line_number}: {line!r}")
            result.skipped_rows += 1
            continue
        result.transactions.append(transaction)

    logger.info(f"Decoded {len(result.transactions)} transactions from CSV ({result.skipped_rows} rows skipped)")
    return result


def write_csv(path: str | Path, state: LedgerState) -> Path:
    """Write encode(state) to path, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(encode(state))
    logger.info(f"Exported {len(state.transactions)} transactions to {path}")
    return path


def read_csv(path: str | Path) -> ImportResult:
    """
    Read and decode a CSV file.

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not UTF-8 text
    """
    with open(path, encoding="utf-8-sig") as f:
        return decode(f.read())
