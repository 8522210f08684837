#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

Currency handling for the Alkansya savings tracker.
All financial calculations use integer arithmetic to avoid floating-point errors.

Currency Systems:
- Internal calculations use centavos: 100 centavos = ₱1.00
- Persisted state and CSV files use plain decimal numbers: 1234.5
- Display uses locale-grouped peso strings: "₱1,234.50"

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Parse user and file input through Decimal, never float
- Reject input that is not a finite number instead of guessing
"""

from decimal import Decimal, InvalidOperation

DEFAULT_CURRENCY_SYMBOL = "₱"

# Largest accepted magnitude is just under 10**MAX_DIGITS pesos
MAX_DIGITS = 15


def parse_decimal(value: str | int | float | Decimal) -> Decimal:
    """
    Parse a number from user input, a CSV cell or a JSON value.

    Accepts an optional currency symbol and thousands separators.

    Args:
        value: Text like "₱1,234.50", "50", "0.25", or a JSON number

    Returns:
        Finite Decimal value

    Raises:
        ValueError: If the value is empty, not a number, not finite, or too large
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        # str() keeps the shortest repr, so 0.1 parses as Decimal("0.1")
        result = Decimal(str(value))
    else:
        clean = str(value).replace(DEFAULT_CURRENCY_SYMBOL, "").replace("$", "").replace(",", "").strip()
        if not clean:
            raise ValueError("Empty number")
        try:
            result = Decimal(clean)
        except InvalidOperation as e:
            raise ValueError(f"Not a number: {value!r}") from e

    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    if result and result.adjusted() >= MAX_DIGITS:
        raise ValueError(f"Number too large: {value!r}")
    return result


def decimal_to_centavos(amount: Decimal) -> int:
    """
    Convert a decimal peso amount to integer centavos.

    Fractions of a centavo are truncated toward zero.

    Example:
        decimal_to_centavos(Decimal("12.345")) -> 1234
    """
    try:
        return int(amount * 100)
    except ArithmeticError as e:
        raise ValueError(f"Amount out of range: {amount}") from e


def parse_pesos_to_centavos(value: str | int | float | Decimal) -> int:
    """
    Parse a peso amount to centavos.

    Examples:
        parse_pesos_to_centavos("12.34") -> 1234
        parse_pesos_to_centavos("₱1,234.56") -> 123456
        parse_pesos_to_centavos(50) -> 5000
    """
    return decimal_to_centavos(parse_decimal(value))


def centavos_to_decimal(centavos: int) -> Decimal:
    """Convert centavos to an exact Decimal peso value with two places."""
    return Decimal(centavos).scaleb(-2)


def centavos_to_pesos_str(centavos: int) -> str:
    """
    Convert centavos to a fixed two-decimal string using integer arithmetic.

    Example:
        centavos_to_pesos_str(4599) -> "45.99"
    """
    is_negative = centavos < 0
    abs_centavos = abs(int(centavos))

    pesos = abs_centavos // 100
    remainder = abs_centavos % 100

    if is_negative:
        return f"-{pesos}.{remainder:02d}"
    return f"{pesos}.{remainder:02d}"


def centavos_to_plain_str(centavos: int) -> str:
    """
    Convert centavos to the shortest plain number string.

    Whole amounts drop the fraction; others keep two places.

    Examples:
        centavos_to_plain_str(150000) -> "1500"
        centavos_to_plain_str(150050) -> "1500.50"
    """
    if centavos % 100 == 0:
        return str(centavos // 100)
    return centavos_to_pesos_str(centavos)


def centavos_to_json_number(centavos: int) -> int | float:
    """Convert centavos to a JSON-friendly number (int when whole)."""
    if centavos % 100 == 0:
        return centavos // 100
    return float(centavos_to_decimal(centavos))


def format_centavos(centavos: int, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """
    Format centavos for display with a currency symbol and digit grouping.

    Examples:
        format_centavos(123456) -> "₱1,234.56"
        format_centavos(-500) -> "-₱5.00"
    """
    sign = "-" if centavos < 0 else ""
    abs_centavos = abs(int(centavos))
    return f"{sign}{symbol}{abs_centavos // 100:,}.{abs_centavos % 100:02d}"


def format_percentage(value: Decimal) -> str:
    """Format a progress percentage with one decimal place, e.g. "42.5%"."""
    return f"{value:.1f}%"
