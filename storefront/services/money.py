"""
Money Utilities - Decimal operations for prices and cart totals.

Catalog prices arrive as JSON floats; everything past the parsing
boundary is Decimal.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Iterable, Union

Number = Union[str, int, float, Decimal]

# Two decimal places for display and totals
MONEY_PRECISION = Decimal("0.01")

ZERO = Decimal("0")

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Floats go through str() so 0.1 stays 0.1. None and unparsable
    values become Decimal("0").
    """
    if value is None:
        return ZERO

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return ZERO


def round_money(value: Number) -> Decimal:
    """Round a monetary value to cents."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def multiply(value: Number, factor: Number) -> Decimal:
    """Multiply a monetary value by a factor (e.g. a quantity)."""
    return to_decimal(value) * to_decimal(factor)


def sum_money(values: Iterable[Number]) -> Decimal:
    """Sum monetary values; an empty iterable sums to Decimal("0")."""
    total = ZERO
    for value in values:
        total += to_decimal(value)
    return total


def format_money(value: Number, currency: str = "USD") -> str:
    """
    Format monetary value with currency symbol.

    >>> format_money(Decimal("1234.5"))
    '$1,234.50'
    """
    formatted = f"{round_money(value):,.2f}"
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol is None:
        return f"{formatted} {currency}"
    return f"{symbol}{formatted}"


def to_float(value: Number) -> float:
    """
    Convert to float for JSON responses.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))
