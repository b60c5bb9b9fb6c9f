"""
Fixed-point money helpers.

All monetary arithmetic in PrintShop Desk is done on decimal.Decimal.
Values are quantized to cents (half-up) only where a figure is stored or
shown: line totals, tax, and serialized output.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value: Any) -> Decimal:
    """
    Convert user or database input to Decimal.

    Floats go through str() so 0.1 becomes Decimal("0.1"), not its binary
    expansion. Booleans are rejected even though they are ints.

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Not a number: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def quantize(value: Decimal) -> Decimal:
    """Round to two fraction digits, half-up."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def money_sum(values: Iterable[Decimal]) -> Decimal:
    return quantize(sum(values, ZERO))


def money_str(value: Any) -> str:
    """Serialize as a fixed-point string with two fraction digits ("7.15")."""
    return str(quantize(to_decimal(value)))


def format_money(value: Any, symbol: str = "$") -> str:
    """Presentation format used on receipts and reports: "$1,234.50", "-$17.85"."""
    amount = quantize(to_decimal(value))
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
