"""
Rounding helpers shared by the pricing services.

Python's round() uses banker's rounding; prices use half-up rounding so that
114.5 credits becomes 115, matching what clients display.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[int, float, Decimal]


def to_decimal(value: Number) -> Decimal:
    """Convert through str() so 0.1 stays 0.1 instead of its binary expansion."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Number) -> int:
    """Round to the nearest whole number, halves away from zero."""
    return int(to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_cents(value: Number) -> float:
    """Round a dollar amount to two decimal places, halves away from zero."""
    return float(to_decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
