"""
Currency and ratio helpers.

Amounts are kept as Decimal so that totals add up to the cent.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[int, float, str, Decimal]

CENT = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without binary float artifacts.

    Floats go through their shortest repr, so 0.18 becomes Decimal("0.18")
    and not 0.179999...
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Boolean is not a valid amount")
    return Decimal(str(value))


def quantize_currency(value: Number) -> Decimal:
    """Round an amount to whole cents, half-up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def percentage(part: Number, whole: Number) -> float:
    """Share of ``part`` in ``whole`` as a percentage.

    An empty population or zero allocation yields 0.0 rather than a
    division error.
    """
    denominator = to_decimal(whole)
    if denominator == 0:
        return 0.0
    return float(to_decimal(part) * 100 / denominator)
