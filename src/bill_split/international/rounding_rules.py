"""Cent rounding for split amounts."""
from __future__ import annotations
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")

# A line's two shares may miss its rounded total by this much
SPLIT_TOLERANCE = 0.01


def round_currency(value: float) -> float:
    """Round to 2 decimals, halves away from zero (2.675 → 2.68, -2.675 → -2.68).

    Goes through the shortest repr of the float so a value printed as
    ``2.675`` is treated as an exact half even though its binary form is
    slightly below it.
    """
    return float(Decimal(repr(value)).quantize(CENT, rounding=ROUND_HALF_UP))


def is_within_tolerance(expected: float, actual: float, tolerance: float = SPLIT_TOLERANCE) -> bool:
    """Check if variance is within acceptable rounding tolerance."""
    return abs(expected - actual) <= tolerance + 1e-9
