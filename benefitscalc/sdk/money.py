"""Currency rounding and cents conversion.

Calculations run on unrounded floats. These helpers are applied once, where
amounts leave the engine.
"""

from decimal import Decimal, ROUND_HALF_UP
import math

_CENT = Decimal("0.01")


def round_money(amount: float) -> float:
    """Round to cents, half-up (2.345 -> 2.35, -2.345 -> -2.35).

    Uses the shortest decimal representation of the float, so values that
    print as an exact half cent round up rather than being pulled down by
    binary representation error. Non-finite values become 0.
    """
    if amount is None or not math.isfinite(amount):
        return 0.0
    rounded = Decimal(repr(float(amount))).quantize(_CENT, rounding=ROUND_HALF_UP)
    # Avoid -0.0 in output
    return float(rounded) + 0.0


def to_cents(amount: float) -> int:
    """Convert dollars to integer cents (half-up)."""
    if amount is None or not math.isfinite(amount):
        return 0
    return int(Decimal(repr(float(amount))).scaleb(2).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_cents(cents: int) -> float:
    """Convert integer cents to dollars."""
    return round_money((cents or 0) / 100)


def format_usd(amount: float) -> str:
    """Format dollars for display (e.g., '$1,234.50', '-$12.00')."""
    value = round_money(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"
