"""Decimal helpers shared by all calculation modules.

Every monetary value in the engine is a Decimal. Rounding to the cent is
commercial rounding (half-up), the convention used on German tax
assessments and bank statements.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    """Convert ints, floats, strings or None to Decimal.

    Floats go through str() so 0.035 stays 0.035 and does not become
    0.0350000000000000033306690738754696.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_cents(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half-up (0.005 → 0.01)."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def sum_decimals(values) -> Decimal:
    return sum((to_decimal(v) for v in values), ZERO)
