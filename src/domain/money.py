"""Money and rounding helpers

All monetary values are Decimal, stored and compared at 2 decimal places.
Rounding is half away from zero.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, int, float, str, None]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")


def to_decimal(value: Number) -> Decimal:
    """Coerce a stored or user-supplied number to Decimal (None -> 0)"""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() keeps 19.99 as 19.99 instead of its binary expansion
        return Decimal(str(value))
    return Decimal(value)


def round2(value: Number) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def percent_of(base: Number, rate_percent: Number) -> Decimal:
    return round2(to_decimal(base) * to_decimal(rate_percent) / HUNDRED)


def non_negative(value: Number) -> Decimal:
    amount = round2(value)
    return amount if amount > ZERO else ZERO
