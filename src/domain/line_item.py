"""Line item arithmetic

Pure functions: no session, no entity mutation.
"""

from dataclasses import dataclass
from decimal import Decimal
from src.domain.errors import InvalidQuantityError
from src.domain.money import Number, ZERO, non_negative, percent_of, round2, to_decimal
from src.domain.quote_line_item import QuoteDiscountType


@dataclass(frozen=True)
class LineAmounts:
    """Computed amounts of a single line"""
    line_total: Decimal
    tax_total: Decimal
    discount_amount: Decimal = ZERO


def compute_line_totals(quantity: Number, unit_price: Number, tax_rate: Number) -> LineAmounts:
    """
    Compute line and tax totals

    line_total = round2(quantity * unit_price)
    tax_total = round2(line_total * tax_rate / 100); a missing rate counts as 0
    """
    line_total = round2(to_decimal(quantity) * to_decimal(unit_price))
    return LineAmounts(line_total=line_total, tax_total=percent_of(line_total, tax_rate))


def compute_discount(base: Number, discount_type: QuoteDiscountType, discount_value: Number) -> Decimal:
    if discount_type == QuoteDiscountType.FIXED:
        return non_negative(discount_value)
    return non_negative(percent_of(base, discount_value))


def compute_discounted_line_totals(
    quantity: Number,
    unit_price: Number,
    tax_rate: Number,
    discount_type: QuoteDiscountType = QuoteDiscountType.PERCENT,
    discount_value: Number = None,
) -> LineAmounts:
    """
    Compute totals of a quote line

    The discount is taken off before tax and never drives the line below zero.
    The reported discount_amount is what was actually taken off.
    """
    base = round2(to_decimal(quantity) * to_decimal(unit_price))
    discount = compute_discount(base, discount_type, discount_value)
    line_total = non_negative(base - discount)
    return LineAmounts(
        line_total=line_total,
        tax_total=percent_of(line_total, tax_rate),
        discount_amount=round2(base - line_total),
    )


def normalize_fulfillment(quantity: Number, fulfilled: Number, strict: bool = False) -> Decimal:
    """
    Clamp a fulfilled or received quantity to [0, quantity]

    In strict mode an out-of-range value raises InvalidQuantityError instead.
    """
    ordered = max(to_decimal(quantity), Decimal("0"))
    value = to_decimal(fulfilled)

    if strict and (value < 0 or value > ordered):
        raise InvalidQuantityError(
            f"Quantity {value} is outside the allowed range [0, {ordered}]"
        )

    return min(max(value, Decimal("0")), ordered)
