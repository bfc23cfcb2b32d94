"""Unit tests for line item arithmetic"""

import pytest
from decimal import Decimal

from src.domain.errors import InvalidQuantityError
from src.domain.line_item import (
    compute_discounted_line_totals,
    compute_line_totals,
    normalize_fulfillment,
)
from src.domain.quote_line_item import QuoteDiscountType


class TestComputeLineTotals:
    """Test line and tax totals"""

    def test_quantity_price_and_tax(self):
        # Act
        amounts = compute_line_totals(Decimal("3"), Decimal("19.99"), Decimal("8.25"))

        # Assert
        assert amounts.line_total == Decimal("59.97")
        assert amounts.tax_total == Decimal("4.95")
        assert amounts.discount_amount == Decimal("0.00")

    def test_missing_tax_rate_counts_as_zero(self):
        amounts = compute_line_totals(Decimal("2"), Decimal("10.00"), None)

        assert amounts.line_total == Decimal("20.00")
        assert amounts.tax_total == Decimal("0.00")

    def test_tax_uses_rounded_line_total(self):
        # 1.5 * 3.335 = 5.0025 -> 5.00, tax 10% of 5.00
        amounts = compute_line_totals(Decimal("1.5"), Decimal("3.335"), Decimal("10"))

        assert amounts.line_total == Decimal("5.00")
        assert amounts.tax_total == Decimal("0.50")


class TestComputeDiscountedLineTotals:
    """Test quote line discounts"""

    def test_percent_discount_before_tax(self):
        # Act
        amounts = compute_discounted_line_totals(
            Decimal("2"), Decimal("50.00"), Decimal("10"),
            QuoteDiscountType.PERCENT, Decimal("10"),
        )

        # Assert
        assert amounts.line_total == Decimal("90.00")
        assert amounts.discount_amount == Decimal("10.00")
        assert amounts.tax_total == Decimal("9.00")

    def test_fixed_discount(self):
        amounts = compute_discounted_line_totals(
            Decimal("1"), Decimal("80.00"), None,
            QuoteDiscountType.FIXED, Decimal("15.50"),
        )

        assert amounts.line_total == Decimal("64.50")
        assert amounts.discount_amount == Decimal("15.50")

    def test_discount_never_drives_line_below_zero(self):
        amounts = compute_discounted_line_totals(
            Decimal("1"), Decimal("20.00"), Decimal("5"),
            QuoteDiscountType.FIXED, Decimal("35.00"),
        )

        assert amounts.line_total == Decimal("0.00")
        assert amounts.discount_amount == Decimal("20.00")
        assert amounts.tax_total == Decimal("0.00")


class TestNormalizeFulfillment:
    """Test fulfilled / received quantity clamping"""

    def test_clamps_above_ordered_quantity(self):
        assert normalize_fulfillment(Decimal("10"), Decimal("12")) == Decimal("10")

    def test_clamps_negative_to_zero(self):
        assert normalize_fulfillment(Decimal("10"), Decimal("-3")) == Decimal("0")

    def test_in_range_value_is_kept(self):
        assert normalize_fulfillment(Decimal("10"), Decimal("4.5")) == Decimal("4.5")

    def test_strict_mode_rejects_out_of_range(self):
        with pytest.raises(InvalidQuantityError) as exc_info:
            normalize_fulfillment(Decimal("10"), Decimal("12"), strict=True)

        assert exc_info.value.code == "INVALID_QUANTITY"

    def test_strict_mode_accepts_boundaries(self):
        assert normalize_fulfillment(Decimal("10"), Decimal("10"), strict=True) == Decimal("10")
        assert normalize_fulfillment(Decimal("10"), Decimal("0"), strict=True) == Decimal("0")
