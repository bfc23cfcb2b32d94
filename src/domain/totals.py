"""Document totals calculator

Aggregates line amounts into document totals. Shared by invoices, orders,
quotes and purchase orders.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Tuple
from src.domain.line_item import LineAmounts
from src.domain.money import Number, ZERO, non_negative, percent_of, round2, to_decimal


@dataclass(frozen=True)
class DocumentTotals:
    subtotal: Decimal
    discount_total: Decimal
    tax_total: Decimal
    late_fee: Decimal
    freight_total: Decimal
    fee_total: Decimal
    total: Decimal


def sum_lines(lines: Iterable[LineAmounts]) -> Tuple[Decimal, Decimal]:
    """Return (subtotal, tax_total); each line is already rounded"""
    subtotal = ZERO
    tax_total = ZERO
    for line in lines:
        subtotal += line.line_total
        tax_total += line.tax_total
    return round2(subtotal), round2(tax_total)


def calculate_late_fee(
    subtotal: Number,
    discount_total: Number,
    tax_total: Number,
    paid_to_date: Number,
    late_fee_rate: Number,
    is_overdue: bool,
    current_amount: Number,
    applied_at: Optional[datetime],
    now: datetime,
) -> Tuple[Decimal, Optional[datetime]]:
    """
    Late fee of a document, applied at most once

    Returns (fee, applied_at). The fee is computed only when the document is
    overdue, the rate is positive and no fee has been applied yet; otherwise
    the stored amount is returned unchanged.
    """
    if to_decimal(late_fee_rate) <= 0 or not is_overdue or applied_at is not None:
        return round2(current_amount), applied_at

    base = non_negative(
        to_decimal(subtotal) - to_decimal(discount_total) + to_decimal(tax_total) - to_decimal(paid_to_date)
    )
    return percent_of(base, late_fee_rate), now


def calculate_document_totals(
    lines: Iterable[LineAmounts],
    discount_total: Number = None,
    late_fee: Number = None,
    freight_total: Number = None,
    fee_total: Number = None,
) -> DocumentTotals:
    """total = max(round2(subtotal - discount + tax + late fee + freight + fees), 0)"""
    subtotal, tax_total = sum_lines(lines)
    discount = round2(discount_total)
    fee = round2(late_fee)
    freight = round2(freight_total)
    fees = round2(fee_total)

    total = non_negative(subtotal - discount + tax_total + fee + freight + fees)

    return DocumentTotals(
        subtotal=subtotal,
        discount_total=discount,
        tax_total=tax_total,
        late_fee=fee,
        freight_total=freight,
        fee_total=fees,
        total=total,
    )


def calculate_balance_due(total: Number, settled: Number) -> Decimal:
    """balance = max(round2(total - settled), 0)"""
    return non_negative(to_decimal(total) - to_decimal(settled))
