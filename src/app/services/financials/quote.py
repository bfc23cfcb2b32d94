"""Quote totals sync

Quote status is never derived from totals; only explicit decisions move it.
"""

from typing import Any, Dict, List, Optional
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.repositories.quote_repository import QuoteRepository
from src.app.services.financials.base import Recalculable, SyncOutcome
from src.domain.document_type import DocumentType
from src.domain.line_item import LineAmounts, compute_discounted_line_totals
from src.domain.money import ZERO, round2, to_decimal
from src.domain.quote import Quote
from src.domain.quote_line_item import QuoteDiscountType
from src.domain.status_engine import next_quote_status
from src.domain.totals import calculate_document_totals


def _discount_type(value) -> QuoteDiscountType:
    if isinstance(value, QuoteDiscountType):
        return value
    try:
        return QuoteDiscountType(value or QuoteDiscountType.PERCENT.value)
    except ValueError:
        return QuoteDiscountType.PERCENT


def _snapshot(line: Dict[str, Any], amounts: LineAmounts) -> Dict[str, Any]:
    return {
        "sku": line.get("sku"),
        "name": line.get("name"),
        "quantity": str(to_decimal(line.get("quantity"))),
        "unit_price": str(round2(line.get("unit_price"))),
        "discount_type": _discount_type(line.get("discount_type")).value,
        "discount_value": str(round2(line.get("discount_value"))),
        "tax_rate": str(round2(line.get("tax_rate"))),
        "line_total": str(amounts.line_total),
        "tax_total": str(amounts.tax_total),
    }


class QuoteFinancials(Recalculable[Quote]):
    document_type = DocumentType.QUOTE

    def __init__(self, quote_repo: QuoteRepository, line_repo: LineItemRepository, history_repo, identity=None, clock=None):
        super().__init__(history_repo, identity, clock)
        self.quote_repo = quote_repo
        self.line_repo = line_repo

    async def recalculate(self, document_id: int, note: Optional[str] = None) -> SyncOutcome[Quote]:
        """
        Recompute quote totals and refresh the line_items snapshot

        subtotal is the sum of discounted line totals; discount_total reports
        the sum of line discounts and is not subtracted a second time.
        """
        quote = await self.quote_repo.get_by_id(document_id, for_update=True)
        if quote is None:
            raise self.not_found(document_id)

        rows = await self.line_repo.list_by_document(quote.id)
        amounts: List[LineAmounts] = []
        snapshot = []

        if rows:
            for line in rows:
                computed = compute_discounted_line_totals(
                    line.quantity, line.unit_price, line.tax_rate, line.discount_type, line.discount_value
                )
                if line.line_total != computed.line_total or line.tax_total != computed.tax_total:
                    line.line_total = computed.line_total
                    line.tax_total = computed.tax_total
                    await self.line_repo.update(line)
                amounts.append(computed)
                snapshot.append(_snapshot(
                    {
                        "sku": line.sku,
                        "name": line.name,
                        "quantity": line.quantity,
                        "unit_price": line.unit_price,
                        "discount_type": line.discount_type,
                        "discount_value": line.discount_value,
                        "tax_rate": line.tax_rate,
                    },
                    computed,
                ))
        else:
            for item in quote.line_items or []:
                computed = compute_discounted_line_totals(
                    item.get("quantity", 0),
                    item.get("unit_price", 0),
                    item.get("tax_rate", 0),
                    _discount_type(item.get("discount_type")),
                    item.get("discount_value"),
                )
                amounts.append(computed)
                snapshot.append(_snapshot(item, computed))

        totals = calculate_document_totals(amounts)

        quote.subtotal = totals.subtotal
        quote.discount_total = round2(sum((a.discount_amount for a in amounts), ZERO))
        quote.tax_total = totals.tax_total
        quote.total = totals.total
        quote.line_items = snapshot
        quote.status = next_quote_status(quote.status)

        await self.quote_repo.update(quote)
        return SyncOutcome(quote)
