"""Order financials sync"""

from typing import Any, Dict, List, Optional, Tuple
from src.app.repositories.invoice_payment_repository import InvoicePaymentRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.services.financials.base import Recalculable, SyncOutcome
from src.domain.document_type import DocumentType
from src.domain.line_item import LineAmounts, compute_line_totals, normalize_fulfillment
from src.domain.money import round2, to_decimal
from src.domain.order import Order, OrderFulfillmentStatus, OrderStatus
from src.domain.status_engine import determine_fulfillment_status, next_order_status
from src.domain.totals import calculate_balance_due, calculate_document_totals


class OrderFinancials(Recalculable[Order]):
    """
    Recompute an order from its line items and its live invoices

    When the order has no line item rows, the embedded line_items JSON is
    used instead (read-only).
    """

    document_type = DocumentType.ORDER

    def __init__(
        self,
        order_repo: OrderRepository,
        line_repo: LineItemRepository,
        invoice_repo: InvoiceRepository,
        payment_repo: InvoicePaymentRepository,
        history_repo,
        identity=None,
        strict_quantities: bool = False,
        clock=None,
    ):
        super().__init__(history_repo, identity, clock)
        self.order_repo = order_repo
        self.line_repo = line_repo
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo
        self.strict_quantities = strict_quantities

    async def _line_amounts(self, order: Order) -> Tuple[List[LineAmounts], list]:
        rows = await self.line_repo.list_by_document(order.id)
        amounts = []
        quantities = []

        if rows:
            for line in rows:
                computed = compute_line_totals(line.quantity, line.unit_price, line.tax_rate)
                fulfilled = normalize_fulfillment(line.quantity, line.fulfilled_quantity, strict=self.strict_quantities)
                if (
                    line.line_total != computed.line_total
                    or line.tax_total != computed.tax_total
                    or to_decimal(line.fulfilled_quantity) != fulfilled
                ):
                    line.line_total = computed.line_total
                    line.tax_total = computed.tax_total
                    line.fulfilled_quantity = fulfilled
                    await self.line_repo.update(line)
                amounts.append(computed)
                quantities.append((line.quantity, fulfilled))
            return amounts, quantities

        for item in order.line_items or []:
            amounts.append(_embedded_amounts(item))
            quantity = item.get("quantity", 0)
            quantities.append((quantity, normalize_fulfillment(quantity, item.get("fulfilled_quantity", 0))))
        return amounts, quantities

    async def recalculate(self, document_id: int, note: Optional[str] = None) -> SyncOutcome[Order]:
        order = await self.order_repo.get_by_id(document_id, for_update=True)
        if order is None:
            raise self.not_found(document_id)

        now = self.clock()
        amounts, quantities = await self._line_amounts(order)
        totals = calculate_document_totals(amounts, discount_total=order.discount_total)

        invoiced_total = await self.invoice_repo.sum_totals_by_order(order.id)
        has_invoices = await self.invoice_repo.exists_for_order(order.id)
        paid_total = await self.payment_repo.sum_completed_by_order(order.id)

        billable = invoiced_total if invoiced_total > 0 else totals.total
        balance_due = calculate_balance_due(billable, paid_total)

        fulfillment = determine_fulfillment_status(quantities)
        previous = order.status or OrderStatus.DRAFT
        following = next_order_status(previous, fulfillment, has_invoices)

        order.subtotal = totals.subtotal
        order.discount_total = totals.discount_total
        order.tax_total = totals.tax_total
        order.total = totals.total
        order.invoiced_total = round2(billable)
        order.paid_total = round2(paid_total)
        order.balance_due = balance_due
        order.fulfillment_status = fulfillment
        order.status = following
        if fulfillment == OrderFulfillmentStatus.FULFILLED and order.fulfilled_at is None:
            order.fulfilled_at = now

        await self.order_repo.update(order)

        outcome = SyncOutcome(order)
        history = await self.record_transition(order, previous, following, note)
        if history is not None:
            outcome.transitions.append(history)
        return outcome


def _embedded_amounts(item: Dict[str, Any]) -> LineAmounts:
    return compute_line_totals(
        item.get("quantity", 0),
        item.get("unit_price", 0),
        item.get("tax_rate", 0),
    )
