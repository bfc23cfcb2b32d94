"""Invoice financials sync"""

from typing import Optional, Tuple
from src.app.repositories.invoice_payment_repository import InvoicePaymentRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.services.financials.base import Recalculable, SyncOutcome
from src.app.services.financials.order import OrderFinancials
from src.domain.document_type import DocumentType
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.line_item import compute_line_totals
from src.domain.status_engine import is_invoice_overdue, next_invoice_status
from src.domain.totals import calculate_balance_due, calculate_document_totals, calculate_late_fee, sum_lines


class InvoiceFinancials(Recalculable[Invoice]):
    """
    Recompute an invoice from its line items and completed payments

    Order of work: line totals, document totals (late fee at most once),
    balance, status. All fields are written in one update; the owning order
    is synced afterwards.
    """

    document_type = DocumentType.INVOICE

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        line_repo: LineItemRepository,
        payment_repo: InvoicePaymentRepository,
        history_repo,
        identity=None,
        order_financials: Optional[OrderFinancials] = None,
        clock=None,
    ):
        super().__init__(history_repo, identity, clock)
        self.invoice_repo = invoice_repo
        self.line_repo = line_repo
        self.payment_repo = payment_repo
        self.order_financials = order_financials

    async def recalculate(self, document_id: int, note: Optional[str] = None) -> SyncOutcome[Invoice]:
        invoice = await self.invoice_repo.get_by_id(document_id, for_update=True)
        if invoice is None:
            raise self.not_found(document_id)

        now = self.clock()

        amounts = []
        for line in await self.line_repo.list_by_document(invoice.id):
            computed = compute_line_totals(line.quantity, line.unit_price, line.tax_rate)
            if line.line_total != computed.line_total or line.tax_total != computed.tax_total:
                line.line_total = computed.line_total
                line.tax_total = computed.tax_total
                await self.line_repo.update(line)
            amounts.append(computed)

        paid = await self.payment_repo.sum_completed_by_invoice(invoice.id)
        previous = invoice.status or InvoiceStatus.DRAFT
        overdue = is_invoice_overdue(invoice.due_date, previous, now)

        subtotal, tax_total = sum_lines(amounts)
        late_fee, applied_at = calculate_late_fee(
            subtotal,
            invoice.discount_total,
            tax_total,
            paid,
            invoice.late_fee_rate,
            overdue,
            invoice.late_fee_amount,
            invoice.late_fee_applied_at,
            now,
        )
        totals = calculate_document_totals(amounts, discount_total=invoice.discount_total, late_fee=late_fee)
        balance_due = calculate_balance_due(totals.total, paid)

        following = next_invoice_status(previous, totals.total, paid, balance_due, overdue, invoice.sent_at)

        invoice.subtotal = totals.subtotal
        invoice.discount_total = totals.discount_total
        invoice.tax_total = totals.tax_total
        invoice.late_fee_amount = totals.late_fee
        invoice.late_fee_applied_at = applied_at
        invoice.total = totals.total
        invoice.balance_due = balance_due
        invoice.status = following
        if following == InvoiceStatus.PAID and invoice.paid_at is None:
            invoice.paid_at = now

        await self.invoice_repo.update(invoice)

        outcome = SyncOutcome(invoice)
        history = await self.record_transition(invoice, previous, following, note)
        if history is not None:
            outcome.transitions.append(history)
        return outcome

    def parent_of(self, document: Invoice) -> Optional[Tuple[Recalculable, int]]:
        if self.order_financials is not None and document.order_id:
            return self.order_financials, document.order_id
        return None
