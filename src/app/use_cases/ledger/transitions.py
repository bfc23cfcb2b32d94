"""Explicit status transitions

Sending invoices, cancelling and closing documents, and quote decisions.
Every transition that changes status is recorded in the status history.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from libs.result import Error, Result, Return
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.purchase_order_repository import PurchaseOrderRepository
from src.app.repositories.quote_repository import QuoteRepository
from src.app.services.financials.base import Recalculable
from src.app.services.financials.invoice import InvoiceFinancials
from src.app.services.financials.purchase_order import PurchaseOrderFinancials
from src.app.services.financials.quote import QuoteFinancials
from src.app.services.notification_service import NotificationService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.document_type import DocumentType
from src.domain.errors import DocumentNotFoundError, InvalidTransitionError, TerminalStatusError
from src.domain.invoice import InvoiceStatus
from src.domain.order import OrderStatus
from src.domain.purchase_order import PurchaseOrderStatus
from src.domain.quote import QuoteStatus
from src.domain.status_engine import ensure_invoice_can_be_sent
from .base import LedgerUseCase, summarize
from .dtos import DocumentSummaryDTO

CANCELLED_STATUSES = {
    DocumentType.INVOICE: InvoiceStatus.CANCELLED,
    DocumentType.ORDER: OrderStatus.CANCELLED,
    DocumentType.PURCHASE_ORDER: PurchaseOrderStatus.CANCELLED,
}


def _not_found(document_type: DocumentType, document_id: int) -> DocumentNotFoundError:
    return DocumentNotFoundError(f"{document_type.value} {document_id} not found")


class MarkInvoiceSent(LedgerUseCase):
    """
    Use Case: Mark an invoice as sent

    Stamps sent_at once; the sync then decides the resulting status (sent,
    or overdue/partial/paid when those take priority). Re-sending is a no-op.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        financials: InvoiceFinancials,
        notifier: Optional[NotificationService] = None,
    ):
        super().__init__(uow, notifier)
        self.invoice_repo = invoice_repo
        self.financials = financials

    async def execute(self, invoice_id: int) -> Result[DocumentSummaryDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id, for_update=True)
            if invoice is None:
                raise _not_found(DocumentType.INVOICE, invoice_id)

            ensure_invoice_can_be_sent(invoice.status)

            if invoice.sent_at is None:
                invoice.sent_at = self.financials.clock()
                await self.invoice_repo.update(invoice)

            outcome = await self.financials.sync(invoice.id, note="Marked as sent")
            await self.uow.commit()
            await self.notify(outcome.transitions)

            return Return.ok(summarize(DocumentType.INVOICE, outcome.document, outcome.transitions))

        except Exception as e:
            return await self.fail(e, "SEND_INVOICE_FAILED", "Failed to mark invoice as sent")


class CancelDocument(LedgerUseCase):
    """
    Use Case: Cancel an invoice, order or purchase order

    Business Rules:
    1. Cancellation is terminal and soft-deletes the document
    2. Cancelling twice is a no-op
    3. Closed purchase orders cannot be cancelled
    4. Parents are re-synced (a cancelled invoice leaves its order's totals)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        document_type: DocumentType,
        document_repo: DocumentRepository,
        financials: Recalculable,
        notifier: Optional[NotificationService] = None,
    ):
        super().__init__(uow, notifier)
        if document_type not in CANCELLED_STATUSES:
            raise ValueError(f"{document_type.value} cannot be cancelled")
        self.document_type = document_type
        self.document_repo = document_repo
        self.financials = financials

    async def execute(self, document_id: int, note: Optional[str] = None) -> Result[DocumentSummaryDTO]:
        try:
            document = await self.document_repo.get_by_id(document_id, for_update=True)
            if document is None:
                raise _not_found(self.document_type, document_id)

            cancelled = CANCELLED_STATUSES[self.document_type]
            if document.status == cancelled:
                return Return.ok(summarize(self.document_type, document))
            if document.status == PurchaseOrderStatus.CLOSED:
                raise TerminalStatusError(f"Purchase order {document_id} is closed")

            now = datetime.utcnow()
            previous = document.status
            document.status = cancelled
            document.cancelled_at = document.cancelled_at or now
            document.deleted_at = document.deleted_at or now
            await self.document_repo.update(document)

            transitions = []
            history = await self.financials.record_transition(document, previous, cancelled, note or "Cancelled")
            if history is not None:
                transitions.append(history)

            outcome = await self.financials.sync(document.id)
            transitions.extend(outcome.transitions)

            await self.uow.commit()
            await self.notify(transitions)

            return Return.ok(summarize(self.document_type, outcome.document, transitions))

        except Exception as e:
            return await self.fail(e, f"CANCEL_{self.document_type.name}_FAILED", f"Failed to cancel {self.document_type.value}")


class ClosePurchaseOrder(LedgerUseCase):
    """Use Case: Close a purchase order (terminal). Closing twice is a no-op."""

    def __init__(
        self,
        uow: UnitOfWork,
        purchase_order_repo: PurchaseOrderRepository,
        financials: PurchaseOrderFinancials,
        notifier: Optional[NotificationService] = None,
    ):
        super().__init__(uow, notifier)
        self.purchase_order_repo = purchase_order_repo
        self.financials = financials

    async def execute(self, purchase_order_id: int, note: Optional[str] = None) -> Result[DocumentSummaryDTO]:
        try:
            purchase_order = await self.purchase_order_repo.get_by_id(purchase_order_id, for_update=True)
            if purchase_order is None:
                raise _not_found(DocumentType.PURCHASE_ORDER, purchase_order_id)

            if purchase_order.status == PurchaseOrderStatus.CLOSED:
                return Return.ok(summarize(DocumentType.PURCHASE_ORDER, purchase_order))
            if purchase_order.status == PurchaseOrderStatus.CANCELLED:
                raise TerminalStatusError(f"Purchase order {purchase_order_id} is cancelled")

            previous = purchase_order.status
            purchase_order.status = PurchaseOrderStatus.CLOSED
            purchase_order.closed_at = self.financials.clock()
            await self.purchase_order_repo.update(purchase_order)

            transitions = []
            history = await self.financials.record_transition(
                purchase_order, previous, PurchaseOrderStatus.CLOSED, note or "Closed"
            )
            if history is not None:
                transitions.append(history)

            await self.uow.commit()
            await self.notify(transitions)

            return Return.ok(summarize(DocumentType.PURCHASE_ORDER, purchase_order, transitions))

        except Exception as e:
            return await self.fail(e, "CLOSE_PURCHASE_ORDER_FAILED", "Failed to close purchase order")


class QuoteAction(str, Enum):
    SEND = "send"
    ACCEPT = "accept"
    REJECT = "reject"


class ChangeQuoteStatus(LedgerUseCase):
    """
    Use Case: Send, accept or reject a quote

    Business Rules:
    1. Quote status only moves through these explicit actions
    2. Decided quotes cannot be sent again
    3. Expired quotes cannot be accepted
    4. Accepting clears rejected_at and rejecting clears accepted_at
    5. Repeating the current action is a no-op
    """

    TARGETS = {
        QuoteAction.SEND: QuoteStatus.SENT,
        QuoteAction.ACCEPT: QuoteStatus.ACCEPTED,
        QuoteAction.REJECT: QuoteStatus.REJECTED,
    }

    def __init__(
        self,
        uow: UnitOfWork,
        quote_repo: QuoteRepository,
        financials: QuoteFinancials,
        notifier: Optional[NotificationService] = None,
    ):
        super().__init__(uow, notifier)
        self.quote_repo = quote_repo
        self.financials = financials

    async def execute(self, quote_id: int, action: QuoteAction, note: Optional[str] = None) -> Result[DocumentSummaryDTO]:
        try:
            target = self.TARGETS[QuoteAction(action)]
        except ValueError:
            return Return.err(Error(code="INVALID_QUOTE_ACTION", message=f"Unknown quote action {action}"))

        try:
            quote = await self.quote_repo.get_by_id(quote_id, for_update=True)
            if quote is None or quote.deleted_at is not None:
                raise _not_found(DocumentType.QUOTE, quote_id)

            if quote.status == target:
                return Return.ok(summarize(DocumentType.QUOTE, quote))

            now = self.financials.clock()
            previous = quote.status

            if target == QuoteStatus.SENT:
                if previous in (QuoteStatus.ACCEPTED, QuoteStatus.REJECTED):
                    raise InvalidTransitionError(f"Quote {quote_id} is already {previous.value}")
                quote.sent_at = quote.sent_at or now
            elif target == QuoteStatus.ACCEPTED:
                if quote.is_expired(now.date()):
                    raise InvalidTransitionError(f"Quote {quote_id} expired on {quote.valid_until}")
                quote.accepted_at = now
                quote.rejected_at = None
                quote.decision_note = note
            else:
                quote.rejected_at = now
                quote.accepted_at = None
                quote.decision_note = note

            quote.status = target
            await self.quote_repo.update(quote)

            transitions = []
            history = await self.financials.record_transition(quote, previous, target, note)
            if history is not None:
                transitions.append(history)

            await self.uow.commit()
            await self.notify(transitions)

            return Return.ok(summarize(DocumentType.QUOTE, quote, transitions))

        except Exception as e:
            return await self.fail(e, "CHANGE_QUOTE_STATUS_FAILED", "Failed to change quote status")
