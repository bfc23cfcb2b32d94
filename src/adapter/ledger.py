"""Ledger wiring for one database session

Builds repositories, financials orchestrators and the reference number
generator that share a session, so a whole request runs in one transaction.
"""

from datetime import datetime
from typing import Callable, Optional
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.repositories.invoice_payment_repository import SqlAlchemyInvoicePaymentRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.line_item_repository import (
    SqlAlchemyInvoiceLineItemRepository,
    SqlAlchemyOrderLineItemRepository,
    SqlAlchemyPurchaseOrderLineItemRepository,
    SqlAlchemyQuoteLineItemRepository,
)
from src.adapter.repositories.order_repository import SqlAlchemyOrderRepository
from src.adapter.repositories.purchase_order_approval_repository import SqlAlchemyPurchaseOrderApprovalRepository
from src.adapter.repositories.purchase_order_receipt_repository import SqlAlchemyPurchaseOrderReceiptRepository
from src.adapter.repositories.purchase_order_repository import SqlAlchemyPurchaseOrderRepository
from src.adapter.repositories.quote_repository import SqlAlchemyQuoteRepository
from src.adapter.repositories.reference_sequence_repository import SqlAlchemyReferenceSequenceRepository
from src.adapter.repositories.status_history_repository import SqlAlchemyStatusHistoryRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.financials import (
    InvoiceFinancials,
    OrderFinancials,
    PurchaseOrderFinancials,
    QuoteFinancials,
    Recalculable,
)
from src.app.services.identity_provider import IdentityProvider
from src.app.services.reference_number_generator import ReferenceNumberGenerator
from src.domain.document_type import DocumentType


class SqlAlchemyLedger:
    """
    Everything a ledger use case needs, bound to one AsyncSession

    Usage:
        ledger = SqlAlchemyLedger(session, identity)
        use_case = RecordPayment(ledger.uow, ledger.invoices, ledger.payments, ledger.invoice_financials)
    """

    def __init__(
        self,
        session: AsyncSession,
        identity: Optional[IdentityProvider] = None,
        strict_quantities: bool = False,
        reference_retry_attempts: int = 5,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.session = session
        self.identity = identity
        self.uow = SqlAlchemyUnitOfWork(session)

        self.invoices = SqlAlchemyInvoiceRepository(session)
        self.orders = SqlAlchemyOrderRepository(session)
        self.quotes = SqlAlchemyQuoteRepository(session)
        self.purchase_orders = SqlAlchemyPurchaseOrderRepository(session)
        self.invoice_lines = SqlAlchemyInvoiceLineItemRepository(session)
        self.order_lines = SqlAlchemyOrderLineItemRepository(session)
        self.quote_lines = SqlAlchemyQuoteLineItemRepository(session)
        self.purchase_order_lines = SqlAlchemyPurchaseOrderLineItemRepository(session)
        self.payments = SqlAlchemyInvoicePaymentRepository(session)
        self.receipts = SqlAlchemyPurchaseOrderReceiptRepository(session)
        self.approvals = SqlAlchemyPurchaseOrderApprovalRepository(session)
        self.history = SqlAlchemyStatusHistoryRepository(session)
        self.sequences = SqlAlchemyReferenceSequenceRepository(session)

        self.reference_numbers = ReferenceNumberGenerator(self.sequences, reference_retry_attempts)

        self.order_financials = OrderFinancials(
            self.orders,
            self.order_lines,
            self.invoices,
            self.payments,
            self.history,
            identity=identity,
            strict_quantities=strict_quantities,
            clock=clock,
        )
        self.invoice_financials = InvoiceFinancials(
            self.invoices,
            self.invoice_lines,
            self.payments,
            self.history,
            identity=identity,
            order_financials=self.order_financials,
            clock=clock,
        )
        self.purchase_order_financials = PurchaseOrderFinancials(
            self.purchase_orders,
            self.purchase_order_lines,
            self.receipts,
            self.approvals,
            self.history,
            identity=identity,
            order_financials=self.order_financials,
            strict_quantities=strict_quantities,
            clock=clock,
        )
        self.quote_financials = QuoteFinancials(
            self.quotes, self.quote_lines, self.history, identity=identity, clock=clock
        )

    def documents_for(self, document_type: DocumentType):
        return {
            DocumentType.INVOICE: self.invoices,
            DocumentType.ORDER: self.orders,
            DocumentType.QUOTE: self.quotes,
            DocumentType.PURCHASE_ORDER: self.purchase_orders,
        }[document_type]

    def lines_for(self, document_type: DocumentType):
        return {
            DocumentType.INVOICE: self.invoice_lines,
            DocumentType.ORDER: self.order_lines,
            DocumentType.QUOTE: self.quote_lines,
            DocumentType.PURCHASE_ORDER: self.purchase_order_lines,
        }[document_type]

    def financials_for(self, document_type: DocumentType) -> Recalculable:
        return {
            DocumentType.INVOICE: self.invoice_financials,
            DocumentType.ORDER: self.order_financials,
            DocumentType.QUOTE: self.quote_financials,
            DocumentType.PURCHASE_ORDER: self.purchase_order_financials,
        }[document_type]
