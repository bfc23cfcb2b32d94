"""Document creation use cases

Create a draft document, assign its reference number, add its line items
and run the first sync, all in one transaction.
"""

from abc import ABC, abstractmethod
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.services.financials.base import Recalculable
from src.app.services.identity_provider import IdentityProvider
from src.app.services.notification_service import NotificationService
from src.app.services.reference_number_generator import ReferenceNumberGenerator
from src.app.services.unit_of_work import UnitOfWork
from src.domain.document_type import DocumentType
from src.domain.errors import LedgerDomainError
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.order import Order, OrderStatus
from src.domain.purchase_order import PurchaseOrder, PurchaseOrderStatus
from src.domain.quote import Quote, QuoteStatus
from .base import LedgerUseCase, is_terminal, summarize
from .dtos import (
    CreateInvoiceCommandDTO,
    CreateOrderCommandDTO,
    CreatePurchaseOrderCommandDTO,
    CreateQuoteCommandDTO,
    DocumentSummaryDTO,
)
from .line_items import build_line_item


class _CreateDocument(LedgerUseCase, ABC):
    """
    Shared creation flow

    1. Resolve tenant (command, then identity provider)
    2. Build the draft entity and check the documents it links to
    3. Assign the reference number (numbered documents only)
    4. Persist document and line items
    5. Sync financials, commit, notify
    """

    document_type: DocumentType
    failure_code: str

    def __init__(
        self,
        uow: UnitOfWork,
        document_repo: DocumentRepository,
        line_repo: LineItemRepository,
        financials: Recalculable,
        reference_numbers: Optional[ReferenceNumberGenerator] = None,
        identity: Optional[IdentityProvider] = None,
        notifier: Optional[NotificationService] = None,
        default_currency: str = "USD",
        order_repo: Optional[DocumentRepository] = None,
    ):
        super().__init__(uow, notifier)
        self.document_repo = document_repo
        self.line_repo = line_repo
        self.financials = financials
        self.reference_numbers = reference_numbers
        self.identity = identity
        self.default_currency = default_currency
        self.order_repo = order_repo

    @abstractmethod
    def build(self, command, tenant_id: str, creator_id: Optional[str]):
        pass

    def parent_links(self, document):
        """(repository, parent id, label) for each document this one points at"""
        return []

    async def check_parents(self, document) -> None:
        for repo, parent_id, label in self.parent_links(document):
            if parent_id is None or repo is None:
                continue
            parent = await repo.get_by_id(parent_id)
            if parent is None or parent.tenant_id != document.tenant_id:
                raise LedgerDomainError(f"{label} {parent_id} not found", code="INVALID_PARENT_DOCUMENT")
            if is_terminal(parent):
                raise LedgerDomainError(
                    f"{label} {parent_id} is no longer open and cannot be referenced", code="INVALID_PARENT_DOCUMENT"
                )

    def resolve_tenant(self, command) -> str:
        tenant_id = command.tenant_id or (self.identity.current_tenant_id() if self.identity else None)
        if not tenant_id:
            raise LedgerDomainError("tenant_id is required", code="TENANT_REQUIRED")
        return tenant_id

    async def execute(self, command) -> Result[DocumentSummaryDTO]:
        try:
            tenant_id = self.resolve_tenant(command)
            creator_id = self.identity.current_user_id() if self.identity else None
            document = self.build(command, tenant_id, creator_id)
            await self.check_parents(document)

            if self.reference_numbers is not None:
                await self.reference_numbers.register(
                    document, self.document_type, seed_loader=self.document_repo.max_sequence
                )

            document = await self.document_repo.create(document)

            for index, item in enumerate(command.line_items):
                await self.line_repo.create(build_line_item(self.document_type, document, item, index))

            outcome = await self.financials.sync(document.id, note="Created")
            await self.uow.commit()
            await self.notify(outcome.transitions)

            return Return.ok(summarize(self.document_type, outcome.document, outcome.transitions))

        except Exception as e:
            return await self.fail(e, self.failure_code, f"Failed to create {self.document_type.value}")


class CreateInvoice(_CreateDocument):
    """
    Use Case: Create a draft invoice

    The number (INV-YYYY-NNNNN) follows the issue date's year. An imported
    number is kept as is.
    """

    document_type = DocumentType.INVOICE
    failure_code = "CREATE_INVOICE_FAILED"

    def build(self, command: CreateInvoiceCommandDTO, tenant_id: str, creator_id: Optional[str]) -> Invoice:
        invoice = Invoice(
            tenant_id=tenant_id,
            creator_id=creator_id,
            order_id=command.order_id,
            parent_invoice_id=command.parent_invoice_id,
            number=command.number,
            status=InvoiceStatus.DRAFT,
            due_date=command.due_date,
            payment_terms=command.payment_terms,
            currency_code=command.currency_code or self.default_currency,
            fx_rate=command.fx_rate,
            discount_total=command.discount_total,
            late_fee_rate=command.late_fee_rate,
            notes=command.notes,
        )
        if command.issue_date is not None:
            invoice.issue_date = command.issue_date
        return invoice

    def parent_links(self, document: Invoice):
        return [
            (self.order_repo, document.order_id, "Order"),
            (self.document_repo, document.parent_invoice_id, "Invoice"),
        ]


class CreateOrder(_CreateDocument):
    document_type = DocumentType.ORDER
    failure_code = "CREATE_ORDER_FAILED"

    def build(self, command: CreateOrderCommandDTO, tenant_id: str, creator_id: Optional[str]) -> Order:
        order = Order(
            tenant_id=tenant_id,
            creator_id=creator_id,
            quote_id=command.quote_id,
            number=command.number,
            status=OrderStatus.DRAFT,
            fulfillment_due_at=command.fulfillment_due_at,
            currency_code=command.currency_code or self.default_currency,
            fx_rate=command.fx_rate,
            discount_total=command.discount_total,
            line_items=command.embedded_line_items,
            notes=command.notes,
        )
        if command.ordered_at is not None:
            order.ordered_at = command.ordered_at
        return order


class CreatePurchaseOrder(_CreateDocument):
    document_type = DocumentType.PURCHASE_ORDER
    failure_code = "CREATE_PURCHASE_ORDER_FAILED"

    def build(self, command: CreatePurchaseOrderCommandDTO, tenant_id: str, creator_id: Optional[str]) -> PurchaseOrder:
        purchase_order = PurchaseOrder(
            tenant_id=tenant_id,
            creator_id=creator_id,
            vendor_name=command.vendor_name,
            order_id=command.order_id,
            number=command.number,
            status=PurchaseOrderStatus.DRAFT,
            expected_delivery_date=command.expected_delivery_date,
            currency_code=command.currency_code or self.default_currency,
            fx_rate=command.fx_rate,
            freight_total=command.freight_total,
            fee_total=command.fee_total,
            notes=command.notes,
        )
        if command.ordered_at is not None:
            purchase_order.ordered_at = command.ordered_at
        return purchase_order

    def parent_links(self, document: PurchaseOrder):
        return [(self.order_repo, document.order_id, "Order")]


class CreateQuote(_CreateDocument):
    """Quotes are not numbered"""

    document_type = DocumentType.QUOTE
    failure_code = "CREATE_QUOTE_FAILED"

    def build(self, command: CreateQuoteCommandDTO, tenant_id: str, creator_id: Optional[str]) -> Quote:
        return Quote(
            tenant_id=tenant_id,
            creator_id=creator_id,
            title=command.title,
            status=QuoteStatus.DRAFT,
            valid_until=command.valid_until,
            currency_code=command.currency_code or self.default_currency,
            line_items=command.embedded_line_items,
        )
