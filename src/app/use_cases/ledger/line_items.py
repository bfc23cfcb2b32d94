"""Line item use cases

Add, update and remove line items of any ledger document. Each write
re-syncs the owning document (and its parents) before commit.
"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.services.financials.base import Recalculable
from src.app.services.notification_service import NotificationService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.document_type import DocumentType
from src.domain.errors import DocumentNotFoundError, LedgerDomainError, TerminalStatusError
from src.domain.invoice_line_item import InvoiceLineItem
from src.domain.order_line_item import OrderLineItem
from src.domain.purchase_order_line_item import PurchaseOrderLineItem
from src.domain.quote_line_item import QuoteLineItem
from .base import LedgerUseCase, is_terminal, summarize
from .dtos import DocumentSummaryDTO, LineItemInputDTO, LineItemUpdateDTO

PARENT_FIELDS = {
    DocumentType.INVOICE: "invoice_id",
    DocumentType.ORDER: "order_id",
    DocumentType.QUOTE: "quote_id",
    DocumentType.PURCHASE_ORDER: "purchase_order_id",
}


def build_line_item(document_type: DocumentType, document, item: LineItemInputDTO, sort_order: int):
    """Create the line entity matching document_type (totals are filled by the sync)"""
    common = dict(
        tenant_id=document.tenant_id,
        name=item.name,
        description=item.description,
        quantity=item.quantity,
        tax_rate=item.tax_rate,
        sort_order=item.sort_order if item.sort_order is not None else sort_order,
    )

    if document_type == DocumentType.INVOICE:
        return InvoiceLineItem(invoice_id=document.id, unit_price=item.unit_price, **common)
    if document_type == DocumentType.ORDER:
        return OrderLineItem(
            order_id=document.id,
            unit_price=item.unit_price,
            fulfilled_quantity=item.fulfilled_quantity,
            **common,
        )
    if document_type == DocumentType.QUOTE:
        return QuoteLineItem(
            quote_id=document.id,
            sku=item.sku,
            unit_price=item.unit_price,
            discount_type=item.discount_type,
            discount_value=item.discount_value,
            **common,
        )
    if document_type == DocumentType.PURCHASE_ORDER:
        return PurchaseOrderLineItem(
            purchase_order_id=document.id,
            order_line_item_id=item.order_line_item_id,
            unit_cost=item.unit_price,
            **common,
        )
    raise LedgerDomainError(f"{document_type.value} has no line items", code="UNSUPPORTED_DOCUMENT_TYPE")


def apply_line_update(document_type: DocumentType, line, changes: LineItemUpdateDTO) -> None:
    values = changes.model_dump(exclude_unset=True)

    if "unit_price" in values and document_type == DocumentType.PURCHASE_ORDER:
        values["unit_cost"] = values.pop("unit_price")

    for key, value in values.items():
        if value is None and key not in ("description", "sku"):
            continue
        if hasattr(line, key):
            setattr(line, key, value)


class _LineItemUseCase(LedgerUseCase):

    def __init__(
        self,
        uow: UnitOfWork,
        document_type: DocumentType,
        document_repo: DocumentRepository,
        line_repo: LineItemRepository,
        financials: Recalculable,
        notifier: Optional[NotificationService] = None,
    ):
        super().__init__(uow, notifier)
        self.document_type = document_type
        self.document_repo = document_repo
        self.line_repo = line_repo
        self.financials = financials

    async def _load_open_document(self, document_id: int):
        document = await self.document_repo.get_by_id(document_id, for_update=True)
        if document is None:
            raise DocumentNotFoundError(f"{self.document_type.value} {document_id} not found")
        if is_terminal(document):
            raise TerminalStatusError(
                f"Line items of {self.document_type.value} {document_id} can no longer change"
            )
        return document

    async def _load_line(self, document_id: int, line_id: int):
        line = await self.line_repo.get_by_id(line_id)
        if line is None or getattr(line, PARENT_FIELDS[self.document_type]) != document_id:
            raise DocumentNotFoundError(
                f"Line item {line_id} not found on {self.document_type.value} {document_id}",
                code="LINE_ITEM_NOT_FOUND",
            )
        return line

    async def _sync_and_commit(self, document_id: int) -> DocumentSummaryDTO:
        outcome = await self.financials.sync(document_id)
        await self.uow.commit()
        await self.notify(outcome.transitions)
        return summarize(self.document_type, outcome.document, outcome.transitions)


class AddLineItem(_LineItemUseCase):
    """
    Use Case: Add a line item to a document

    Terminal (cancelled, closed or soft-deleted) documents reject new lines.
    """

    async def execute(self, document_id: int, item: LineItemInputDTO) -> Result[DocumentSummaryDTO]:
        try:
            document = await self._load_open_document(document_id)
            existing = await self.line_repo.list_by_document(document.id)
            line = build_line_item(self.document_type, document, item, sort_order=len(existing))
            await self.line_repo.create(line)

            return Return.ok(await self._sync_and_commit(document.id))

        except Exception as e:
            return await self.fail(e, "ADD_LINE_ITEM_FAILED", "Failed to add line item")


class UpdateLineItem(_LineItemUseCase):

    async def execute(self, document_id: int, line_id: int, changes: LineItemUpdateDTO) -> Result[DocumentSummaryDTO]:
        try:
            document = await self._load_open_document(document_id)
            line = await self._load_line(document.id, line_id)
            apply_line_update(self.document_type, line, changes)
            await self.line_repo.update(line)

            return Return.ok(await self._sync_and_commit(document.id))

        except Exception as e:
            return await self.fail(e, "UPDATE_LINE_ITEM_FAILED", "Failed to update line item")


class RemoveLineItem(_LineItemUseCase):

    async def execute(self, document_id: int, line_id: int) -> Result[DocumentSummaryDTO]:
        try:
            document = await self._load_open_document(document_id)
            line = await self._load_line(document.id, line_id)
            await self.line_repo.delete(line)

            return Return.ok(await self._sync_and_commit(document.id))

        except Exception as e:
            return await self.fail(e, "REMOVE_LINE_ITEM_FAILED", "Failed to remove line item")
