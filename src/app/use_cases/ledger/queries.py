"""Read-only ledger queries"""

from datetime import datetime
from typing import List, Optional
from libs.result import Error, Result, Return
from src.app.repositories.invoice_payment_repository import InvoicePaymentRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.purchase_order_approval_repository import PurchaseOrderApprovalRepository
from src.app.repositories.purchase_order_receipt_repository import PurchaseOrderReceiptRepository
from src.app.repositories.purchase_order_repository import PurchaseOrderRepository
from src.app.repositories.quote_repository import QuoteRepository
from src.app.repositories.status_history_repository import StatusHistoryRepository
from src.domain.document_type import DocumentType
from .base import status_value
from .dtos import (
    ApprovalDTO,
    InvoiceDetailDTO,
    LineItemDTO,
    OrderDetailDTO,
    PaymentDTO,
    PurchaseOrderDetailDTO,
    QuoteDetailDTO,
    ReceiptDTO,
    StatusHistoryDTO,
)


def _not_found(document_type: DocumentType, document_id: int):
    return Return.err(
        Error(
            code="DOCUMENT_NOT_FOUND",
            message=f"{document_type.value} {document_id} not found",
        )
    )


def _lines(rows) -> List[LineItemDTO]:
    return [LineItemDTO.model_validate(row) for row in rows]


class GetInvoice:
    def __init__(self, invoice_repo: InvoiceRepository, line_repo: LineItemRepository, payment_repo: InvoicePaymentRepository):
        self.invoice_repo = invoice_repo
        self.line_repo = line_repo
        self.payment_repo = payment_repo

    async def execute(self, invoice_id: int) -> Result[InvoiceDetailDTO]:
        invoice = await self.invoice_repo.get_by_id(invoice_id)
        if invoice is None:
            return _not_found(DocumentType.INVOICE, invoice_id)

        lines = await self.line_repo.list_by_document(invoice.id)
        payments = await self.payment_repo.list_by_invoice(invoice.id)

        return Return.ok(
            InvoiceDetailDTO(
                **invoice.model_dump(exclude={"status", "line_items"}),
                status=status_value(invoice.status),
                line_items=_lines(lines),
                payments=[PaymentDTO.model_validate(p) for p in payments],
            )
        )


class GetOrder:
    def __init__(self, order_repo: OrderRepository, line_repo: LineItemRepository):
        self.order_repo = order_repo
        self.line_repo = line_repo

    async def execute(self, order_id: int) -> Result[OrderDetailDTO]:
        order = await self.order_repo.get_by_id(order_id)
        if order is None:
            return _not_found(DocumentType.ORDER, order_id)

        lines = await self.line_repo.list_by_document(order.id)

        return Return.ok(
            OrderDetailDTO(
                **order.model_dump(exclude={"status", "fulfillment_status", "line_items"}),
                status=status_value(order.status),
                fulfillment_status=status_value(order.fulfillment_status),
                line_items=_lines(lines),
                embedded_line_items=order.line_items,
            )
        )


class GetPurchaseOrder:
    def __init__(
        self,
        purchase_order_repo: PurchaseOrderRepository,
        line_repo: LineItemRepository,
        receipt_repo: PurchaseOrderReceiptRepository,
        approval_repo: PurchaseOrderApprovalRepository,
    ):
        self.purchase_order_repo = purchase_order_repo
        self.line_repo = line_repo
        self.receipt_repo = receipt_repo
        self.approval_repo = approval_repo

    async def execute(self, purchase_order_id: int) -> Result[PurchaseOrderDetailDTO]:
        purchase_order = await self.purchase_order_repo.get_by_id(purchase_order_id)
        if purchase_order is None:
            return _not_found(DocumentType.PURCHASE_ORDER, purchase_order_id)

        lines = await self.line_repo.list_by_document(purchase_order.id)
        receipts = await self.receipt_repo.list_by_purchase_order(purchase_order.id)
        approvals = await self.approval_repo.list_by_purchase_order(purchase_order.id)

        return Return.ok(
            PurchaseOrderDetailDTO(
                **purchase_order.model_dump(exclude={"status"}),
                status=status_value(purchase_order.status),
                line_items=_lines(lines),
                receipts=[ReceiptDTO.model_validate(r) for r in receipts],
                approvals=[ApprovalDTO.model_validate(a) for a in approvals],
            )
        )


class GetQuote:
    def __init__(self, quote_repo: QuoteRepository, line_repo: LineItemRepository):
        self.quote_repo = quote_repo
        self.line_repo = line_repo

    async def execute(self, quote_id: int, today: Optional[datetime] = None) -> Result[QuoteDetailDTO]:
        quote = await self.quote_repo.get_by_id(quote_id)
        if quote is None:
            return _not_found(DocumentType.QUOTE, quote_id)

        lines = await self.line_repo.list_by_document(quote.id)
        today = (today or datetime.utcnow()).date()

        return Return.ok(
            QuoteDetailDTO(
                **quote.model_dump(exclude={"status", "line_items"}),
                status=status_value(quote.status),
                is_expired=quote.is_expired(today),
                line_items=_lines(lines),
                snapshot=quote.line_items,
            )
        )


class GetStatusHistory:
    """History rows of one document, oldest first"""

    def __init__(self, history_repo: StatusHistoryRepository):
        self.history_repo = history_repo

    async def execute(self, document_type: DocumentType, document_id: int) -> Result[List[StatusHistoryDTO]]:
        rows = await self.history_repo.list_by_document(document_type, document_id)
        return Return.ok([StatusHistoryDTO.model_validate(row) for row in rows])
