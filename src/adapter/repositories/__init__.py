from .document_repository import SqlAlchemyDocumentRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .order_repository import SqlAlchemyOrderRepository
from .quote_repository import SqlAlchemyQuoteRepository
from .purchase_order_repository import SqlAlchemyPurchaseOrderRepository
from .line_item_repository import (
    SqlAlchemyInvoiceLineItemRepository,
    SqlAlchemyOrderLineItemRepository,
    SqlAlchemyQuoteLineItemRepository,
    SqlAlchemyPurchaseOrderLineItemRepository,
)
from .invoice_payment_repository import SqlAlchemyInvoicePaymentRepository
from .purchase_order_receipt_repository import SqlAlchemyPurchaseOrderReceiptRepository
from .purchase_order_approval_repository import SqlAlchemyPurchaseOrderApprovalRepository
from .status_history_repository import SqlAlchemyStatusHistoryRepository
from .reference_sequence_repository import SqlAlchemyReferenceSequenceRepository

__all__ = [
    "SqlAlchemyDocumentRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyQuoteRepository",
    "SqlAlchemyPurchaseOrderRepository",
    "SqlAlchemyInvoiceLineItemRepository",
    "SqlAlchemyOrderLineItemRepository",
    "SqlAlchemyQuoteLineItemRepository",
    "SqlAlchemyPurchaseOrderLineItemRepository",
    "SqlAlchemyInvoicePaymentRepository",
    "SqlAlchemyPurchaseOrderReceiptRepository",
    "SqlAlchemyPurchaseOrderApprovalRepository",
    "SqlAlchemyStatusHistoryRepository",
    "SqlAlchemyReferenceSequenceRepository",
]
