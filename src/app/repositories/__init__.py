from .document_repository import DocumentRepository
from .invoice_repository import InvoiceRepository
from .order_repository import OrderRepository
from .quote_repository import QuoteRepository
from .purchase_order_repository import PurchaseOrderRepository
from .line_item_repository import LineItemRepository
from .invoice_payment_repository import InvoicePaymentRepository
from .purchase_order_receipt_repository import PurchaseOrderReceiptRepository
from .purchase_order_approval_repository import PurchaseOrderApprovalRepository
from .status_history_repository import StatusHistoryRepository
from .reference_sequence_repository import ReferenceSequenceRepository

__all__ = [
    "DocumentRepository",
    "InvoiceRepository",
    "OrderRepository",
    "QuoteRepository",
    "PurchaseOrderRepository",
    "LineItemRepository",
    "InvoicePaymentRepository",
    "PurchaseOrderReceiptRepository",
    "PurchaseOrderApprovalRepository",
    "StatusHistoryRepository",
    "ReferenceSequenceRepository",
]
