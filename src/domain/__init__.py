from .base import BaseModel
from .document_type import DocumentType, REFERENCE_PREFIXES
from .invoice import Invoice, InvoiceStatus
from .invoice_line_item import InvoiceLineItem
from .invoice_payment import InvoicePayment, PaymentStatus
from .order import Order, OrderStatus, OrderFulfillmentStatus
from .order_line_item import OrderLineItem
from .quote import Quote, QuoteStatus
from .quote_line_item import QuoteLineItem, QuoteDiscountType
from .purchase_order import PurchaseOrder, PurchaseOrderStatus
from .purchase_order_line_item import PurchaseOrderLineItem
from .purchase_order_receipt import PurchaseOrderReceipt, ReceiptType
from .purchase_order_approval import PurchaseOrderApproval, ApprovalStatus
from .status_history import StatusHistory
from .reference_sequence import ReferenceSequence

__all__ = [
    "BaseModel",
    "DocumentType",
    "REFERENCE_PREFIXES",
    "Invoice",
    "InvoiceStatus",
    "InvoiceLineItem",
    "InvoicePayment",
    "PaymentStatus",
    "Order",
    "OrderStatus",
    "OrderFulfillmentStatus",
    "OrderLineItem",
    "Quote",
    "QuoteStatus",
    "QuoteLineItem",
    "QuoteDiscountType",
    "PurchaseOrder",
    "PurchaseOrderStatus",
    "PurchaseOrderLineItem",
    "PurchaseOrderReceipt",
    "ReceiptType",
    "PurchaseOrderApproval",
    "ApprovalStatus",
    "StatusHistory",
    "ReferenceSequence",
]
