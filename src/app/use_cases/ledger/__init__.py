"""Ledger use cases"""
from .create_documents import CreateInvoice, CreateOrder, CreatePurchaseOrder, CreateQuote
from .line_items import AddLineItem, UpdateLineItem, RemoveLineItem
from .payments import RecordPayment, UpdatePaymentStatus
from .receipts import RecordReceipt
from .approvals import RequestApproval, DecideApproval
from .transitions import MarkInvoiceSent, CancelDocument, ClosePurchaseOrder, ChangeQuoteStatus, QuoteAction
from .sync_document import SyncDocument
from .sweep_overdue_invoices import SweepOverdueInvoices
from .queries import GetInvoice, GetOrder, GetPurchaseOrder, GetQuote, GetStatusHistory
from .dtos import (
    LineItemInputDTO,
    LineItemUpdateDTO,
    CreateInvoiceCommandDTO,
    CreateOrderCommandDTO,
    CreatePurchaseOrderCommandDTO,
    CreateQuoteCommandDTO,
    RecordPaymentCommandDTO,
    UpdatePaymentStatusCommandDTO,
    RecordReceiptCommandDTO,
    RequestApprovalCommandDTO,
    DecideApprovalCommandDTO,
    StatusHistoryDTO,
    DocumentSummaryDTO,
    LineItemDTO,
    PaymentDTO,
    ReceiptDTO,
    ApprovalDTO,
    InvoiceDetailDTO,
    OrderDetailDTO,
    PurchaseOrderDetailDTO,
    QuoteDetailDTO,
    OverdueSweepResultDTO,
)

__all__ = [
    "CreateInvoice",
    "CreateOrder",
    "CreatePurchaseOrder",
    "CreateQuote",
    "AddLineItem",
    "UpdateLineItem",
    "RemoveLineItem",
    "RecordPayment",
    "UpdatePaymentStatus",
    "RecordReceipt",
    "RequestApproval",
    "DecideApproval",
    "MarkInvoiceSent",
    "CancelDocument",
    "ClosePurchaseOrder",
    "ChangeQuoteStatus",
    "QuoteAction",
    "SyncDocument",
    "SweepOverdueInvoices",
    "GetInvoice",
    "GetOrder",
    "GetPurchaseOrder",
    "GetQuote",
    "GetStatusHistory",
    "LineItemInputDTO",
    "LineItemUpdateDTO",
    "CreateInvoiceCommandDTO",
    "CreateOrderCommandDTO",
    "CreatePurchaseOrderCommandDTO",
    "CreateQuoteCommandDTO",
    "RecordPaymentCommandDTO",
    "UpdatePaymentStatusCommandDTO",
    "RecordReceiptCommandDTO",
    "RequestApprovalCommandDTO",
    "DecideApprovalCommandDTO",
    "StatusHistoryDTO",
    "DocumentSummaryDTO",
    "LineItemDTO",
    "PaymentDTO",
    "ReceiptDTO",
    "ApprovalDTO",
    "InvoiceDetailDTO",
    "OrderDetailDTO",
    "PurchaseOrderDetailDTO",
    "QuoteDetailDTO",
    "OverdueSweepResultDTO",
]
