from enum import Enum


class DocumentType(str, Enum):
    """Kinds of ledger documents (and numbered children)"""
    INVOICE = "invoice"
    ORDER = "order"
    QUOTE = "quote"
    PURCHASE_ORDER = "purchase_order"
    PURCHASE_ORDER_RECEIPT = "purchase_order_receipt"


# Prefixes of human-readable reference numbers, e.g. INV-2025-00001
REFERENCE_PREFIXES = {
    DocumentType.INVOICE: "INV",
    DocumentType.ORDER: "ORD",
    DocumentType.PURCHASE_ORDER: "PO",
    DocumentType.PURCHASE_ORDER_RECEIPT: "POR",
}
