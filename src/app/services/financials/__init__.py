from .base import Recalculable, SyncOutcome
from .order import OrderFinancials
from .invoice import InvoiceFinancials
from .purchase_order import PurchaseOrderFinancials
from .quote import QuoteFinancials

__all__ = [
    "Recalculable",
    "SyncOutcome",
    "OrderFinancials",
    "InvoiceFinancials",
    "PurchaseOrderFinancials",
    "QuoteFinancials",
]
