"""Background workers for the ledger service"""
from .overdue_invoices import OverdueInvoiceWorker

__all__ = ["OverdueInvoiceWorker"]
