"""Invoice Payment Repository Interface"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional
from src.domain.invoice_payment import InvoicePayment


class InvoicePaymentRepository(ABC):
    """
    Repository interface for InvoicePayment persistence

    Sums only count COMPLETED payments.
    """

    @abstractmethod
    async def create(self, payment: InvoicePayment) -> InvoicePayment:
        pass

    @abstractmethod
    async def get_by_id(self, payment_id: int) -> Optional[InvoicePayment]:
        pass

    @abstractmethod
    async def update(self, payment: InvoicePayment) -> InvoicePayment:
        pass

    @abstractmethod
    async def list_by_invoice(self, invoice_id: int) -> List[InvoicePayment]:
        pass

    @abstractmethod
    async def sum_completed_by_invoice(self, invoice_id: int) -> Decimal:
        """Completed payments of one invoice (0 when none)"""
        pass

    @abstractmethod
    async def sum_completed_by_order(self, order_id: int) -> Decimal:
        """Completed payments across the live invoices of an order"""
        pass
