"""Invoice Repository Interface"""

from abc import abstractmethod
from datetime import date
from decimal import Decimal
from typing import List, Optional
from src.app.repositories.document_repository import DocumentRepository
from src.domain.invoice import Invoice


class InvoiceRepository(DocumentRepository[Invoice]):
    """
    Repository interface for Invoice persistence

    Order aggregates only consider invoices that are not soft-deleted.
    """

    @abstractmethod
    async def list_by_order(self, order_id: int) -> List[Invoice]:
        """Live invoices raised against an order"""
        pass

    @abstractmethod
    async def sum_totals_by_order(self, order_id: int) -> Decimal:
        """Sum of live invoice totals for an order (0 when none)"""
        pass

    @abstractmethod
    async def exists_for_order(self, order_id: int) -> bool:
        pass

    @abstractmethod
    async def list_overdue_candidates(
        self, as_of: date, limit: int = 500, after_id: Optional[int] = None
    ) -> List[Invoice]:
        """
        Open invoices (sent, partial, overdue) due on or before as_of

        Args:
            as_of: Reference date
            limit: Maximum number of invoices to return
            after_id: Only invoices with a larger id (keyset page cursor)

        Returns:
            Invoices ordered by id
        """
        pass
