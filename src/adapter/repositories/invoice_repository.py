"""SQLAlchemy implementation of InvoiceRepository"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import func
from sqlmodel import select
from src.adapter.repositories.document_repository import SqlAlchemyDocumentRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice, InvoiceStatus

OPEN_STATUSES = (InvoiceStatus.SENT, InvoiceStatus.PARTIAL, InvoiceStatus.OVERDUE)


class SqlAlchemyInvoiceRepository(SqlAlchemyDocumentRepository[Invoice], InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Order aggregates skip soft-deleted invoices.
    """

    model = Invoice

    async def list_by_order(self, order_id: int) -> List[Invoice]:
        stmt = (
            select(Invoice)
            .where(Invoice.order_id == order_id, Invoice.deleted_at.is_(None))
            .order_by(Invoice.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def sum_totals_by_order(self, order_id: int) -> Decimal:
        stmt = select(func.coalesce(func.sum(Invoice.total), 0)).where(
            Invoice.order_id == order_id, Invoice.deleted_at.is_(None)
        )
        result = await self.session.execute(stmt)
        return Decimal(str(result.scalar_one()))

    async def exists_for_order(self, order_id: int) -> bool:
        stmt = select(func.count(Invoice.id)).where(
            Invoice.order_id == order_id, Invoice.deleted_at.is_(None)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one() > 0

    async def list_overdue_candidates(
        self, as_of: date, limit: int = 500, after_id: Optional[int] = None
    ) -> List[Invoice]:
        stmt = select(Invoice).where(
            Invoice.status.in_(OPEN_STATUSES),
            Invoice.due_date.is_not(None),
            Invoice.due_date <= as_of,
            Invoice.deleted_at.is_(None),
        )
        if after_id is not None:
            stmt = stmt.where(Invoice.id > after_id)
        stmt = stmt.order_by(Invoice.id).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
