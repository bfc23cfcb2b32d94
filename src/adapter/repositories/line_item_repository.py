"""SQLAlchemy implementations of LineItemRepository

One class per document type, differing only in model and parent column.
"""

from datetime import datetime
from typing import Generic, List, Optional, Type, TypeVar
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.invoice_line_item import InvoiceLineItem
from src.domain.order_line_item import OrderLineItem
from src.domain.purchase_order_line_item import PurchaseOrderLineItem
from src.domain.quote_line_item import QuoteLineItem

T = TypeVar("T")


class SqlAlchemyLineItemRepository(LineItemRepository[T], Generic[T]):
    model: Type[T]
    parent_field: str

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, item: T) -> T:
        self.session.add(item)
        await self.session.flush()
        await self.session.refresh(item)
        return item

    async def get_by_id(self, item_id: int) -> Optional[T]:
        stmt = select(self.model).where(self.model.id == item_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, item: T) -> T:
        item.updated_at = datetime.utcnow()
        self.session.add(item)
        await self.session.flush()
        return item

    async def delete(self, item: T) -> None:
        await self.session.delete(item)
        await self.session.flush()

    async def list_by_document(self, document_id: int) -> List[T]:
        parent_column = getattr(self.model, self.parent_field)
        stmt = (
            select(self.model)
            .where(parent_column == document_id)
            .order_by(self.model.sort_order, self.model.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class SqlAlchemyInvoiceLineItemRepository(SqlAlchemyLineItemRepository[InvoiceLineItem]):
    model = InvoiceLineItem
    parent_field = "invoice_id"


class SqlAlchemyOrderLineItemRepository(SqlAlchemyLineItemRepository[OrderLineItem]):
    model = OrderLineItem
    parent_field = "order_id"


class SqlAlchemyQuoteLineItemRepository(SqlAlchemyLineItemRepository[QuoteLineItem]):
    model = QuoteLineItem
    parent_field = "quote_id"


class SqlAlchemyPurchaseOrderLineItemRepository(SqlAlchemyLineItemRepository[PurchaseOrderLineItem]):
    model = PurchaseOrderLineItem
    parent_field = "purchase_order_id"
