"""SQLAlchemy base for ledger document repositories

Provides create/get/update with pessimistic locking and the sequence seed
query shared by every numbered document.
"""

from datetime import datetime
from typing import Generic, Optional, Type, TypeVar
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

T = TypeVar("T")


class SqlAlchemyDocumentRepository(Generic[T]):
    """
    Shared SQLAlchemy persistence for a document model

    Subclasses set `model` and mix in their repository interface.
    """

    model: Type[T]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: T) -> T:
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def get_by_id(self, document_id: int, for_update: bool = False) -> Optional[T]:
        """
        Retrieve a document by ID with optional row-level locking

        Args:
            document_id: Document ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Document if found, None otherwise
        """
        stmt = select(self.model).where(self.model.id == document_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, document: T) -> T:
        document.updated_at = datetime.utcnow()
        self.session.add(document)
        await self.session.flush()
        return document

    async def max_sequence(self, tenant_id: str, number_prefix: str) -> int:
        stmt = select(func.max(self.model.sequence)).where(
            self.model.tenant_id == tenant_id,
            self.model.number.like(f"{number_prefix}%"),
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one_or_none() or 0)
