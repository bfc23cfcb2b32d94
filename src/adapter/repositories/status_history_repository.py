"""SQLAlchemy implementation of StatusHistoryRepository"""

from typing import List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.status_history_repository import StatusHistoryRepository
from src.domain.document_type import DocumentType
from src.domain.status_history import StatusHistory


class SqlAlchemyStatusHistoryRepository(StatusHistoryRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, history: StatusHistory) -> StatusHistory:
        self.session.add(history)
        await self.session.flush()
        await self.session.refresh(history)
        return history

    async def list_by_document(self, document_type: DocumentType, document_id: int) -> List[StatusHistory]:
        stmt = (
            select(StatusHistory)
            .where(
                StatusHistory.document_type == document_type,
                StatusHistory.document_id == document_id,
            )
            .order_by(StatusHistory.created_at, StatusHistory.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
