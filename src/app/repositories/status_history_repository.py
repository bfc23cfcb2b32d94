"""Status History Repository Interface"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.document_type import DocumentType
from src.domain.status_history import StatusHistory


class StatusHistoryRepository(ABC):
    """Append-only: there is no update or delete"""

    @abstractmethod
    async def create(self, history: StatusHistory) -> StatusHistory:
        pass

    @abstractmethod
    async def list_by_document(self, document_type: DocumentType, document_id: int) -> List[StatusHistory]:
        """History of one document, oldest first"""
        pass
