"""Line Item Repository Interface

One implementation per document type; all share this contract.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class LineItemRepository(ABC, Generic[T]):

    @abstractmethod
    async def create(self, item: T) -> T:
        pass

    @abstractmethod
    async def get_by_id(self, item_id: int) -> Optional[T]:
        pass

    @abstractmethod
    async def update(self, item: T) -> T:
        pass

    @abstractmethod
    async def delete(self, item: T) -> None:
        pass

    @abstractmethod
    async def list_by_document(self, document_id: int) -> List[T]:
        """
        Line items of a document ordered by sort_order, then id

        Args:
            document_id: ID of the owning document

        Returns:
            List of line items (empty when the document has none)
        """
        pass
