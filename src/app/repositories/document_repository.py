"""Ledger Document Repository Interface

Shared contract for invoices, orders, quotes and purchase orders.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class DocumentRepository(ABC, Generic[T]):
    """
    Repository interface for a ledger document

    Implementations flush but never commit; the unit of work owns commits.
    """

    @abstractmethod
    async def create(self, document: T) -> T:
        """
        Persist a new document

        Args:
            document: Document entity to persist

        Returns:
            Created document with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, document_id: int, for_update: bool = False) -> Optional[T]:
        """
        Retrieve a document by ID (soft-deleted documents included)

        Args:
            document_id: Document ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Document if found, None otherwise
        """
        pass

    @abstractmethod
    async def update(self, document: T) -> T:
        """Write recomputed fields of an existing document"""
        pass

    @abstractmethod
    async def max_sequence(self, tenant_id: str, number_prefix: str) -> int:
        """
        Highest sequence already stored for numbers starting with number_prefix

        Used to seed a fresh reference counter. Returns 0 when none exist.
        """
        pass
