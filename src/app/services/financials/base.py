"""Recalculation base

A Recalculable recomputes one document inside the caller's transaction and
then asks its parent document (if any) to do the same.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Generic, List, Optional, Tuple, TypeVar
from src.app.repositories.status_history_repository import StatusHistoryRepository
from src.app.services.identity_provider import IdentityProvider
from src.domain.document_type import DocumentType
from src.domain.errors import DocumentNotFoundError
from src.domain.status_engine import status_changed
from src.domain.status_history import StatusHistory

logger = logging.getLogger(__name__)

T = TypeVar("T")

Clock = Callable[[], datetime]


@dataclass
class SyncOutcome(Generic[T]):
    """Result of a sync: the written document and every transition recorded on the way"""
    document: T
    transitions: List[StatusHistory] = field(default_factory=list)


def _status_value(status) -> Optional[str]:
    if status is None:
        return None
    return status.value if hasattr(status, "value") else str(status)


class Recalculable(ABC, Generic[T]):
    """
    Shared skeleton of the syncFinancials orchestrators

    Subclasses implement `recalculate` (load with lock, compute, write once)
    and optionally `parent_of` to cascade upwards.
    """

    document_type: DocumentType

    def __init__(
        self,
        history_repo: StatusHistoryRepository,
        identity: Optional[IdentityProvider] = None,
        clock: Optional[Clock] = None,
    ):
        self.history_repo = history_repo
        self.identity = identity
        self.clock = clock or datetime.utcnow

    async def sync(self, document_id: int, note: Optional[str] = None) -> SyncOutcome[T]:
        """
        Recalculate a document, then cascade to its parent

        Args:
            document_id: ID of the document to recalculate
            note: Optional note stored on any status history row

        Returns:
            SyncOutcome with the document and all transitions (parent included)

        Raises:
            DocumentNotFoundError: the document does not exist
        """
        outcome = await self.recalculate(document_id, note)

        parent = self.parent_of(outcome.document)
        if parent is not None:
            recalculable, parent_id = parent
            parent_outcome = await recalculable.sync(parent_id)
            outcome.transitions.extend(parent_outcome.transitions)

        return outcome

    @abstractmethod
    async def recalculate(self, document_id: int, note: Optional[str] = None) -> SyncOutcome[T]:
        pass

    def parent_of(self, document: T) -> Optional[Tuple["Recalculable", int]]:
        return None

    def not_found(self, document_id: int) -> DocumentNotFoundError:
        return DocumentNotFoundError(f"{self.document_type.value} {document_id} not found")

    def current_user_id(self) -> Optional[str]:
        return self.identity.current_user_id() if self.identity else None

    async def record_transition(self, document, previous, following, note: Optional[str] = None) -> Optional[StatusHistory]:
        """Append a StatusHistory row when the status actually changed"""
        if not status_changed(previous, following):
            return None

        history = StatusHistory(
            tenant_id=document.tenant_id,
            document_type=self.document_type,
            document_id=document.id,
            from_status=_status_value(previous),
            to_status=_status_value(following),
            changed_by=self.current_user_id(),
            note=note,
        )
        created = await self.history_repo.create(history)

        logger.info(
            f"{self.document_type.value} {document.id}: "
            f"{history.from_status} -> {history.to_status}"
        )
        return created
