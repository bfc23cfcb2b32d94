"""Shared plumbing of ledger use cases

Failure mapping to Result errors and post-commit notifications.
"""

import logging
from typing import Iterable, Optional
from libs.result import Error, Return
from src.app.services.notification_service import NotificationService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.document_type import DocumentType
from src.domain.errors import LedgerDomainError
from src.domain.status_history import StatusHistory
from .dtos import DocumentSummaryDTO, StatusHistoryDTO

logger = logging.getLogger(__name__)

TERMINAL_STATUS_VALUES = ("cancelled", "closed")


def status_value(status) -> str:
    return status.value if hasattr(status, "value") else str(status)


def is_terminal(document) -> bool:
    return document.deleted_at is not None or status_value(document.status) in TERMINAL_STATUS_VALUES


def summarize(document_type: DocumentType, document, transitions: Iterable[StatusHistory] = ()) -> DocumentSummaryDTO:
    return DocumentSummaryDTO(
        document_type=document_type,
        id=document.id,
        tenant_id=document.tenant_id,
        number=getattr(document, "number", None),
        status=status_value(document.status),
        subtotal=document.subtotal,
        discount_total=getattr(document, "discount_total", None) or 0,
        tax_total=document.tax_total,
        total=document.total,
        balance_due=getattr(document, "balance_due", getattr(document, "outstanding_commitment", None)),
        transitions=[StatusHistoryDTO.model_validate(h) for h in transitions],
    )


class LedgerUseCase:
    """
    Base class of write use cases

    Subclasses call `fail` from their exception handler and `notify` after
    a successful commit.
    """

    def __init__(self, uow: UnitOfWork, notifier: Optional[NotificationService] = None):
        self.uow = uow
        self.notifier = notifier

    async def fail(self, e: Exception, code: str, message: str):
        """Roll back and translate an exception into Return.err"""
        await self.uow.rollback()

        if isinstance(e, LedgerDomainError):
            logger.warning(f"{type(self).__name__} rejected: {e.code} {e.message}")
            return Return.err(Error(code=e.code, message=e.message, reason=message))

        logger.error(f"{type(self).__name__} failed: {e}")
        return Return.err(Error(code=code, message=message, reason=str(e)))

    async def notify(self, transitions: Iterable[StatusHistory]) -> None:
        if self.notifier is None:
            return
        for history in transitions:
            try:
                await self.notifier.send_status_change(history)
            except Exception as e:
                logger.error(
                    f"Status notification failed for {history.document_type.value} {history.document_id}: {e}"
                )
