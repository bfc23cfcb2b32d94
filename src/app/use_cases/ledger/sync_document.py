"""SyncDocument Use Case

Recalculate a document on demand. Running it twice without data changes
leaves totals unchanged and records no new history.
"""

from typing import Optional
from libs.result import Result, Return
from src.app.services.financials.base import Recalculable
from src.app.services.financials.purchase_order import PurchaseOrderFinancials
from src.app.services.notification_service import NotificationService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.document_type import DocumentType
from .base import LedgerUseCase, summarize
from .dtos import DocumentSummaryDTO


class SyncDocument(LedgerUseCase):

    def __init__(
        self,
        uow: UnitOfWork,
        document_type: DocumentType,
        financials: Recalculable,
        notifier: Optional[NotificationService] = None,
    ):
        super().__init__(uow, notifier)
        self.document_type = document_type
        self.financials = financials

    async def execute(self, document_id: int) -> Result[DocumentSummaryDTO]:
        try:
            outcome = await self.financials.sync(document_id)
            transitions = list(outcome.transitions)
            document = outcome.document

            if isinstance(self.financials, PurchaseOrderFinancials):
                approval_outcome = await self.financials.sync_approvals(document_id)
                transitions.extend(approval_outcome.transitions)
                document = approval_outcome.document

            await self.uow.commit()
            await self.notify(transitions)

            return Return.ok(summarize(self.document_type, document, transitions))

        except Exception as e:
            return await self.fail(e, "SYNC_FINANCIALS_FAILED", f"Failed to sync {self.document_type.value}")
