"""Purchase order approval use cases"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.purchase_order_approval_repository import PurchaseOrderApprovalRepository
from src.app.repositories.purchase_order_repository import PurchaseOrderRepository
from src.app.services.financials.purchase_order import PurchaseOrderFinancials
from src.app.services.identity_provider import IdentityProvider
from src.app.services.notification_service import NotificationService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.document_type import DocumentType
from src.domain.errors import DocumentNotFoundError, InvalidTransitionError, TerminalStatusError
from src.domain.purchase_order_approval import ApprovalStatus, PurchaseOrderApproval
from .base import LedgerUseCase, is_terminal, summarize
from .dtos import DecideApprovalCommandDTO, DocumentSummaryDTO, RequestApprovalCommandDTO

OPEN_APPROVAL_STATUSES = (ApprovalStatus.PENDING, ApprovalStatus.ESCALATED)


class _ApprovalUseCase(LedgerUseCase):

    def __init__(
        self,
        uow: UnitOfWork,
        purchase_order_repo: PurchaseOrderRepository,
        approval_repo: PurchaseOrderApprovalRepository,
        financials: PurchaseOrderFinancials,
        identity: Optional[IdentityProvider] = None,
        notifier: Optional[NotificationService] = None,
    ):
        super().__init__(uow, notifier)
        self.purchase_order_repo = purchase_order_repo
        self.approval_repo = approval_repo
        self.financials = financials
        self.identity = identity

    async def _load_open_purchase_order(self, purchase_order_id: int):
        purchase_order = await self.purchase_order_repo.get_by_id(purchase_order_id, for_update=True)
        if purchase_order is None:
            raise DocumentNotFoundError(f"purchase_order {purchase_order_id} not found")
        if is_terminal(purchase_order):
            raise TerminalStatusError(f"Purchase order {purchase_order_id} is {purchase_order.status.value}")
        return purchase_order

    def _user_id(self) -> Optional[str]:
        return self.identity.current_user_id() if self.identity else None

    async def _sync_and_commit(self, purchase_order_id: int, note: str) -> DocumentSummaryDTO:
        outcome = await self.financials.sync_approvals(purchase_order_id, note=note)
        await self.uow.commit()
        await self.notify(outcome.transitions)
        return summarize(DocumentType.PURCHASE_ORDER, outcome.document, outcome.transitions)


class RequestApproval(_ApprovalUseCase):
    """Use Case: Ask for an approval; the purchase order moves to pending_approval"""

    async def execute(self, command: RequestApprovalCommandDTO) -> Result[DocumentSummaryDTO]:
        try:
            purchase_order = await self._load_open_purchase_order(command.purchase_order_id)

            await self.approval_repo.create(
                PurchaseOrderApproval(
                    purchase_order_id=purchase_order.id,
                    tenant_id=purchase_order.tenant_id,
                    requested_by_id=self._user_id(),
                    approver_id=command.approver_id,
                    status=ApprovalStatus.PENDING,
                    due_at=command.due_at,
                )
            )

            return Return.ok(await self._sync_and_commit(purchase_order.id, "Approval requested"))

        except Exception as e:
            return await self.fail(e, "REQUEST_APPROVAL_FAILED", "Failed to request approval")


class DecideApproval(_ApprovalUseCase):
    """
    Use Case: Approve, reject or escalate a pending approval

    Business Rules:
    1. Only pending or escalated approvals can be decided
    2. Any rejection cancels the purchase order
    3. When every approval is approved the purchase order is approved
    """

    async def execute(self, command: DecideApprovalCommandDTO) -> Result[DocumentSummaryDTO]:
        try:
            purchase_order = await self._load_open_purchase_order(command.purchase_order_id)

            approval = await self.approval_repo.get_by_id(command.approval_id)
            if approval is None or approval.purchase_order_id != purchase_order.id:
                raise DocumentNotFoundError(
                    f"Approval {command.approval_id} not found on purchase order {purchase_order.id}",
                    code="APPROVAL_NOT_FOUND",
                )
            if approval.status not in OPEN_APPROVAL_STATUSES:
                raise InvalidTransitionError(f"Approval {approval.id} is already {approval.status.value}")
            if command.status == ApprovalStatus.PENDING:
                raise InvalidTransitionError("An approval cannot be decided as pending")

            approval.status = command.status
            approval.decision_notes = command.notes
            approval.approver_id = approval.approver_id or self._user_id()
            if command.status != ApprovalStatus.ESCALATED:
                approval.decided_at = self.financials.clock()
            await self.approval_repo.update(approval)

            return Return.ok(await self._sync_and_commit(purchase_order.id, f"Approval {command.status.value}"))

        except Exception as e:
            return await self.fail(e, "DECIDE_APPROVAL_FAILED", "Failed to decide approval")
