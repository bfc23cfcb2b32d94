"""Purchase order receipt use case"""

from datetime import datetime
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.repositories.purchase_order_receipt_repository import PurchaseOrderReceiptRepository
from src.app.repositories.purchase_order_repository import PurchaseOrderRepository
from src.app.services.financials.purchase_order import PurchaseOrderFinancials
from src.app.services.identity_provider import IdentityProvider
from src.app.services.notification_service import NotificationService
from src.app.services.reference_number_generator import ReferenceNumberGenerator
from src.app.services.unit_of_work import UnitOfWork
from src.domain.document_type import DocumentType
from src.domain.errors import DocumentNotFoundError, InvalidQuantityError, TerminalStatusError
from src.domain.money import round2, to_decimal
from src.domain.purchase_order_receipt import PurchaseOrderReceipt
from .base import LedgerUseCase, is_terminal, summarize
from .dtos import DocumentSummaryDTO, RecordReceiptCommandDTO


class RecordReceipt(LedgerUseCase):
    """
    Use Case: Receive (or return) goods against a purchase order line

    Flow:
    1. Lock the purchase order; reject terminal ones
    2. Check the line belongs to the purchase order
    3. Number the receipt (POR-YYYY-NNNNN) and persist it
    4. Sync financials, then the approval state
    5. Commit and notify
    """

    def __init__(
        self,
        uow: UnitOfWork,
        purchase_order_repo: PurchaseOrderRepository,
        line_repo: LineItemRepository,
        receipt_repo: PurchaseOrderReceiptRepository,
        reference_numbers: ReferenceNumberGenerator,
        financials: PurchaseOrderFinancials,
        identity: Optional[IdentityProvider] = None,
        notifier: Optional[NotificationService] = None,
    ):
        super().__init__(uow, notifier)
        self.purchase_order_repo = purchase_order_repo
        self.line_repo = line_repo
        self.receipt_repo = receipt_repo
        self.reference_numbers = reference_numbers
        self.financials = financials
        self.identity = identity

    async def execute(self, command: RecordReceiptCommandDTO) -> Result[DocumentSummaryDTO]:
        try:
            if to_decimal(command.quantity) <= 0:
                raise InvalidQuantityError("Receipt quantity must be greater than 0")

            purchase_order = await self.purchase_order_repo.get_by_id(command.purchase_order_id, for_update=True)
            if purchase_order is None:
                raise DocumentNotFoundError(f"purchase_order {command.purchase_order_id} not found")
            if is_terminal(purchase_order):
                raise TerminalStatusError(f"Purchase order {purchase_order.id} is {purchase_order.status.value}")

            line = await self.line_repo.get_by_id(command.purchase_order_line_item_id)
            if line is None or line.purchase_order_id != purchase_order.id:
                raise DocumentNotFoundError(
                    f"Line item {command.purchase_order_line_item_id} not found on purchase order {purchase_order.id}",
                    code="LINE_ITEM_NOT_FOUND",
                )

            unit_cost = command.unit_cost if command.unit_cost is not None else line.unit_cost
            receipt = PurchaseOrderReceipt(
                purchase_order_id=purchase_order.id,
                purchase_order_line_item_id=line.id,
                tenant_id=purchase_order.tenant_id,
                received_by_id=self.identity.current_user_id() if self.identity else None,
                receipt_type=command.receipt_type,
                quantity=command.quantity,
                unit_cost=round2(unit_cost),
                line_total=round2(to_decimal(command.quantity) * to_decimal(unit_cost)),
                received_at=command.received_at or datetime.utcnow(),
                notes=command.notes,
            )
            await self.reference_numbers.register(
                receipt, DocumentType.PURCHASE_ORDER_RECEIPT, seed_loader=self.receipt_repo.max_sequence
            )
            await self.receipt_repo.create(receipt)

            outcome = await self.financials.sync(purchase_order.id, note=f"Receipt {receipt.reference}")
            approval_outcome = await self.financials.sync_approvals(purchase_order.id)
            transitions = outcome.transitions + approval_outcome.transitions

            await self.uow.commit()
            await self.notify(transitions)

            return Return.ok(summarize(DocumentType.PURCHASE_ORDER, approval_outcome.document, transitions))

        except Exception as e:
            return await self.fail(e, "RECORD_RECEIPT_FAILED", "Failed to record receipt")
