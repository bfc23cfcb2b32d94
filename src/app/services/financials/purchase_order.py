"""Purchase order financials sync

Two independent sub-engines: receiving (driven by receipts) and approval
(driven by approval decisions).
"""

from collections import defaultdict
from decimal import Decimal
from typing import Optional, Tuple
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.repositories.purchase_order_approval_repository import PurchaseOrderApprovalRepository
from src.app.repositories.purchase_order_receipt_repository import PurchaseOrderReceiptRepository
from src.app.repositories.purchase_order_repository import PurchaseOrderRepository
from src.app.services.financials.base import Recalculable, SyncOutcome
from src.app.services.financials.order import OrderFinancials
from src.domain.document_type import DocumentType
from src.domain.line_item import compute_line_totals, normalize_fulfillment
from src.domain.money import non_negative, to_decimal
from src.domain.purchase_order import PurchaseOrder, PurchaseOrderStatus
from src.domain.status_engine import next_purchase_order_approval_status, next_purchase_order_receiving_status
from src.domain.totals import calculate_balance_due, calculate_document_totals


class PurchaseOrderFinancials(Recalculable[PurchaseOrder]):
    document_type = DocumentType.PURCHASE_ORDER

    def __init__(
        self,
        purchase_order_repo: PurchaseOrderRepository,
        line_repo: LineItemRepository,
        receipt_repo: PurchaseOrderReceiptRepository,
        approval_repo: PurchaseOrderApprovalRepository,
        history_repo,
        identity=None,
        order_financials: Optional[OrderFinancials] = None,
        strict_quantities: bool = False,
        clock=None,
    ):
        super().__init__(history_repo, identity, clock)
        self.purchase_order_repo = purchase_order_repo
        self.line_repo = line_repo
        self.receipt_repo = receipt_repo
        self.approval_repo = approval_repo
        self.order_financials = order_financials
        self.strict_quantities = strict_quantities

    async def recalculate(self, document_id: int, note: Optional[str] = None) -> SyncOutcome[PurchaseOrder]:
        """
        Recompute committed totals and receiving progress

        received_quantity per line is the signed sum of its receipts (returns
        count negative), clamped to [0, quantity]. received_cost is the signed
        sum of receipt totals, never below zero.
        """
        purchase_order = await self.purchase_order_repo.get_by_id(document_id, for_update=True)
        if purchase_order is None:
            raise self.not_found(document_id)

        receipts = await self.receipt_repo.list_by_purchase_order(purchase_order.id)
        received_by_line = defaultdict(lambda: Decimal("0"))
        received_cost = Decimal("0")
        for receipt in receipts:
            received_by_line[receipt.purchase_order_line_item_id] += receipt.signed_quantity()
            received_cost += receipt.signed_total()
        received_cost = non_negative(received_cost)

        amounts = []
        quantities = []
        for line in await self.line_repo.list_by_document(purchase_order.id):
            computed = compute_line_totals(line.quantity, line.unit_cost, line.tax_rate)
            received = normalize_fulfillment(
                line.quantity, received_by_line[line.id], strict=self.strict_quantities
            )
            if (
                line.line_total != computed.line_total
                or line.tax_total != computed.tax_total
                or to_decimal(line.received_quantity) != received
            ):
                line.line_total = computed.line_total
                line.tax_total = computed.tax_total
                line.received_quantity = received
                await self.line_repo.update(line)
            amounts.append(computed)
            quantities.append((line.quantity, received))

        totals = calculate_document_totals(
            amounts,
            freight_total=purchase_order.freight_total,
            fee_total=purchase_order.fee_total,
        )

        previous = purchase_order.status or PurchaseOrderStatus.DRAFT
        following = next_purchase_order_receiving_status(previous, quantities, received_cost)

        purchase_order.subtotal = totals.subtotal
        purchase_order.tax_total = totals.tax_total
        purchase_order.freight_total = totals.freight_total
        purchase_order.fee_total = totals.fee_total
        purchase_order.total = totals.total
        purchase_order.received_cost = received_cost
        purchase_order.outstanding_commitment = calculate_balance_due(totals.total, received_cost)
        purchase_order.last_received_at = max((r.received_at for r in receipts), default=None)
        purchase_order.status = following

        await self.purchase_order_repo.update(purchase_order)

        outcome = SyncOutcome(purchase_order)
        history = await self.record_transition(purchase_order, previous, following, note)
        if history is not None:
            outcome.transitions.append(history)
        return outcome

    async def sync_approvals(self, document_id: int, note: Optional[str] = None) -> SyncOutcome[PurchaseOrder]:
        """
        Apply the approval sub-engine

        Leaves the purchase order untouched when there is nothing to decide.
        A rejection cancels and soft-deletes the purchase order, then cascades
        to its order the way a direct cancellation does.
        """
        purchase_order = await self.purchase_order_repo.get_by_id(document_id, for_update=True)
        if purchase_order is None:
            raise self.not_found(document_id)

        approvals = await self.approval_repo.list_by_purchase_order(purchase_order.id)
        previous = purchase_order.status or PurchaseOrderStatus.DRAFT
        decision = next_purchase_order_approval_status(
            previous,
            [(approval.status, approval.decided_at) for approval in approvals],
            self.clock(),
        )

        outcome = SyncOutcome(purchase_order)
        if decision is None:
            return outcome

        purchase_order.status = decision.status
        purchase_order.approved_at = decision.approved_at
        cancelled = decision.status == PurchaseOrderStatus.CANCELLED
        if cancelled:
            now = self.clock()
            purchase_order.cancelled_at = purchase_order.cancelled_at or now
            purchase_order.deleted_at = purchase_order.deleted_at or now

        await self.purchase_order_repo.update(purchase_order)

        history = await self.record_transition(purchase_order, previous, decision.status, note)
        if history is not None:
            outcome.transitions.append(history)

        parent = self.parent_of(purchase_order) if cancelled else None
        if parent is not None:
            recalculable, parent_id = parent
            parent_outcome = await recalculable.sync(parent_id)
            outcome.transitions.extend(parent_outcome.transitions)
        return outcome

    def parent_of(self, document: PurchaseOrder) -> Optional[Tuple[Recalculable, int]]:
        if self.order_financials is not None and document.order_id:
            return self.order_financials, document.order_id
        return None
