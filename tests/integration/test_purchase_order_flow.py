"""Integration tests for purchase order and quote workflows

Tests cover:
- Approval request and decision driving the purchase order status
- Receipts numbered POR-YYYY-NNNNN and rolled into received cost
- Closing as a terminal status
- Quote send/accept decisions and the line snapshot
"""

import pytest
from datetime import datetime
from decimal import Decimal

from src.app.use_cases.ledger import (
    ChangeQuoteStatus,
    ClosePurchaseOrder,
    CreatePurchaseOrder,
    CreatePurchaseOrderCommandDTO,
    CreateQuote,
    CreateQuoteCommandDTO,
    DecideApproval,
    DecideApprovalCommandDTO,
    GetPurchaseOrder,
    GetQuote,
    LineItemInputDTO,
    QuoteAction,
    RecordReceipt,
    RecordReceiptCommandDTO,
    RequestApproval,
    RequestApprovalCommandDTO,
)
from src.domain.document_type import DocumentType
from src.domain.purchase_order_approval import ApprovalStatus
from src.domain.quote_line_item import QuoteDiscountType


async def create_purchase_order(ledger):
    use_case = CreatePurchaseOrder(
        ledger.uow,
        ledger.purchase_orders,
        ledger.purchase_order_lines,
        ledger.purchase_order_financials,
        reference_numbers=ledger.reference_numbers,
        identity=ledger.identity,
        order_repo=ledger.orders,
    )
    result = await use_case.execute(
        CreatePurchaseOrderCommandDTO(
            vendor_name="Acme Supply",
            freight_total=Decimal("12.00"),
            line_items=[LineItemInputDTO(name="Bolts", quantity=Decimal("10"), unit_price=Decimal("5.00"))],
        )
    )
    assert result.is_ok(), result.error
    return result.value


class TestPurchaseOrderFlow:
    """Test a purchase order from draft to closed"""

    @pytest.mark.asyncio
    async def test_approve_receive_and_close(self, ledger):
        # Arrange
        purchase_order = await create_purchase_order(ledger)
        approvals = dict(
            uow=ledger.uow,
            purchase_order_repo=ledger.purchase_orders,
            approval_repo=ledger.approvals,
            financials=ledger.purchase_order_financials,
            identity=ledger.identity,
        )
        year = datetime.utcnow().year

        # Act
        requested = await RequestApproval(**approvals).execute(
            RequestApprovalCommandDTO(purchase_order_id=purchase_order.id, approver_id="manager_1")
        )
        pending = await ledger.approvals.list_by_purchase_order(purchase_order.id)
        approved = await DecideApproval(**approvals).execute(
            DecideApprovalCommandDTO(
                purchase_order_id=purchase_order.id, approval_id=pending[0].id, status=ApprovalStatus.APPROVED
            )
        )

        lines = await ledger.purchase_order_lines.list_by_document(purchase_order.id)
        received = await RecordReceipt(
            ledger.uow,
            ledger.purchase_orders,
            ledger.purchase_order_lines,
            ledger.receipts,
            ledger.reference_numbers,
            ledger.purchase_order_financials,
            identity=ledger.identity,
        ).execute(
            RecordReceiptCommandDTO(
                purchase_order_id=purchase_order.id,
                purchase_order_line_item_id=lines[0].id,
                quantity=Decimal("10"),
            )
        )

        closed = await ClosePurchaseOrder(
            ledger.uow, ledger.purchase_orders, ledger.purchase_order_financials
        ).execute(purchase_order.id)

        # Assert
        assert purchase_order.number == f"PO-{year}-00001"
        assert purchase_order.total == Decimal("62.00")
        assert requested.value.status == "pending_approval"
        assert approved.value.status == "approved"
        assert received.value.status == "received"
        assert closed.value.status == "closed"

        detail = (
            await GetPurchaseOrder(
                ledger.purchase_orders, ledger.purchase_order_lines, ledger.receipts, ledger.approvals
            ).execute(purchase_order.id)
        ).value
        assert detail.received_cost == Decimal("50.00")
        assert detail.outstanding_commitment == Decimal("12.00")
        assert detail.approved_at is not None
        assert detail.closed_at is not None
        assert detail.receipts[0].reference == f"POR-{year}-00001"
        assert detail.line_items[0].received_quantity == Decimal("10")

        history = await ledger.history.list_by_document(DocumentType.PURCHASE_ORDER, purchase_order.id)
        assert [(h.from_status, h.to_status) for h in history] == [
            ("draft", "pending_approval"),
            ("pending_approval", "approved"),
            ("approved", "received"),
            ("received", "closed"),
        ]

    @pytest.mark.asyncio
    async def test_rejection_cancels_purchase_order(self, ledger):
        # Arrange
        purchase_order = await create_purchase_order(ledger)
        approvals = dict(
            uow=ledger.uow,
            purchase_order_repo=ledger.purchase_orders,
            approval_repo=ledger.approvals,
            financials=ledger.purchase_order_financials,
        )
        await RequestApproval(**approvals).execute(RequestApprovalCommandDTO(purchase_order_id=purchase_order.id))
        pending = await ledger.approvals.list_by_purchase_order(purchase_order.id)

        # Act
        result = await DecideApproval(**approvals).execute(
            DecideApprovalCommandDTO(
                purchase_order_id=purchase_order.id,
                approval_id=pending[0].id,
                status=ApprovalStatus.REJECTED,
                notes="Over budget",
            )
        )

        # Assert
        assert result.value.status == "cancelled"
        stored = await ledger.purchase_orders.get_by_id(purchase_order.id)
        assert stored.cancelled_at is not None
        assert stored.deleted_at is not None


class TestQuoteFlow:
    """Test quote totals and explicit decisions"""

    @pytest.mark.asyncio
    async def test_send_and_accept_quote(self, ledger):
        # Arrange
        created = await CreateQuote(
            ledger.uow,
            ledger.quotes,
            ledger.quote_lines,
            ledger.quote_financials,
            identity=ledger.identity,
        ).execute(
            CreateQuoteCommandDTO(
                title="Website redesign",
                line_items=[
                    LineItemInputDTO(
                        name="Design",
                        sku="DSN-1",
                        quantity=Decimal("2"),
                        unit_price=Decimal("50.00"),
                        discount_type=QuoteDiscountType.PERCENT,
                        discount_value=Decimal("10"),
                    )
                ],
            )
        )
        quote = created.value
        change_status = ChangeQuoteStatus(ledger.uow, ledger.quotes, ledger.quote_financials)

        # Act
        sent = await change_status.execute(quote.id, QuoteAction.SEND)
        accepted = await change_status.execute(quote.id, QuoteAction.ACCEPT, note="Signed")
        detail = (await GetQuote(ledger.quotes, ledger.quote_lines).execute(quote.id)).value

        # Assert
        assert quote.number is None
        assert quote.status == "draft"
        assert quote.total == Decimal("90.00")
        assert quote.discount_total == Decimal("10.00")
        assert sent.value.status == "sent"
        assert accepted.value.status == "accepted"
        assert detail.decision_note == "Signed"
        assert detail.accepted_at is not None
        assert detail.is_expired is False
        assert detail.snapshot[0]["sku"] == "DSN-1"
        assert detail.snapshot[0]["line_total"] == "90.00"

        history = await ledger.history.list_by_document(DocumentType.QUOTE, quote.id)
        assert [(h.from_status, h.to_status) for h in history] == [("draft", "sent"), ("sent", "accepted")]
