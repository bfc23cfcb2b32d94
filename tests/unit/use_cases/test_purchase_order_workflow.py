"""Unit tests for purchase order receipts and approvals

Tests cover:
- Receipts are numbered, persisted and drive both sub-engines
- Receipt unit cost defaults to the line's unit cost
- Approval requests and decisions
"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.services.financials.base import SyncOutcome
from src.app.use_cases.ledger.approvals import DecideApproval, RequestApproval
from src.app.use_cases.ledger.dtos import (
    DecideApprovalCommandDTO,
    RecordReceiptCommandDTO,
    RequestApprovalCommandDTO,
)
from src.app.use_cases.ledger.receipts import RecordReceipt
from src.domain.document_type import DocumentType
from src.domain.purchase_order import PurchaseOrder, PurchaseOrderStatus
from src.domain.purchase_order_approval import ApprovalStatus, PurchaseOrderApproval
from src.domain.purchase_order_line_item import PurchaseOrderLineItem
from src.domain.status_history import StatusHistory

NOW = datetime(2025, 3, 10, 12, 0, 0)


@pytest.fixture
def sample_purchase_order():
    return PurchaseOrder(
        id=3, tenant_id="tenant_123", number="PO-2025-00001", status=PurchaseOrderStatus.APPROVED
    )


@pytest.fixture
def sample_line():
    return PurchaseOrderLineItem(
        id=1, purchase_order_id=3, tenant_id="tenant_123", name="Bolts",
        quantity=Decimal("10"), unit_cost=Decimal("5.00"),
    )


@pytest.fixture
def mock_purchase_order_repo(sample_purchase_order):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=sample_purchase_order)
    return repo


@pytest.fixture
def mock_financials(sample_purchase_order):
    received = StatusHistory(
        tenant_id="tenant_123",
        document_type=DocumentType.PURCHASE_ORDER,
        document_id=3,
        from_status="approved",
        to_status="partially_received",
    )
    financials = MagicMock()
    financials.clock = lambda: NOW
    financials.sync = AsyncMock(return_value=SyncOutcome(sample_purchase_order, [received]))
    financials.sync_approvals = AsyncMock(return_value=SyncOutcome(sample_purchase_order, []))
    return financials


@pytest.fixture
def mock_reference_numbers():
    async def register(receipt, document_type, seed_loader=None):
        receipt.reference = "POR-2025-00001"
        receipt.sequence = 1
        return receipt.reference

    generator = MagicMock()
    generator.register = AsyncMock(side_effect=register)
    return generator


@pytest.fixture
def record_receipt_use_case(mock_uow, mock_purchase_order_repo, sample_line, mock_reference_numbers, mock_financials):
    line_repo = MagicMock()
    line_repo.get_by_id = AsyncMock(return_value=sample_line)
    receipt_repo = MagicMock()
    receipt_repo.create = AsyncMock(side_effect=lambda receipt: receipt)
    receipt_repo.max_sequence = AsyncMock(return_value=0)
    return RecordReceipt(
        uow=mock_uow,
        purchase_order_repo=mock_purchase_order_repo,
        line_repo=line_repo,
        receipt_repo=receipt_repo,
        reference_numbers=mock_reference_numbers,
        financials=mock_financials,
    )


@pytest.mark.asyncio
class TestRecordReceipt:
    """Test RecordReceipt use case"""

    async def test_receipt_is_numbered_and_synced(self, record_receipt_use_case, mock_financials, mock_uow):
        # Arrange
        command = RecordReceiptCommandDTO(
            purchase_order_id=3, purchase_order_line_item_id=1, quantity=Decimal("4")
        )

        # Act
        result = await record_receipt_use_case.execute(command)

        # Assert
        assert result.is_ok()
        receipt = record_receipt_use_case.receipt_repo.create.call_args[0][0]
        assert receipt.reference == "POR-2025-00001"
        assert receipt.unit_cost == Decimal("5.00")
        assert receipt.line_total == Decimal("20.00")
        assert [h.to_status for h in result.value.transitions] == ["partially_received"]
        mock_financials.sync.assert_awaited_once_with(3, note="Receipt POR-2025-00001")
        mock_financials.sync_approvals.assert_awaited_once_with(3)
        mock_uow.commit.assert_awaited_once()

    async def test_cancelled_purchase_order_rejects_receipts(
        self, record_receipt_use_case, sample_purchase_order
    ):
        # Arrange
        sample_purchase_order.status = PurchaseOrderStatus.CANCELLED
        command = RecordReceiptCommandDTO(
            purchase_order_id=3, purchase_order_line_item_id=1, quantity=Decimal("4")
        )

        # Act
        result = await record_receipt_use_case.execute(command)

        # Assert
        assert result.is_err()
        assert result.error.code == "TERMINAL_STATUS"

    async def test_line_of_another_purchase_order(self, record_receipt_use_case, sample_line):
        # Arrange
        sample_line.purchase_order_id = 99
        command = RecordReceiptCommandDTO(
            purchase_order_id=3, purchase_order_line_item_id=1, quantity=Decimal("4")
        )

        # Act
        result = await record_receipt_use_case.execute(command)

        # Assert
        assert result.is_err()
        assert result.error.code == "LINE_ITEM_NOT_FOUND"


@pytest.fixture
def mock_approval_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda approval: approval)
    repo.update = AsyncMock(side_effect=lambda approval: approval)
    return repo


@pytest.mark.asyncio
class TestApprovals:
    """Test RequestApproval and DecideApproval use cases"""

    async def test_request_approval(
        self, mock_uow, mock_purchase_order_repo, mock_approval_repo, mock_financials, sample_purchase_order
    ):
        # Arrange
        sample_purchase_order.status = PurchaseOrderStatus.DRAFT
        use_case = RequestApproval(mock_uow, mock_purchase_order_repo, mock_approval_repo, mock_financials)

        # Act
        result = await use_case.execute(RequestApprovalCommandDTO(purchase_order_id=3, approver_id="cfo"))

        # Assert
        assert result.is_ok()
        approval = mock_approval_repo.create.call_args[0][0]
        assert approval.status == ApprovalStatus.PENDING
        assert approval.approver_id == "cfo"
        mock_financials.sync_approvals.assert_awaited_once_with(3, note="Approval requested")

    async def test_approve_pending_approval(
        self, mock_uow, mock_purchase_order_repo, mock_approval_repo, mock_financials
    ):
        # Arrange
        approval = PurchaseOrderApproval(id=8, purchase_order_id=3, tenant_id="tenant_123", status=ApprovalStatus.PENDING)
        mock_approval_repo.get_by_id = AsyncMock(return_value=approval)
        use_case = DecideApproval(mock_uow, mock_purchase_order_repo, mock_approval_repo, mock_financials)
        command = DecideApprovalCommandDTO(purchase_order_id=3, approval_id=8, status=ApprovalStatus.APPROVED)

        # Act
        result = await use_case.execute(command)

        # Assert
        assert result.is_ok()
        assert approval.status == ApprovalStatus.APPROVED
        assert approval.decided_at == NOW
        mock_uow.commit.assert_awaited_once()

    async def test_decided_approval_cannot_be_decided_again(
        self, mock_uow, mock_purchase_order_repo, mock_approval_repo, mock_financials
    ):
        # Arrange
        approval = PurchaseOrderApproval(
            id=8, purchase_order_id=3, tenant_id="tenant_123",
            status=ApprovalStatus.REJECTED, decided_at=NOW,
        )
        mock_approval_repo.get_by_id = AsyncMock(return_value=approval)
        use_case = DecideApproval(mock_uow, mock_purchase_order_repo, mock_approval_repo, mock_financials)
        command = DecideApprovalCommandDTO(purchase_order_id=3, approval_id=8, status=ApprovalStatus.APPROVED)

        # Act
        result = await use_case.execute(command)

        # Assert
        assert result.is_err()
        assert result.error.code == "INVALID_STATUS_TRANSITION"
        mock_approval_repo.update.assert_not_awaited()

    async def test_unknown_approval(self, mock_uow, mock_purchase_order_repo, mock_approval_repo, mock_financials):
        # Arrange
        mock_approval_repo.get_by_id = AsyncMock(return_value=None)
        use_case = DecideApproval(mock_uow, mock_purchase_order_repo, mock_approval_repo, mock_financials)
        command = DecideApprovalCommandDTO(purchase_order_id=3, approval_id=8, status=ApprovalStatus.APPROVED)

        # Act
        result = await use_case.execute(command)

        # Assert
        assert result.is_err()
        assert result.error.code == "APPROVAL_NOT_FOUND"
