"""Unit tests for ReferenceNumberGenerator"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.services.reference_number_generator import (
    ReferenceNumberGenerator,
    extract_sequence,
    format_reference,
)
from src.domain.document_type import DocumentType
from src.domain.errors import LedgerDomainError, ReferenceSequenceConflictError
from src.domain.invoice import Invoice
from src.domain.order import Order
from src.domain.purchase_order import PurchaseOrder
from src.domain.purchase_order_receipt import PurchaseOrderReceipt


@pytest.fixture
def mock_sequence_repo():
    """Mock reference sequence repository"""
    return MagicMock()


@pytest.fixture
def generator(mock_sequence_repo):
    return ReferenceNumberGenerator(mock_sequence_repo, retry_attempts=3)


class TestFormatting:
    def test_format_reference_pads_to_five_digits(self):
        assert format_reference("INV", 2025, 1) == "INV-2025-00001"
        assert format_reference("PO", 2024, 123456) == "PO-2024-123456"

    def test_extract_sequence(self):
        assert extract_sequence("ORD-2025-00042") == 42
        assert extract_sequence("legacy") is None
        assert extract_sequence(None) is None


@pytest.mark.asyncio
class TestRegister:
    """Test number assignment"""

    async def test_invoice_number_uses_issue_year(self, generator, mock_sequence_repo):
        # Arrange
        mock_sequence_repo.next_value = AsyncMock(return_value=1)
        invoice = Invoice(tenant_id="tenant_123", issue_date=date(2024, 12, 31))

        # Act
        number = await generator.register(invoice, DocumentType.INVOICE)

        # Assert
        assert number == "INV-2024-00001"
        assert invoice.number == "INV-2024-00001"
        assert invoice.sequence == 1
        mock_sequence_repo.next_value.assert_awaited_once_with("tenant_123", "invoice", "2024", seed=0)

    async def test_each_type_has_its_prefix(self, generator, mock_sequence_repo):
        # Arrange
        mock_sequence_repo.next_value = AsyncMock(return_value=7)
        order = Order(tenant_id="tenant_123", ordered_at=date(2025, 1, 5))
        purchase_order = PurchaseOrder(tenant_id="tenant_123", ordered_at=date(2025, 1, 5))

        # Act
        order_number = await generator.register(order, DocumentType.ORDER)
        purchase_order_number = await generator.register(purchase_order, DocumentType.PURCHASE_ORDER)

        # Assert
        assert order_number == "ORD-2025-00007"
        assert purchase_order_number == "PO-2025-00007"

    async def test_receipt_number_is_stored_in_reference(self, generator, mock_sequence_repo):
        # Arrange
        mock_sequence_repo.next_value = AsyncMock(return_value=2)
        receipt = PurchaseOrderReceipt(
            purchase_order_id=1,
            purchase_order_line_item_id=1,
            tenant_id="tenant_123",
            quantity=Decimal("1"),
            received_at=datetime(2025, 6, 1, 10, 0, 0),
        )

        # Act
        number = await generator.register(receipt, DocumentType.PURCHASE_ORDER_RECEIPT)

        # Assert
        assert number == "POR-2025-00002"
        assert receipt.reference == "POR-2025-00002"

    async def test_existing_number_is_kept(self, generator, mock_sequence_repo):
        # Arrange
        mock_sequence_repo.next_value = AsyncMock()
        invoice = Invoice(tenant_id="tenant_123", number="INV-2025-00009")

        # Act
        number = await generator.register(invoice, DocumentType.INVOICE)

        # Assert
        assert number == "INV-2025-00009"
        assert invoice.sequence == 9
        mock_sequence_repo.next_value.assert_not_awaited()

    async def test_seed_loader_seeds_new_counter(self, generator, mock_sequence_repo):
        # Arrange
        mock_sequence_repo.next_value = AsyncMock(return_value=13)
        seed_loader = AsyncMock(return_value=12)
        invoice = Invoice(tenant_id="tenant_123", issue_date=date(2025, 2, 1))

        # Act
        number = await generator.register(invoice, DocumentType.INVOICE, seed_loader=seed_loader)

        # Assert
        assert number == "INV-2025-00013"
        seed_loader.assert_awaited_once_with("tenant_123", "INV-2025-")
        mock_sequence_repo.next_value.assert_awaited_once_with("tenant_123", "invoice", "2025", seed=12)

    async def test_conflict_is_retried(self, generator, mock_sequence_repo):
        # Arrange
        mock_sequence_repo.next_value = AsyncMock(
            side_effect=[ReferenceSequenceConflictError("race"), 1]
        )
        invoice = Invoice(tenant_id="tenant_123", issue_date=date(2025, 2, 1))

        # Act
        number = await generator.register(invoice, DocumentType.INVOICE)

        # Assert
        assert number == "INV-2025-00001"
        assert mock_sequence_repo.next_value.await_count == 2

    async def test_gives_up_after_retry_attempts(self, generator, mock_sequence_repo):
        # Arrange
        mock_sequence_repo.next_value = AsyncMock(side_effect=ReferenceSequenceConflictError("race"))
        invoice = Invoice(tenant_id="tenant_123", issue_date=date(2025, 2, 1))

        # Act & Assert
        with pytest.raises(ReferenceSequenceConflictError):
            await generator.register(invoice, DocumentType.INVOICE)

        assert mock_sequence_repo.next_value.await_count == 3
        assert invoice.number is None

    async def test_missing_tenant_is_rejected(self, generator, mock_sequence_repo):
        # Arrange
        mock_sequence_repo.next_value = AsyncMock()
        invoice = Invoice(tenant_id="", issue_date=date(2025, 2, 1))

        # Act & Assert
        with pytest.raises(LedgerDomainError) as exc_info:
            await generator.register(invoice, DocumentType.INVOICE)

        assert exc_info.value.code == "TENANT_REQUIRED"
