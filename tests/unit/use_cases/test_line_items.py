"""Unit tests for line item use cases"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.services.financials.base import SyncOutcome
from src.app.use_cases.ledger.dtos import LineItemInputDTO, LineItemUpdateDTO
from src.app.use_cases.ledger.line_items import (
    AddLineItem,
    RemoveLineItem,
    UpdateLineItem,
    apply_line_update,
    build_line_item,
)
from src.domain.document_type import DocumentType
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line_item import InvoiceLineItem
from src.domain.purchase_order import PurchaseOrder
from src.domain.purchase_order_line_item import PurchaseOrderLineItem


@pytest.fixture
def sample_invoice():
    return Invoice(id=1, tenant_id="tenant_123", status=InvoiceStatus.DRAFT)


@pytest.fixture
def sample_line():
    return InvoiceLineItem(
        id=11, invoice_id=1, tenant_id="tenant_123", name="Consulting hours",
        quantity=Decimal("3"), unit_price=Decimal("19.99"), tax_rate=Decimal("8.25"),
    )


@pytest.fixture
def mock_invoice_repo(sample_invoice):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=sample_invoice)
    return repo


@pytest.fixture
def mock_line_repo(sample_line):
    repo = MagicMock()
    repo.list_by_document = AsyncMock(return_value=[sample_line])
    repo.get_by_id = AsyncMock(return_value=sample_line)
    repo.create = AsyncMock(side_effect=lambda line: line)
    repo.update = AsyncMock(side_effect=lambda line: line)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def mock_financials(sample_invoice):
    financials = MagicMock()
    financials.sync = AsyncMock(return_value=SyncOutcome(sample_invoice, []))
    return financials


def use_case_of(cls, mock_uow, mock_invoice_repo, mock_line_repo, mock_financials):
    return cls(
        uow=mock_uow,
        document_type=DocumentType.INVOICE,
        document_repo=mock_invoice_repo,
        line_repo=mock_line_repo,
        financials=mock_financials,
    )


class TestBuildLineItem:
    """Test line entity construction per document type"""

    def test_purchase_order_line_uses_unit_cost(self):
        # Arrange
        purchase_order = PurchaseOrder(id=3, tenant_id="tenant_123")
        item = LineItemInputDTO(name="Bolts", quantity=Decimal("10"), unit_price=Decimal("5.00"))

        # Act
        line = build_line_item(DocumentType.PURCHASE_ORDER, purchase_order, item, sort_order=2)

        # Assert
        assert isinstance(line, PurchaseOrderLineItem)
        assert line.purchase_order_id == 3
        assert line.unit_cost == Decimal("5.00")
        assert line.sort_order == 2

    def test_update_maps_unit_price_to_unit_cost(self):
        # Arrange
        line = PurchaseOrderLineItem(
            id=1, purchase_order_id=3, tenant_id="tenant_123", name="Bolts",
            quantity=Decimal("10"), unit_cost=Decimal("5.00"),
        )

        # Act
        apply_line_update(DocumentType.PURCHASE_ORDER, line, LineItemUpdateDTO(unit_price=Decimal("4.50")))

        # Assert
        assert line.unit_cost == Decimal("4.50")
        assert line.quantity == Decimal("10")


@pytest.mark.asyncio
class TestAddLineItem:
    """Test AddLineItem use case"""

    async def test_add_line_syncs_and_commits(
        self, mock_uow, mock_invoice_repo, mock_line_repo, mock_financials
    ):
        # Arrange
        use_case = use_case_of(AddLineItem, mock_uow, mock_invoice_repo, mock_line_repo, mock_financials)
        item = LineItemInputDTO(name="Travel", quantity=Decimal("1"), unit_price=Decimal("120.00"))

        # Act
        result = await use_case.execute(1, item)

        # Assert
        assert result.is_ok()
        line = mock_line_repo.create.call_args[0][0]
        assert line.invoice_id == 1
        assert line.sort_order == 1
        mock_financials.sync.assert_awaited_once_with(1)
        mock_uow.commit.assert_awaited_once()

    async def test_cancelled_document_rejects_new_lines(
        self, mock_uow, mock_invoice_repo, mock_line_repo, mock_financials, sample_invoice
    ):
        # Arrange
        sample_invoice.status = InvoiceStatus.CANCELLED
        use_case = use_case_of(AddLineItem, mock_uow, mock_invoice_repo, mock_line_repo, mock_financials)

        # Act
        result = await use_case.execute(1, LineItemInputDTO(name="Travel"))

        # Assert
        assert result.is_err()
        assert result.error.code == "TERMINAL_STATUS"
        mock_line_repo.create.assert_not_awaited()
        mock_uow.rollback.assert_awaited_once()


@pytest.mark.asyncio
class TestUpdateAndRemoveLineItem:
    """Test UpdateLineItem and RemoveLineItem use cases"""

    async def test_update_quantity(self, mock_uow, mock_invoice_repo, mock_line_repo, mock_financials, sample_line):
        # Arrange
        use_case = use_case_of(UpdateLineItem, mock_uow, mock_invoice_repo, mock_line_repo, mock_financials)

        # Act
        result = await use_case.execute(1, 11, LineItemUpdateDTO(quantity=Decimal("5")))

        # Assert
        assert result.is_ok()
        assert sample_line.quantity == Decimal("5")
        assert sample_line.unit_price == Decimal("19.99")
        mock_line_repo.update.assert_awaited_once_with(sample_line)

    async def test_line_of_another_document_is_not_found(
        self, mock_uow, mock_invoice_repo, mock_line_repo, mock_financials, sample_line
    ):
        # Arrange
        sample_line.invoice_id = 2
        use_case = use_case_of(UpdateLineItem, mock_uow, mock_invoice_repo, mock_line_repo, mock_financials)

        # Act
        result = await use_case.execute(1, 11, LineItemUpdateDTO(quantity=Decimal("5")))

        # Assert
        assert result.is_err()
        assert result.error.code == "LINE_ITEM_NOT_FOUND"

    async def test_remove_line(self, mock_uow, mock_invoice_repo, mock_line_repo, mock_financials, sample_line):
        # Arrange
        use_case = use_case_of(RemoveLineItem, mock_uow, mock_invoice_repo, mock_line_repo, mock_financials)

        # Act
        result = await use_case.execute(1, 11)

        # Assert
        assert result.is_ok()
        mock_line_repo.delete.assert_awaited_once_with(sample_line)
        mock_financials.sync.assert_awaited_once_with(1)
