"""Unit tests for SweepOverdueInvoices and SyncDocument"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.services.financials.base import SyncOutcome
from src.app.use_cases.ledger.sweep_overdue_invoices import SweepOverdueInvoices
from src.app.use_cases.ledger.sync_document import SyncDocument
from src.domain.document_type import DocumentType
from src.domain.errors import DocumentNotFoundError
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.status_history import StatusHistory

NOW = datetime(2025, 4, 2, 6, 0, 0)


def overdue_invoice(invoice_id):
    return Invoice(
        id=invoice_id,
        tenant_id="tenant_123",
        status=InvoiceStatus.OVERDUE,
        total=Decimal("68.17"),
        balance_due=Decimal("68.17"),
    )


def overdue_transition(invoice_id):
    return StatusHistory(
        tenant_id="tenant_123",
        document_type=DocumentType.INVOICE,
        document_id=invoice_id,
        from_status="sent",
        to_status="overdue",
    )


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.list_overdue_candidates = AsyncMock(
        return_value=[Invoice(id=1, tenant_id="tenant_123"), Invoice(id=2, tenant_id="tenant_123")]
    )
    return repo


@pytest.fixture
def mock_financials():
    financials = MagicMock()
    financials.clock = lambda: NOW
    return financials


@pytest.mark.asyncio
class TestSweepOverdueInvoices:
    """Test the overdue sweep"""

    async def test_sweep_syncs_each_candidate(self, mock_uow, mock_invoice_repo, mock_financials, mock_notifier):
        # Arrange
        mock_financials.sync = AsyncMock(side_effect=[
            SyncOutcome(overdue_invoice(1), [overdue_transition(1)]),
            SyncOutcome(overdue_invoice(2), []),
        ])
        use_case = SweepOverdueInvoices(mock_uow, mock_invoice_repo, mock_financials, mock_notifier, batch_size=50)

        # Act
        result = await use_case.execute()

        # Assert
        assert result.is_ok()
        assert result.value.invoices_checked == 2
        assert result.value.invoices_transitioned == 1
        assert result.value.failed_invoice_ids == []
        assert result.value.swept_at == NOW
        mock_invoice_repo.list_overdue_candidates.assert_awaited_once_with(NOW.date(), limit=50, after_id=None)
        assert mock_uow.commit.await_count == 2
        mock_notifier.send_status_change.assert_awaited_once()

    async def test_sweep_pages_through_all_candidates(self, mock_uow, mock_invoice_repo, mock_financials):
        # Arrange
        mock_invoice_repo.list_overdue_candidates = AsyncMock(side_effect=[
            [Invoice(id=1, tenant_id="tenant_123"), Invoice(id=2, tenant_id="tenant_123")],
            [Invoice(id=5, tenant_id="tenant_123")],
        ])
        mock_financials.sync = AsyncMock(side_effect=[
            SyncOutcome(overdue_invoice(1), []),
            SyncOutcome(overdue_invoice(2), []),
            SyncOutcome(overdue_invoice(5), [overdue_transition(5)]),
        ])
        use_case = SweepOverdueInvoices(mock_uow, mock_invoice_repo, mock_financials, batch_size=2)

        # Act
        result = await use_case.execute(as_of=NOW)

        # Assert
        assert result.is_ok()
        assert result.value.invoices_checked == 3
        assert result.value.invoices_transitioned == 1
        calls = mock_invoice_repo.list_overdue_candidates.await_args_list
        assert calls[0].kwargs == {"limit": 2, "after_id": None}
        assert calls[1].kwargs == {"limit": 2, "after_id": 2}
        assert [c.args[0] for c in mock_financials.sync.await_args_list] == [1, 2, 5]

    async def test_one_failure_does_not_stop_the_sweep(self, mock_uow, mock_invoice_repo, mock_financials):
        # Arrange
        mock_financials.sync = AsyncMock(side_effect=[
            RuntimeError("row locked"),
            SyncOutcome(overdue_invoice(2), [overdue_transition(2)]),
        ])
        use_case = SweepOverdueInvoices(mock_uow, mock_invoice_repo, mock_financials)

        # Act
        result = await use_case.execute(as_of=NOW)

        # Assert
        assert result.is_ok()
        assert result.value.failed_invoice_ids == [1]
        assert result.value.invoices_transitioned == 1
        mock_uow.rollback.assert_awaited_once()
        mock_uow.commit.assert_awaited_once()

    async def test_candidate_query_failure(self, mock_uow, mock_invoice_repo, mock_financials):
        # Arrange
        mock_invoice_repo.list_overdue_candidates = AsyncMock(side_effect=RuntimeError("connection refused"))
        use_case = SweepOverdueInvoices(mock_uow, mock_invoice_repo, mock_financials)

        # Act
        result = await use_case.execute(as_of=NOW)

        # Assert
        assert result.is_err()
        assert result.error.code == "OVERDUE_SWEEP_FAILED"


@pytest.mark.asyncio
class TestSyncDocument:
    """Test on-demand recalculation"""

    async def test_sync_commits_and_reports_transitions(self, mock_uow, mock_financials):
        # Arrange
        mock_financials.sync = AsyncMock(return_value=SyncOutcome(overdue_invoice(1), [overdue_transition(1)]))
        use_case = SyncDocument(mock_uow, DocumentType.INVOICE, mock_financials)

        # Act
        result = await use_case.execute(1)

        # Assert
        assert result.is_ok()
        assert result.value.status == "overdue"
        assert result.value.transitions[0].from_status == "sent"
        mock_uow.commit.assert_awaited_once()

    async def test_missing_document(self, mock_uow, mock_financials):
        # Arrange
        mock_financials.sync = AsyncMock(side_effect=DocumentNotFoundError("invoice 404 not found"))
        use_case = SyncDocument(mock_uow, DocumentType.INVOICE, mock_financials)

        # Act
        result = await use_case.execute(404)

        # Assert
        assert result.is_err()
        assert result.error.code == "DOCUMENT_NOT_FOUND"
        mock_uow.rollback.assert_awaited_once()
