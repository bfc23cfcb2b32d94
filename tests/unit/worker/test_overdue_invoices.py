"""Unit tests for OverdueInvoiceWorker

Tests cover:
- Worker initialization with configuration
- run_once execution with the sweep
- Sweep disabled scenario
- Sweep failure handling
- Shutdown and cleanup
"""

import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

from libs.result import Error, Return
from src.app.use_cases.ledger.dtos import OverdueSweepResultDTO
from src.worker.overdue_invoices import OverdueInvoiceWorker

NOW = datetime(2025, 4, 2, 6, 0, 0)


@pytest.fixture
def sample_sweep_result():
    """Sample successful sweep result"""
    return OverdueSweepResultDTO(
        invoices_checked=12,
        invoices_transitioned=3,
        failed_invoice_ids=[],
        swept_at=NOW,
        execution_time_ms=85,
    )


@pytest.fixture
def mock_session_factory():
    session = MagicMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=session)


class TestOverdueInvoiceWorkerInit:
    """Test worker initialization"""

    @patch("src.worker.overdue_invoices.create_notification_service")
    @patch("src.worker.overdue_invoices.create_session_factory")
    @patch("src.worker.overdue_invoices.create_engine")
    @patch("src.worker.overdue_invoices.ApplicationConfig")
    def test_initializes_with_default_config(
        self, mock_app_config, mock_create_engine, mock_create_session_factory, mock_create_notifier
    ):
        # Arrange
        mock_app_config.DB_URI = "postgresql+asyncpg://default@localhost/db"
        mock_app_config.STATUS_NOTIFICATION_WEBHOOK = None

        # Act
        worker = OverdueInvoiceWorker()

        # Assert
        assert worker.db_uri == "postgresql+asyncpg://default@localhost/db"
        mock_create_engine.assert_called_once_with("postgresql+asyncpg://default@localhost/db")
        mock_create_notifier.assert_called_once_with(None)

    @patch("src.worker.overdue_invoices.create_session_factory")
    @patch("src.worker.overdue_invoices.create_engine")
    @patch("src.worker.overdue_invoices.ApplicationConfig")
    def test_initializes_with_custom_db_uri(self, mock_app_config, mock_create_engine, mock_create_session_factory):
        # Arrange
        mock_app_config.DB_URI = "postgresql+asyncpg://default@localhost/db"

        # Act
        worker = OverdueInvoiceWorker(db_uri="sqlite+aiosqlite:///./sweep.db", notifier=MagicMock())

        # Assert
        assert worker.db_uri == "sqlite+aiosqlite:///./sweep.db"


@pytest.mark.asyncio
class TestOverdueInvoiceWorkerRunOnce:
    """Test run_once execution"""

    @patch("src.worker.overdue_invoices.SweepOverdueInvoices")
    @patch("src.worker.overdue_invoices.SqlAlchemyLedger")
    @patch("src.worker.overdue_invoices.create_session_factory")
    @patch("src.worker.overdue_invoices.create_engine")
    @patch("src.worker.overdue_invoices.ApplicationConfig")
    async def test_run_once_executes_sweep(
        self,
        mock_app_config,
        mock_create_engine,
        mock_create_session_factory,
        mock_ledger_class,
        mock_use_case_class,
        mock_session_factory,
        sample_sweep_result,
    ):
        # Arrange
        mock_app_config.OVERDUE_SWEEP_ENABLED = True
        mock_app_config.QUANTITY_NORMALIZATION = "lenient"
        mock_create_session_factory.return_value = mock_session_factory

        mock_use_case = MagicMock()
        mock_use_case.execute = AsyncMock(return_value=Return.ok(sample_sweep_result))
        mock_use_case_class.return_value = mock_use_case

        # Act
        worker = OverdueInvoiceWorker(db_uri="sqlite+aiosqlite://", notifier=MagicMock(), clock=lambda: NOW)
        result = await worker.run_once()

        # Assert
        assert result.invoices_checked == 12
        assert result.invoices_transitioned == 3
        mock_use_case.execute.assert_awaited_once_with(as_of=NOW)
        assert mock_ledger_class.call_args.kwargs["strict_quantities"] is False

    @patch("src.worker.overdue_invoices.SqlAlchemyLedger")
    @patch("src.worker.overdue_invoices.create_session_factory")
    @patch("src.worker.overdue_invoices.create_engine")
    @patch("src.worker.overdue_invoices.ApplicationConfig")
    async def test_run_once_skips_when_disabled(
        self, mock_app_config, mock_create_engine, mock_create_session_factory, mock_ledger_class
    ):
        # Arrange
        mock_app_config.OVERDUE_SWEEP_ENABLED = False

        # Act
        worker = OverdueInvoiceWorker(db_uri="sqlite+aiosqlite://", notifier=MagicMock(), clock=lambda: NOW)
        result = await worker.run_once()

        # Assert
        assert result.invoices_checked == 0
        assert result.execution_time_ms == 0
        mock_ledger_class.assert_not_called()

    @patch("src.worker.overdue_invoices.SweepOverdueInvoices")
    @patch("src.worker.overdue_invoices.SqlAlchemyLedger")
    @patch("src.worker.overdue_invoices.create_session_factory")
    @patch("src.worker.overdue_invoices.create_engine")
    @patch("src.worker.overdue_invoices.ApplicationConfig")
    async def test_run_once_raises_on_sweep_error(
        self,
        mock_app_config,
        mock_create_engine,
        mock_create_session_factory,
        mock_ledger_class,
        mock_use_case_class,
        mock_session_factory,
    ):
        # Arrange
        mock_app_config.OVERDUE_SWEEP_ENABLED = True
        mock_app_config.QUANTITY_NORMALIZATION = "strict"
        mock_create_session_factory.return_value = mock_session_factory

        mock_use_case = MagicMock()
        mock_use_case.execute = AsyncMock(
            return_value=Return.err(Error(code="OVERDUE_SWEEP_FAILED", message="Failed to load overdue invoices"))
        )
        mock_use_case_class.return_value = mock_use_case

        # Act & Assert
        worker = OverdueInvoiceWorker(db_uri="sqlite+aiosqlite://", notifier=MagicMock(), clock=lambda: NOW)
        with pytest.raises(RuntimeError, match="Failed to load overdue invoices"):
            await worker.run_once()


@pytest.mark.asyncio
class TestOverdueInvoiceWorkerShutdown:

    @patch("src.worker.overdue_invoices.create_session_factory")
    @patch("src.worker.overdue_invoices.create_engine")
    async def test_shutdown_disposes_engine(self, mock_create_engine, mock_create_session_factory):
        # Arrange
        engine = MagicMock()
        engine.dispose = AsyncMock()
        mock_create_engine.return_value = engine
        worker = OverdueInvoiceWorker(db_uri="sqlite+aiosqlite://", notifier=MagicMock())

        # Act
        await worker.shutdown()

        # Assert
        engine.dispose.assert_awaited_once()
