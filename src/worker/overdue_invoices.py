"""Overdue Invoice Background Worker

Periodically re-syncs open invoices past their due date so that the overdue
status and the one-time late fee land without anyone editing the invoice.
Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

from config import ApplicationConfig
from src.adapter.database import create_engine, create_session_factory
from src.adapter.ledger import SqlAlchemyLedger
from src.adapter.services.notification_service import create_notification_service
from src.app.services.notification_service import NotificationService
from src.app.use_cases.ledger import OverdueSweepResultDTO, SweepOverdueInvoices

logger = logging.getLogger(__name__)


class OverdueInvoiceWorker:
    """
    Background worker for the overdue invoice sweep

    Usage:
        # Run once
        worker = OverdueInvoiceWorker()
        result = await worker.run_once()

        # Run continuously
        worker = OverdueInvoiceWorker()
        await worker.run_forever(interval_seconds=3600)
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        notifier: Optional[NotificationService] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            notifier: Status change channel (defaults to the configured one)
            clock: Source of "now" (defaults to datetime.utcnow)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.notifier = notifier or create_notification_service(ApplicationConfig.STATUS_NOTIFICATION_WEBHOOK)
        self.clock = clock or datetime.utcnow

        self.engine = create_engine(self.db_uri)
        self.async_session_factory = create_session_factory(self.engine)

        logger.info("OverdueInvoiceWorker initialized")

    async def run_once(self) -> OverdueSweepResultDTO:
        """
        Run the sweep once

        Returns:
            OverdueSweepResultDTO with sweep results
        """
        now = self.clock()

        if not ApplicationConfig.OVERDUE_SWEEP_ENABLED:
            logger.info("Overdue invoice sweep is disabled, skipping")
            return OverdueSweepResultDTO(
                invoices_checked=0,
                invoices_transitioned=0,
                swept_at=now,
                execution_time_ms=0,
            )

        async with self.async_session_factory() as session:
            ledger = SqlAlchemyLedger(
                session,
                strict_quantities=str(ApplicationConfig.QUANTITY_NORMALIZATION).lower() == "strict",
                clock=self.clock,
            )
            use_case = SweepOverdueInvoices(
                uow=ledger.uow,
                invoice_repo=ledger.invoices,
                financials=ledger.invoice_financials,
                notifier=self.notifier,
            )

            result = await use_case.execute(as_of=now)

            if result.is_err():
                logger.error(f"Overdue sweep failed: {result.error.message}")
                raise RuntimeError(f"Overdue sweep failed: {result.error.message}")

            response = result.value
            if response.failed_invoice_ids:
                logger.error(f"Overdue sync failed for invoices {response.failed_invoice_ids}")

            return response

    async def run_forever(self, interval_seconds: int = 3600):
        """
        Run the sweep continuously at the given interval

        Args:
            interval_seconds: Seconds between runs (default: 1 hour)
        """
        logger.info(f"Starting continuous overdue invoice sweep with {interval_seconds}s interval")

        while True:
            try:
                result = await self.run_once()
                logger.info(
                    f"Overdue sweep complete. "
                    f"Checked {result.invoices_checked} invoices, "
                    f"{result.invoices_transitioned} changed status "
                    f"in {result.execution_time_ms}ms"
                )
            except Exception as e:
                logger.error(f"Overdue sweep cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("OverdueInvoiceWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once
        python -m src.worker.overdue_invoices --once

        # Run continuously (default: hourly)
        python -m src.worker.overdue_invoices

        # Run continuously with custom interval (in seconds)
        python -m src.worker.overdue_invoices --interval 600
    """
    import argparse

    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Overdue Invoice Worker")
    parser.add_argument(
        "--once", action="store_true", help="Run once and exit"
    )
    parser.add_argument(
        "--interval", type=int, default=ApplicationConfig.OVERDUE_SWEEP_INTERVAL_SECONDS,
        help="Interval between runs in seconds (default: OVERDUE_SWEEP_INTERVAL_SECONDS)"
    )
    args = parser.parse_args()

    worker = OverdueInvoiceWorker()

    try:
        if args.once:
            result = await worker.run_once()
            print("Overdue sweep complete:")
            print(f"  Invoices checked: {result.invoices_checked}")
            print(f"  Status changes: {result.invoices_transitioned}")
            print(f"  Execution time: {result.execution_time_ms}ms")
            if result.failed_invoice_ids:
                print(f"  Failed invoices: {result.failed_invoice_ids}")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
