"""SweepOverdueInvoices Use Case

Re-syncs open invoices whose due date has passed so that the overdue status
and the one-time late fee are applied without anyone touching the invoice.
Candidates are paged by id until exhausted. Each invoice is committed on its
own; one failure does not stop the sweep.
"""

import logging
import time
from datetime import datetime
from typing import Optional
from libs.result import Error, Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.financials.invoice import InvoiceFinancials
from src.app.services.notification_service import NotificationService
from src.app.services.unit_of_work import UnitOfWork
from .base import LedgerUseCase
from .dtos import OverdueSweepResultDTO

logger = logging.getLogger(__name__)


class SweepOverdueInvoices(LedgerUseCase):

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        financials: InvoiceFinancials,
        notifier: Optional[NotificationService] = None,
        batch_size: int = 500,
    ):
        super().__init__(uow, notifier)
        self.invoice_repo = invoice_repo
        self.financials = financials
        self.batch_size = batch_size

    async def execute(self, as_of: Optional[datetime] = None) -> Result[OverdueSweepResultDTO]:
        started = time.monotonic()
        as_of = as_of or self.financials.clock()

        checked = 0
        transitioned = 0
        failed_ids = []
        last_id = None
        while True:
            try:
                candidates = await self.invoice_repo.list_overdue_candidates(
                    as_of.date(), limit=self.batch_size, after_id=last_id
                )
                invoice_ids = [invoice.id for invoice in candidates]
            except Exception as e:
                await self.uow.rollback()
                logger.error(f"Could not load overdue candidates after invoice {last_id}: {e}")
                return Return.err(Error(code="OVERDUE_SWEEP_FAILED", message="Failed to load overdue invoices", reason=str(e)))

            for invoice_id in invoice_ids:
                checked += 1
                try:
                    outcome = await self.financials.sync(invoice_id, note="Overdue sweep")
                    await self.uow.commit()
                except Exception as e:
                    await self.uow.rollback()
                    failed_ids.append(invoice_id)
                    logger.error(f"Overdue sync failed for invoice {invoice_id}: {e}")
                    continue

                if outcome.transitions:
                    transitioned += 1
                    await self.notify(outcome.transitions)

            if not invoice_ids or len(invoice_ids) < self.batch_size:
                break
            last_id = invoice_ids[-1]

        return Return.ok(
            OverdueSweepResultDTO(
                invoices_checked=checked,
                invoices_transitioned=transitioned,
                failed_invoice_ids=failed_ids,
                swept_at=as_of,
                execution_time_ms=int((time.monotonic() - started) * 1000),
            )
        )
