"""Invoice payment use cases"""

from datetime import datetime
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.invoice_payment_repository import InvoicePaymentRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.services.financials.invoice import InvoiceFinancials
from src.app.services.notification_service import NotificationService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.document_type import DocumentType
from src.domain.errors import DocumentNotFoundError, InvalidAmountError, TerminalStatusError
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_payment import InvoicePayment, PaymentStatus
from .base import LedgerUseCase, summarize
from .dtos import DocumentSummaryDTO, RecordPaymentCommandDTO, UpdatePaymentStatusCommandDTO


class RecordPayment(LedgerUseCase):
    """
    Use Case: Record a payment against an invoice

    Business Rules:
    1. Amount must be > 0
    2. Cancelled invoices accept no payments
    3. Only COMPLETED payments count toward the balance
    4. The invoice (and its order) is re-synced in the same transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        payment_repo: InvoicePaymentRepository,
        financials: InvoiceFinancials,
        notifier: Optional[NotificationService] = None,
    ):
        super().__init__(uow, notifier)
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo
        self.financials = financials

    async def execute(self, command: RecordPaymentCommandDTO) -> Result[DocumentSummaryDTO]:
        try:
            if command.amount is None or command.amount <= 0:
                raise InvalidAmountError("Payment amount must be greater than 0")

            invoice = await self.invoice_repo.get_by_id(command.invoice_id, for_update=True)
            if invoice is None:
                raise DocumentNotFoundError(f"invoice {command.invoice_id} not found")
            if invoice.status == InvoiceStatus.CANCELLED or invoice.deleted_at is not None:
                raise TerminalStatusError(f"Invoice {invoice.id} is cancelled")

            paid_at = command.paid_at
            if paid_at is None and command.status == PaymentStatus.COMPLETED:
                paid_at = datetime.utcnow()

            await self.payment_repo.create(
                InvoicePayment(
                    invoice_id=invoice.id,
                    tenant_id=invoice.tenant_id,
                    amount=command.amount,
                    status=command.status,
                    method=command.method,
                    reference=command.reference,
                    paid_at=paid_at,
                )
            )

            outcome = await self.financials.sync(invoice.id, note="Payment recorded")
            await self.uow.commit()
            await self.notify(outcome.transitions)

            return Return.ok(summarize(DocumentType.INVOICE, outcome.document, outcome.transitions))

        except Exception as e:
            return await self.fail(e, "RECORD_PAYMENT_FAILED", "Failed to record payment")


class UpdatePaymentStatus(LedgerUseCase):
    """
    Use Case: Move a payment between pending, completed and failed

    Completing a payment stamps paid_at if it is missing.
    Payments of a cancelled invoice are frozen.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        payment_repo: InvoicePaymentRepository,
        financials: InvoiceFinancials,
        notifier: Optional[NotificationService] = None,
    ):
        super().__init__(uow, notifier)
        self.invoice_repo = invoice_repo
        self.payment_repo = payment_repo
        self.financials = financials

    async def execute(self, command: UpdatePaymentStatusCommandDTO) -> Result[DocumentSummaryDTO]:
        try:
            payment = await self.payment_repo.get_by_id(command.payment_id)
            if payment is None or payment.invoice_id != command.invoice_id:
                raise DocumentNotFoundError(
                    f"Payment {command.payment_id} not found on invoice {command.invoice_id}",
                    code="PAYMENT_NOT_FOUND",
                )

            invoice = await self.invoice_repo.get_by_id(payment.invoice_id, for_update=True)
            if invoice is None:
                raise DocumentNotFoundError(f"invoice {payment.invoice_id} not found")
            if invoice.status == InvoiceStatus.CANCELLED or invoice.deleted_at is not None:
                raise TerminalStatusError(f"Invoice {invoice.id} is cancelled")

            payment.status = command.status
            if command.status == PaymentStatus.COMPLETED and payment.paid_at is None:
                payment.paid_at = datetime.utcnow()
            await self.payment_repo.update(payment)

            outcome = await self.financials.sync(payment.invoice_id, note=f"Payment {payment.id} {command.status.value}")
            await self.uow.commit()
            await self.notify(outcome.transitions)

            return Return.ok(summarize(DocumentType.INVOICE, outcome.document, outcome.transitions))

        except Exception as e:
            return await self.fail(e, "UPDATE_PAYMENT_FAILED", "Failed to update payment")
