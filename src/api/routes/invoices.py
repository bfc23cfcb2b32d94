"""Invoice API Routes

FastAPI routes for invoices, their payments and their status history.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, status
from config import ApplicationConfig
from src.adapter.ledger import SqlAlchemyLedger
from src.api.error import raise_for_error
from src.api.schemas.ledger_request import PaymentRequestSchema, PaymentStatusRequestSchema, TransitionRequestSchema
from src.app.services.notification_service import NotificationService
from src.app.use_cases.ledger import (
    CancelDocument,
    CreateInvoice,
    CreateInvoiceCommandDTO,
    DocumentSummaryDTO,
    GetInvoice,
    GetStatusHistory,
    InvoiceDetailDTO,
    MarkInvoiceSent,
    RecordPayment,
    RecordPaymentCommandDTO,
    StatusHistoryDTO,
    SyncDocument,
    UpdatePaymentStatus,
    UpdatePaymentStatusCommandDTO,
)
from src.depends import get_ledger, get_notification_service
from src.domain.document_type import DocumentType

router = APIRouter(prefix="/ledger/invoices", tags=["Invoices"])


@router.post("", response_model=DocumentSummaryDTO, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    command: CreateInvoiceCommandDTO,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    """
    Create a draft invoice with its line items.

    The invoice is numbered `INV-{YEAR}-{SEQ:05d}` unless a number is supplied,
    and its totals are computed before the response is returned.
    """
    use_case = CreateInvoice(
        ledger.uow,
        ledger.invoices,
        ledger.invoice_lines,
        ledger.invoice_financials,
        reference_numbers=ledger.reference_numbers,
        identity=ledger.identity,
        notifier=notifier,
        default_currency=ApplicationConfig.DEFAULT_CURRENCY,
        order_repo=ledger.orders,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceDetailDTO,
    responses={
        404: {
            "description": "Invoice not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "DOCUMENT_NOT_FOUND",
                            "message": "invoice 123 not found"
                        }
                    }
                }
            }
        }
    }
)
async def get_invoice(invoice_id: int, ledger: SqlAlchemyLedger = Depends(get_ledger)):
    """
    Get an invoice with its line items and payments.

    **Returns:**
    - 200: Invoice found
    - 404: Invoice not found
    """
    result = await GetInvoice(ledger.invoices, ledger.invoice_lines, ledger.payments).execute(invoice_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{invoice_id}/history", response_model=List[StatusHistoryDTO])
async def get_invoice_history(invoice_id: int, ledger: SqlAlchemyLedger = Depends(get_ledger)):
    result = await GetStatusHistory(ledger.history).execute(DocumentType.INVOICE, invoice_id)
    return result.value


@router.post("/{invoice_id}/sync", response_model=DocumentSummaryDTO)
async def sync_invoice(
    invoice_id: int,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    """Recompute totals, balance and status; cascades to the order."""
    use_case = SyncDocument(ledger.uow, DocumentType.INVOICE, ledger.invoice_financials, notifier)
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{invoice_id}/send", response_model=DocumentSummaryDTO)
async def send_invoice(
    invoice_id: int,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    use_case = MarkInvoiceSent(ledger.uow, ledger.invoices, ledger.invoice_financials, notifier)
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{invoice_id}/cancel", response_model=DocumentSummaryDTO)
async def cancel_invoice(
    invoice_id: int,
    body: Optional[TransitionRequestSchema] = None,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    use_case = CancelDocument(ledger.uow, DocumentType.INVOICE, ledger.invoices, ledger.invoice_financials, notifier)
    result = await use_case.execute(invoice_id, note=body.note if body else None)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{invoice_id}/payments", response_model=DocumentSummaryDTO, status_code=status.HTTP_201_CREATED)
async def record_payment(
    invoice_id: int,
    request: PaymentRequestSchema,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    """
    Record a payment. Only completed payments reduce the balance.

    **Returns:**
    - 201: Payment recorded, invoice re-synced
    - 400: Invoice cancelled or invalid amount
    - 404: Invoice not found
    """
    command = RecordPaymentCommandDTO(invoice_id=invoice_id, **request.model_dump())
    use_case = RecordPayment(ledger.uow, ledger.invoices, ledger.payments, ledger.invoice_financials, notifier)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch("/{invoice_id}/payments/{payment_id}", response_model=DocumentSummaryDTO)
async def update_payment_status(
    invoice_id: int,
    payment_id: int,
    request: PaymentStatusRequestSchema,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    command = UpdatePaymentStatusCommandDTO(invoice_id=invoice_id, payment_id=payment_id, status=request.status)
    use_case = UpdatePaymentStatus(ledger.uow, ledger.invoices, ledger.payments, ledger.invoice_financials, notifier)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)
    return result.value
