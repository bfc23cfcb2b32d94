"""Quote API Routes"""

from typing import List, Optional
from fastapi import APIRouter, Depends, status
from config import ApplicationConfig
from src.adapter.ledger import SqlAlchemyLedger
from src.api.error import raise_for_error
from src.api.schemas.ledger_request import TransitionRequestSchema
from src.app.services.notification_service import NotificationService
from src.app.use_cases.ledger import (
    ChangeQuoteStatus,
    CreateQuote,
    CreateQuoteCommandDTO,
    DocumentSummaryDTO,
    GetQuote,
    GetStatusHistory,
    QuoteAction,
    QuoteDetailDTO,
    StatusHistoryDTO,
    SyncDocument,
)
from src.depends import get_ledger, get_notification_service
from src.domain.document_type import DocumentType

router = APIRouter(prefix="/ledger/quotes", tags=["Quotes"])


@router.post("", response_model=DocumentSummaryDTO, status_code=status.HTTP_201_CREATED)
async def create_quote(
    command: CreateQuoteCommandDTO,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    use_case = CreateQuote(
        ledger.uow,
        ledger.quotes,
        ledger.quote_lines,
        ledger.quote_financials,
        identity=ledger.identity,
        notifier=notifier,
        default_currency=ApplicationConfig.DEFAULT_CURRENCY,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{quote_id}", response_model=QuoteDetailDTO)
async def get_quote(quote_id: int, ledger: SqlAlchemyLedger = Depends(get_ledger)):
    result = await GetQuote(ledger.quotes, ledger.quote_lines).execute(quote_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{quote_id}/history", response_model=List[StatusHistoryDTO])
async def get_quote_history(quote_id: int, ledger: SqlAlchemyLedger = Depends(get_ledger)):
    result = await GetStatusHistory(ledger.history).execute(DocumentType.QUOTE, quote_id)
    return result.value


@router.post("/{quote_id}/sync", response_model=DocumentSummaryDTO)
async def sync_quote(
    quote_id: int,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    """Recompute totals and refresh the line snapshot. Never changes status."""
    use_case = SyncDocument(ledger.uow, DocumentType.QUOTE, ledger.quote_financials, notifier)
    result = await use_case.execute(quote_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def _change_status(quote_id: int, action: QuoteAction, body, ledger: SqlAlchemyLedger, notifier):
    use_case = ChangeQuoteStatus(ledger.uow, ledger.quotes, ledger.quote_financials, notifier)
    result = await use_case.execute(quote_id, action, note=body.note if body else None)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{quote_id}/send", response_model=DocumentSummaryDTO)
async def send_quote(
    quote_id: int,
    body: Optional[TransitionRequestSchema] = None,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    return await _change_status(quote_id, QuoteAction.SEND, body, ledger, notifier)


@router.post("/{quote_id}/accept", response_model=DocumentSummaryDTO)
async def accept_quote(
    quote_id: int,
    body: Optional[TransitionRequestSchema] = None,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    return await _change_status(quote_id, QuoteAction.ACCEPT, body, ledger, notifier)


@router.post("/{quote_id}/reject", response_model=DocumentSummaryDTO)
async def reject_quote(
    quote_id: int,
    body: Optional[TransitionRequestSchema] = None,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    return await _change_status(quote_id, QuoteAction.REJECT, body, ledger, notifier)
