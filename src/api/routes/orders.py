"""Order API Routes"""

from typing import List, Optional
from fastapi import APIRouter, Depends, status
from config import ApplicationConfig
from src.adapter.ledger import SqlAlchemyLedger
from src.api.error import raise_for_error
from src.api.schemas.ledger_request import TransitionRequestSchema
from src.app.services.notification_service import NotificationService
from src.app.use_cases.ledger import (
    CancelDocument,
    CreateOrder,
    CreateOrderCommandDTO,
    DocumentSummaryDTO,
    GetOrder,
    GetStatusHistory,
    OrderDetailDTO,
    StatusHistoryDTO,
    SyncDocument,
)
from src.depends import get_ledger, get_notification_service
from src.domain.document_type import DocumentType

router = APIRouter(prefix="/ledger/orders", tags=["Orders"])


@router.post("", response_model=DocumentSummaryDTO, status_code=status.HTTP_201_CREATED)
async def create_order(
    command: CreateOrderCommandDTO,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    use_case = CreateOrder(
        ledger.uow,
        ledger.orders,
        ledger.order_lines,
        ledger.order_financials,
        reference_numbers=ledger.reference_numbers,
        identity=ledger.identity,
        notifier=notifier,
        default_currency=ApplicationConfig.DEFAULT_CURRENCY,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{order_id}", response_model=OrderDetailDTO)
async def get_order(order_id: int, ledger: SqlAlchemyLedger = Depends(get_ledger)):
    result = await GetOrder(ledger.orders, ledger.order_lines).execute(order_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{order_id}/history", response_model=List[StatusHistoryDTO])
async def get_order_history(order_id: int, ledger: SqlAlchemyLedger = Depends(get_ledger)):
    result = await GetStatusHistory(ledger.history).execute(DocumentType.ORDER, order_id)
    return result.value


@router.post("/{order_id}/sync", response_model=DocumentSummaryDTO)
async def sync_order(
    order_id: int,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    """Recompute totals, invoiced/paid aggregates, fulfillment and status."""
    use_case = SyncDocument(ledger.uow, DocumentType.ORDER, ledger.order_financials, notifier)
    result = await use_case.execute(order_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{order_id}/cancel", response_model=DocumentSummaryDTO)
async def cancel_order(
    order_id: int,
    body: Optional[TransitionRequestSchema] = None,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    use_case = CancelDocument(ledger.uow, DocumentType.ORDER, ledger.orders, ledger.order_financials, notifier)
    result = await use_case.execute(order_id, note=body.note if body else None)

    if result.is_err():
        raise_for_error(result.error)
    return result.value
