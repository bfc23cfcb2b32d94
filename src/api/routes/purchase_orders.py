"""Purchase Order API Routes

Receipts, approvals, closing and cancelling of purchase orders.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, status
from config import ApplicationConfig
from src.adapter.ledger import SqlAlchemyLedger
from src.api.error import raise_for_error
from src.api.schemas.ledger_request import (
    ApprovalDecisionRequestSchema,
    ApprovalRequestSchema,
    ReceiptRequestSchema,
    TransitionRequestSchema,
)
from src.app.services.notification_service import NotificationService
from src.app.use_cases.ledger import (
    CancelDocument,
    ClosePurchaseOrder,
    CreatePurchaseOrder,
    CreatePurchaseOrderCommandDTO,
    DecideApproval,
    DecideApprovalCommandDTO,
    DocumentSummaryDTO,
    GetPurchaseOrder,
    GetStatusHistory,
    PurchaseOrderDetailDTO,
    RecordReceipt,
    RecordReceiptCommandDTO,
    RequestApproval,
    RequestApprovalCommandDTO,
    StatusHistoryDTO,
    SyncDocument,
)
from src.depends import get_ledger, get_notification_service
from src.domain.document_type import DocumentType

router = APIRouter(prefix="/ledger/purchase-orders", tags=["Purchase Orders"])


@router.post("", response_model=DocumentSummaryDTO, status_code=status.HTTP_201_CREATED)
async def create_purchase_order(
    command: CreatePurchaseOrderCommandDTO,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    use_case = CreatePurchaseOrder(
        ledger.uow,
        ledger.purchase_orders,
        ledger.purchase_order_lines,
        ledger.purchase_order_financials,
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


@router.get("/{purchase_order_id}", response_model=PurchaseOrderDetailDTO)
async def get_purchase_order(purchase_order_id: int, ledger: SqlAlchemyLedger = Depends(get_ledger)):
    use_case = GetPurchaseOrder(ledger.purchase_orders, ledger.purchase_order_lines, ledger.receipts, ledger.approvals)
    result = await use_case.execute(purchase_order_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{purchase_order_id}/history", response_model=List[StatusHistoryDTO])
async def get_purchase_order_history(purchase_order_id: int, ledger: SqlAlchemyLedger = Depends(get_ledger)):
    result = await GetStatusHistory(ledger.history).execute(DocumentType.PURCHASE_ORDER, purchase_order_id)
    return result.value


@router.post("/{purchase_order_id}/sync", response_model=DocumentSummaryDTO)
async def sync_purchase_order(
    purchase_order_id: int,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    use_case = SyncDocument(ledger.uow, DocumentType.PURCHASE_ORDER, ledger.purchase_order_financials, notifier)
    result = await use_case.execute(purchase_order_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{purchase_order_id}/receipts", response_model=DocumentSummaryDTO, status_code=status.HTTP_201_CREATED)
async def record_receipt(
    purchase_order_id: int,
    request: ReceiptRequestSchema,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    """
    Receive goods (or record a return) against a purchase order line.

    **Returns:**
    - 201: Receipt recorded, purchase order re-synced
    - 400: Purchase order closed/cancelled, or quantity out of range in strict mode
    - 404: Purchase order or line not found
    """
    command = RecordReceiptCommandDTO(purchase_order_id=purchase_order_id, **request.model_dump())
    use_case = RecordReceipt(
        ledger.uow,
        ledger.purchase_orders,
        ledger.purchase_order_lines,
        ledger.receipts,
        ledger.reference_numbers,
        ledger.purchase_order_financials,
        identity=ledger.identity,
        notifier=notifier,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{purchase_order_id}/approvals", response_model=DocumentSummaryDTO, status_code=status.HTTP_201_CREATED)
async def request_approval(
    purchase_order_id: int,
    request: ApprovalRequestSchema,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    command = RequestApprovalCommandDTO(purchase_order_id=purchase_order_id, **request.model_dump())
    use_case = RequestApproval(
        ledger.uow,
        ledger.purchase_orders,
        ledger.approvals,
        ledger.purchase_order_financials,
        identity=ledger.identity,
        notifier=notifier,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch("/{purchase_order_id}/approvals/{approval_id}", response_model=DocumentSummaryDTO)
async def decide_approval(
    purchase_order_id: int,
    approval_id: int,
    request: ApprovalDecisionRequestSchema,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    command = DecideApprovalCommandDTO(
        purchase_order_id=purchase_order_id,
        approval_id=approval_id,
        status=request.status,
        notes=request.notes,
    )
    use_case = DecideApproval(
        ledger.uow,
        ledger.purchase_orders,
        ledger.approvals,
        ledger.purchase_order_financials,
        identity=ledger.identity,
        notifier=notifier,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{purchase_order_id}/close", response_model=DocumentSummaryDTO)
async def close_purchase_order(
    purchase_order_id: int,
    body: Optional[TransitionRequestSchema] = None,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    use_case = ClosePurchaseOrder(ledger.uow, ledger.purchase_orders, ledger.purchase_order_financials, notifier)
    result = await use_case.execute(purchase_order_id, note=body.note if body else None)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{purchase_order_id}/cancel", response_model=DocumentSummaryDTO)
async def cancel_purchase_order(
    purchase_order_id: int,
    body: Optional[TransitionRequestSchema] = None,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    use_case = CancelDocument(
        ledger.uow, DocumentType.PURCHASE_ORDER, ledger.purchase_orders, ledger.purchase_order_financials, notifier
    )
    result = await use_case.execute(purchase_order_id, note=body.note if body else None)

    if result.is_err():
        raise_for_error(result.error)
    return result.value
