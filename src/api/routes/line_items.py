"""Line Item API Routes

One set of endpoints for the line items of every document type.
"""

from enum import Enum
from fastapi import APIRouter, Depends, status
from src.adapter.ledger import SqlAlchemyLedger
from src.api.error import raise_for_error
from src.app.services.notification_service import NotificationService
from src.app.use_cases.ledger import (
    AddLineItem,
    DocumentSummaryDTO,
    LineItemInputDTO,
    LineItemUpdateDTO,
    RemoveLineItem,
    UpdateLineItem,
)
from src.depends import get_ledger, get_notification_service
from src.domain.document_type import DocumentType

router = APIRouter(prefix="/ledger", tags=["Line Items"])


class DocumentPath(str, Enum):
    INVOICES = "invoices"
    ORDERS = "orders"
    QUOTES = "quotes"
    PURCHASE_ORDERS = "purchase-orders"


DOCUMENT_TYPES = {
    DocumentPath.INVOICES: DocumentType.INVOICE,
    DocumentPath.ORDERS: DocumentType.ORDER,
    DocumentPath.QUOTES: DocumentType.QUOTE,
    DocumentPath.PURCHASE_ORDERS: DocumentType.PURCHASE_ORDER,
}


def _use_case(cls, document_path: DocumentPath, ledger: SqlAlchemyLedger, notifier: NotificationService):
    document_type = DOCUMENT_TYPES[document_path]
    return cls(
        ledger.uow,
        document_type,
        ledger.documents_for(document_type),
        ledger.lines_for(document_type),
        ledger.financials_for(document_type),
        notifier,
    )


@router.post(
    "/{document_path}/{document_id}/line-items",
    response_model=DocumentSummaryDTO,
    status_code=status.HTTP_201_CREATED,
)
async def add_line_item(
    document_path: DocumentPath,
    document_id: int,
    item: LineItemInputDTO,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    """
    Add a line item and re-sync the document (and its parent order).

    `unit_price` is the unit cost for purchase orders.
    """
    result = await _use_case(AddLineItem, document_path, ledger, notifier).execute(document_id, item)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch("/{document_path}/{document_id}/line-items/{line_id}", response_model=DocumentSummaryDTO)
async def update_line_item(
    document_path: DocumentPath,
    document_id: int,
    line_id: int,
    changes: LineItemUpdateDTO,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    result = await _use_case(UpdateLineItem, document_path, ledger, notifier).execute(document_id, line_id, changes)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{document_path}/{document_id}/line-items/{line_id}", response_model=DocumentSummaryDTO)
async def remove_line_item(
    document_path: DocumentPath,
    document_id: int,
    line_id: int,
    ledger: SqlAlchemyLedger = Depends(get_ledger),
    notifier: NotificationService = Depends(get_notification_service),
):
    result = await _use_case(RemoveLineItem, document_path, ledger, notifier).execute(document_id, line_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value
