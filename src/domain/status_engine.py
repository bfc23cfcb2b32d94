"""Status engine

Pure decision functions mapping a document's current state and aggregates to
its next lifecycle status. Terminal statuses are never left automatically.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Iterable, Optional, Tuple
from src.domain.errors import InvalidTransitionError, TerminalStatusError
from src.domain.invoice import InvoiceStatus
from src.domain.money import Number, ZERO, to_decimal
from src.domain.order import OrderFulfillmentStatus, OrderStatus
from src.domain.purchase_order import PurchaseOrderStatus, TERMINAL_PURCHASE_ORDER_STATUSES
from src.domain.purchase_order_approval import ApprovalStatus
from src.domain.quote import QuoteStatus

FULFILLMENT_EPSILON = Decimal("0.0001")
RECEIVING_STATUSES = (PurchaseOrderStatus.PARTIALLY_RECEIVED, PurchaseOrderStatus.RECEIVED)


def status_changed(previous, following) -> bool:
    return previous != following


# Invoice

def is_invoice_overdue(due_date: Optional[date], status: InvoiceStatus, now: datetime) -> bool:
    """
    An unpaid invoice is overdue once the start of its due date has passed

    The due date is taken at midnight, so an invoice is overdue during its
    due day as soon as the day has begun.
    """
    if due_date is None or status == InvoiceStatus.PAID:
        return False
    return datetime.combine(due_date, time.min) < now


def next_invoice_status(
    current: Optional[InvoiceStatus],
    total: Number,
    paid_to_date: Number,
    balance_due: Number,
    is_overdue: bool,
    sent_at: Optional[datetime],
) -> InvoiceStatus:
    current = current or InvoiceStatus.DRAFT
    total = to_decimal(total)
    paid = to_decimal(paid_to_date)

    if current == InvoiceStatus.CANCELLED:
        return InvoiceStatus.CANCELLED

    if total > 0 and paid >= total:
        return InvoiceStatus.PAID

    if paid > 0 and to_decimal(balance_due) > 0:
        return InvoiceStatus.PARTIAL

    if is_overdue:
        return InvoiceStatus.OVERDUE

    if current == InvoiceStatus.SENT or sent_at is not None:
        return InvoiceStatus.SENT

    return current


def ensure_invoice_can_be_sent(current: InvoiceStatus) -> None:
    if current == InvoiceStatus.CANCELLED:
        raise TerminalStatusError("Cancelled invoices cannot be sent")
    if current == InvoiceStatus.PAID:
        raise InvalidTransitionError("Paid invoices cannot be sent again")


# Order

def determine_fulfillment_status(lines: Iterable[Tuple[Number, Number]]) -> OrderFulfillmentStatus:
    """
    Derive fulfillment from (ordered quantity, fulfilled quantity) pairs

    Fulfilled quantities are capped at the ordered quantity.
    """
    lines = list(lines)
    if not lines:
        return OrderFulfillmentStatus.PENDING

    total_quantity = sum((to_decimal(quantity) for quantity, _ in lines), Decimal("0"))
    fulfilled_quantity = sum(
        (min(to_decimal(fulfilled), to_decimal(quantity)) for quantity, fulfilled in lines),
        Decimal("0"),
    )

    if fulfilled_quantity <= 0:
        return OrderFulfillmentStatus.PENDING

    if abs(fulfilled_quantity - total_quantity) < FULFILLMENT_EPSILON:
        return OrderFulfillmentStatus.FULFILLED

    return OrderFulfillmentStatus.PARTIAL


def next_order_status(
    current: Optional[OrderStatus],
    fulfillment_status: OrderFulfillmentStatus,
    has_invoices: bool,
) -> OrderStatus:
    current = current or OrderStatus.DRAFT

    if current == OrderStatus.CANCELLED:
        return current

    if fulfillment_status == OrderFulfillmentStatus.FULFILLED:
        return OrderStatus.FULFILLED

    if has_invoices:
        return OrderStatus.INVOICED

    return current


# Purchase order

def next_purchase_order_receiving_status(
    current: Optional[PurchaseOrderStatus],
    lines: Iterable[Tuple[Number, Number]],
    received_cost: Number,
) -> PurchaseOrderStatus:
    """Receiving sub-engine over (ordered quantity, received quantity) pairs"""
    current = current or PurchaseOrderStatus.DRAFT

    if current in TERMINAL_PURCHASE_ORDER_STATUSES:
        return current

    lines = list(lines)
    all_received = bool(lines) and all(
        to_decimal(received) >= to_decimal(quantity) for quantity, received in lines
    )

    if all_received:
        return PurchaseOrderStatus.RECEIVED

    if to_decimal(received_cost) > ZERO:
        return PurchaseOrderStatus.PARTIALLY_RECEIVED

    return current


@dataclass(frozen=True)
class ApprovalOutcome:
    status: PurchaseOrderStatus
    approved_at: Optional[datetime]


def next_purchase_order_approval_status(
    current: Optional[PurchaseOrderStatus],
    approvals: Iterable[Tuple[ApprovalStatus, Optional[datetime]]],
    now: datetime,
) -> Optional[ApprovalOutcome]:
    """
    Approval sub-engine over (approval status, decided_at) pairs

    Returns None when there is nothing to decide: no approvals, or the
    purchase order is already terminal or receiving goods.
    """
    current = current or PurchaseOrderStatus.DRAFT
    approvals = list(approvals)

    if not approvals or current in TERMINAL_PURCHASE_ORDER_STATUSES + RECEIVING_STATUSES:
        return None

    statuses = [status for status, _ in approvals]

    if ApprovalStatus.REJECTED in statuses:
        return ApprovalOutcome(PurchaseOrderStatus.CANCELLED, None)

    if all(status == ApprovalStatus.APPROVED for status in statuses):
        decided = [decided_at for _, decided_at in approvals if decided_at is not None]
        return ApprovalOutcome(PurchaseOrderStatus.APPROVED, max(decided) if decided else now)

    if any(status in (ApprovalStatus.PENDING, ApprovalStatus.ESCALATED) for status in statuses):
        return ApprovalOutcome(PurchaseOrderStatus.PENDING_APPROVAL, None)

    return ApprovalOutcome(current, None)


# Quote

def next_quote_status(current: Optional[QuoteStatus]) -> QuoteStatus:
    """Totals never drive a quote's status; only explicit decisions do"""
    return current or QuoteStatus.DRAFT
