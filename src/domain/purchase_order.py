"""Purchase Order Domain Entity

Vendor commitment whose status follows approvals and goods receipts.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String, Text, Date, UniqueConstraint
from src.domain.base import BaseModel, IdType


class PurchaseOrderStatus(str, Enum):
    """Purchase order status types"""
    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    PARTIALLY_RECEIVED = "partially_received"
    RECEIVED = "received"
    CLOSED = "closed"
    CANCELLED = "cancelled"


TERMINAL_PURCHASE_ORDER_STATUSES = (PurchaseOrderStatus.CANCELLED, PurchaseOrderStatus.CLOSED)


class PurchaseOrder(BaseModel, table=True):
    """
    Purchase Order

    Domain Rules:
    - number is unique per tenant (PO-YYYY-NNNNN)
    - total = max(subtotal + tax_total + freight_total + fee_total, 0)
    - received_cost = max(sum of signed receipt totals, 0)
    - outstanding_commitment = max(total - received_cost, 0)
    - cancelled and closed are terminal
    """

    __tablename__ = "purchase_orders"
    __table_args__ = (
        Index('ix_purchase_orders_tenant_id', 'tenant_id'),
        Index('ix_purchase_orders_order_id', 'order_id'),
        UniqueConstraint('tenant_id', 'number', name='uq_purchase_orders_tenant_number'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    tenant_id: str = Field(description="Tenant ID")
    creator_id: Optional[str] = Field(default=None)
    vendor_name: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    order_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("orders.id"), nullable=True),
        description="Sales order this purchase supplies (recalculated after every sync)"
    )

    number: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    sequence: Optional[int] = Field(default=None, sa_column=Column(Integer, nullable=True))

    status: PurchaseOrderStatus = Field(default=PurchaseOrderStatus.DRAFT)

    ordered_at: date = Field(
        default_factory=lambda: datetime.utcnow().date(),
        sa_column=Column(Date, nullable=False),
    )
    expected_delivery_date: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))

    currency_code: str = Field(default="USD", sa_column=Column(String(3), nullable=False))
    fx_rate: Decimal = Field(default=Decimal("1"), sa_column=Column(Numeric(12, 6), nullable=False))

    subtotal: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    tax_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    freight_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    fee_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    received_cost: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    outstanding_commitment: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    approved_at: Optional[datetime] = Field(default=None)
    issued_at: Optional[datetime] = Field(default=None)
    last_received_at: Optional[datetime] = Field(default=None)
    closed_at: Optional[datetime] = Field(default=None)
    cancelled_at: Optional[datetime] = Field(default=None)
    deleted_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
