"""Order Domain Entity

Sales order aggregating its own line items plus the invoices raised against it.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, JSON, Numeric, String, Text, Date, UniqueConstraint
from src.domain.base import BaseModel, IdType


class OrderStatus(str, Enum):
    """Order status types"""
    DRAFT = "draft"
    INVOICED = "invoiced"
    FULFILLED = "fulfilled"
    CANCELLED = "cancelled"


class OrderFulfillmentStatus(str, Enum):
    """Fulfillment sub-status derived from line item quantities"""
    PENDING = "pending"
    PARTIAL = "partial"
    FULFILLED = "fulfilled"


class Order(BaseModel, table=True):
    """
    Order - Customer sales order

    Domain Rules:
    - number is unique per tenant (ORD-YYYY-NNNNN)
    - total = max(subtotal - discount_total + tax_total, 0)
    - invoiced_total = sum of live invoice totals (falls back to total)
    - balance_due = max(invoiced_total - paid_total, 0)
    - status becomes fulfilled when every unit is fulfilled, invoiced once an
      invoice exists; cancelled is terminal
    """

    __tablename__ = "orders"
    __table_args__ = (
        Index('ix_orders_tenant_id', 'tenant_id'),
        Index('ix_orders_status', 'status'),
        UniqueConstraint('tenant_id', 'number', name='uq_orders_tenant_number'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique order identifier (auto-increment)"
    )

    tenant_id: str = Field(description="Tenant ID")

    creator_id: Optional[str] = Field(default=None)

    quote_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("quotes.id"), nullable=True),
        description="Quote this order was converted from"
    )

    number: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    sequence: Optional[int] = Field(default=None, sa_column=Column(Integer, nullable=True))

    status: OrderStatus = Field(default=OrderStatus.DRAFT)
    fulfillment_status: OrderFulfillmentStatus = Field(default=OrderFulfillmentStatus.PENDING)

    ordered_at: date = Field(
        default_factory=lambda: datetime.utcnow().date(),
        sa_column=Column(Date, nullable=False),
    )

    fulfillment_due_at: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))

    currency_code: str = Field(default="USD", sa_column=Column(String(3), nullable=False))
    fx_rate: Decimal = Field(default=Decimal("1"), sa_column=Column(Numeric(12, 6), nullable=False))

    subtotal: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    discount_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    tax_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    invoiced_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    paid_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    balance_due: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))

    line_items: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        sa_column=Column(JSON, nullable=True),
        description="Embedded line items, used only when no line item rows exist"
    )

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    fulfilled_at: Optional[datetime] = Field(default=None)
    cancelled_at: Optional[datetime] = Field(default=None)
    deleted_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "tenant_id": "tenant_xyz789",
                "number": "ORD-2025-00001",
                "status": "invoiced",
                "fulfillment_status": "partial",
                "total": "64.92",
                "invoiced_total": "64.92",
                "paid_total": "30.00",
                "balance_due": "34.92",
            }
        }
