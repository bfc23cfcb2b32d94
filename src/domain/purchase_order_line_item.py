"""Purchase Order Line Item Domain Entity"""

from datetime import datetime, date
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String, Text, Date
from src.domain.base import BaseModel, IdType


class PurchaseOrderLineItem(BaseModel, table=True):
    """
    Purchase Order Line Item

    Domain Rules:
    - line_total = round2(quantity * unit_cost)
    - received_quantity is derived from receipts, kept within [0, quantity]
    """

    __tablename__ = "purchase_order_line_items"
    __table_args__ = (
        Index('ix_purchase_order_line_items_purchase_order_id', 'purchase_order_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    purchase_order_id: int = Field(
        sa_column=Column(IdType, ForeignKey("purchase_orders.id", ondelete="CASCADE"), nullable=False),
    )

    order_line_item_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("order_line_items.id"), nullable=True),
    )

    tenant_id: str = Field(description="Tenant ID")

    name: str = Field(sa_column=Column(String(255), nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    quantity: Decimal = Field(default=Decimal("1"), sa_column=Column(Numeric(12, 2), nullable=False))
    received_quantity: Decimal = Field(default=Decimal("0"), sa_column=Column(Numeric(12, 2), nullable=False))
    unit_cost: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    tax_rate: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(5, 2), nullable=False))
    line_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    tax_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))

    sort_order: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))
    expected_receipt_at: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
