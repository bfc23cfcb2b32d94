"""Order Line Item Domain Entity"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from src.domain.base import BaseModel, IdType


class OrderLineItem(BaseModel, table=True):
    """
    Order Line Item

    Domain Rules:
    - line_total = round2(quantity * unit_price)
    - fulfilled_quantity is kept within [0, quantity]
    """

    __tablename__ = "order_line_items"
    __table_args__ = (
        Index('ix_order_line_items_order_id', 'order_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    order_id: int = Field(
        sa_column=Column(IdType, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
    )

    tenant_id: str = Field(description="Tenant ID")

    name: str = Field(sa_column=Column(String(255), nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    quantity: Decimal = Field(default=Decimal("1"), sa_column=Column(Numeric(12, 2), nullable=False))
    fulfilled_quantity: Decimal = Field(default=Decimal("0"), sa_column=Column(Numeric(12, 2), nullable=False))
    unit_price: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    tax_rate: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(5, 2), nullable=False))
    line_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    tax_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))

    sort_order: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
