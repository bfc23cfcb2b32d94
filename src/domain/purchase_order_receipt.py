"""Purchase Order Receipt Domain Entity

Goods received against (or returned from) a purchase order line.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from src.domain.base import BaseModel, IdType


class ReceiptType(str, Enum):
    """Standard receipts add stock, returns subtract it"""
    RECEIPT = "receipt"
    RETURN = "return"


class PurchaseOrderReceipt(BaseModel, table=True):
    """
    Purchase Order Receipt

    Domain Rules:
    - line_total = round2(quantity * unit_cost)
    - a return contributes a negative signed total and quantity
    - reference is a POR-YYYY-NNNNN number assigned once
    """

    __tablename__ = "purchase_order_receipts"
    __table_args__ = (
        Index('ix_purchase_order_receipts_purchase_order_id', 'purchase_order_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    purchase_order_id: int = Field(
        sa_column=Column(IdType, ForeignKey("purchase_orders.id", ondelete="CASCADE"), nullable=False),
    )

    purchase_order_line_item_id: int = Field(
        sa_column=Column(IdType, ForeignKey("purchase_order_line_items.id", ondelete="CASCADE"), nullable=False),
    )

    tenant_id: str = Field(description="Tenant ID")
    received_by_id: Optional[str] = Field(default=None)

    receipt_type: ReceiptType = Field(default=ReceiptType.RECEIPT)

    quantity: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    unit_cost: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    line_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))

    received_at: datetime = Field(default_factory=datetime.utcnow)

    reference: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    sequence: Optional[int] = Field(default=None, sa_column=Column(Integer, nullable=True))
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(default_factory=datetime.utcnow)

    def sign(self) -> int:
        return -1 if self.receipt_type == ReceiptType.RETURN else 1

    def signed_quantity(self) -> Decimal:
        return Decimal(self.quantity) * self.sign()

    def signed_total(self) -> Decimal:
        return Decimal(self.line_total) * self.sign()
