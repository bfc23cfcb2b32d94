"""Invoice Line Item Domain Entity"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from src.domain.base import BaseModel, IdType


class InvoiceLineItem(BaseModel, table=True):
    """
    Invoice Line Item - Individual line within an invoice

    Domain Rules:
    - line_total = round2(quantity * unit_price)
    - tax_total = round2(line_total * tax_rate / 100)
    - Every change re-syncs the owning invoice
    """

    __tablename__ = "invoice_line_items"
    __table_args__ = (
        Index('ix_invoice_line_items_invoice_id', 'invoice_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    invoice_id: int = Field(
        sa_column=Column(IdType, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    tenant_id: str = Field(description="Tenant ID")

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Line item name (e.g., 'Consulting hours')"
    )

    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    quantity: Decimal = Field(default=Decimal("1"), sa_column=Column(Numeric(12, 2), nullable=False))
    unit_price: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    tax_rate: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(5, 2), nullable=False))
    line_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    tax_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))

    sort_order: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
