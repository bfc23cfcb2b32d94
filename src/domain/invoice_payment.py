"""Invoice Payment Domain Entity

Only completed payments count toward an invoice's balance.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String
from src.domain.base import BaseModel, IdType


class PaymentStatus(str, Enum):
    """Payment status types"""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class InvoicePayment(BaseModel, table=True):
    """
    Invoice Payment - Money received against an invoice

    Domain Rules:
    - amount must be > 0
    - Only COMPLETED payments reduce the invoice balance
    - Every change re-syncs the owning invoice (and its order)
    """

    __tablename__ = "invoice_payments"
    __table_args__ = (
        Index('ix_invoice_payments_invoice_id', 'invoice_id'),
        CheckConstraint('amount > 0', name='payment_amount_positive'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    invoice_id: int = Field(
        sa_column=Column(IdType, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
    )

    tenant_id: str = Field(description="Tenant ID")

    amount: Decimal = Field(
        sa_column=Column(Numeric(15, 2), nullable=False),
        description="Payment amount (must be > 0)"
    )

    status: PaymentStatus = Field(default=PaymentStatus.PENDING)

    method: Optional[str] = Field(default=None, description="Payment method (e.g., card, wire)")

    reference: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="External payment reference"
    )

    paid_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
