"""Invoice Domain Entity

Customer invoice whose totals, balance and status are kept in sync with its
line items and payments.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String, Text, Date, UniqueConstraint
from src.domain.base import BaseModel, IdType


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    SENT = "sent"
    PARTIAL = "partial"
    OVERDUE = "overdue"
    PAID = "paid"
    CANCELLED = "cancelled"


class Invoice(BaseModel, table=True):
    """
    Invoice - Customer invoice for goods or services

    Domain Rules:
    - number is unique per tenant and assigned exactly once (INV-YYYY-NNNNN)
    - total = max(subtotal - discount_total + tax_total + late_fee_amount, 0)
    - balance_due = max(total - completed payments, 0)
    - cancelled is terminal; recalculation never moves an invoice out of it
    - late fee is applied once and frozen (late_fee_applied_at)
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_tenant_id', 'tenant_id'),
        Index('ix_invoices_status', 'status'),
        Index('ix_invoices_order_id', 'order_id'),
        UniqueConstraint('tenant_id', 'number', name='uq_invoices_tenant_number'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique invoice identifier (auto-increment)"
    )

    tenant_id: str = Field(
        description="Tenant ID"
    )

    creator_id: Optional[str] = Field(
        default=None,
        description="User who created the invoice"
    )

    order_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("orders.id"), nullable=True),
        description="Order this invoice bills (recalculated after every invoice sync)"
    )

    parent_invoice_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("invoices.id"), nullable=True),
        description="Parent invoice for credit notes and recurring children"
    )

    number: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="Reference number (e.g., INV-2025-00001)"
    )

    sequence: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
        description="Sequence backing the reference number"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status"
    )

    issue_date: date = Field(
        default_factory=lambda: datetime.utcnow().date(),
        sa_column=Column(Date, nullable=False),
        description="Issue date (drives the reference number year)"
    )

    due_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Payment due date"
    )

    payment_terms: Optional[str] = Field(default=None, description="Payment terms (e.g., Net 30)")

    currency_code: str = Field(
        default="USD",
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    fx_rate: Decimal = Field(
        default=Decimal("1"),
        sa_column=Column(Numeric(12, 6), nullable=False),
    )

    subtotal: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    discount_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    tax_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))

    late_fee_rate: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(5, 2), nullable=False),
        description="Late fee percentage applied once the invoice is overdue"
    )

    late_fee_amount: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))

    late_fee_applied_at: Optional[datetime] = Field(
        default=None,
        description="When the late fee was applied (fee is frozen afterwards)"
    )

    total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    balance_due: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    sent_at: Optional[datetime] = Field(default=None)
    paid_at: Optional[datetime] = Field(default=None)
    cancelled_at: Optional[datetime] = Field(default=None)
    deleted_at: Optional[datetime] = Field(default=None, description="Soft delete timestamp")

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "tenant_id": "tenant_xyz789",
                "number": "INV-2025-00001",
                "sequence": 1,
                "status": "partial",
                "subtotal": "59.97",
                "tax_total": "4.95",
                "total": "64.92",
                "balance_due": "34.92",
                "currency_code": "USD",
                "issue_date": "2025-03-01",
                "due_date": "2025-03-31",
            }
        }
