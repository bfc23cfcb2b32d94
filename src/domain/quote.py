"""Quote Domain Entity

Quote status only changes through explicit user decisions; recalculation
touches totals only.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, Numeric, String, Text, Date
from src.domain.base import BaseModel, IdType


class QuoteStatus(str, Enum):
    """Quote status types"""
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Quote(BaseModel, table=True):
    """
    Quote - Priced proposal sent to a customer

    Domain Rules:
    - subtotal = sum of discounted line totals
    - discount_total = sum of line discounts
    - total = max(subtotal + tax_total, 0)
    """

    __tablename__ = "quotes"
    __table_args__ = (
        Index('ix_quotes_tenant_id', 'tenant_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    tenant_id: str = Field(description="Tenant ID")
    creator_id: Optional[str] = Field(default=None)

    title: str = Field(sa_column=Column(String(255), nullable=False))

    status: QuoteStatus = Field(default=QuoteStatus.DRAFT)

    currency_code: str = Field(default="USD", sa_column=Column(String(3), nullable=False))

    subtotal: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    discount_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    tax_total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))
    total: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(15, 2), nullable=False))

    valid_until: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))

    line_items: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        sa_column=Column(JSON, nullable=True),
        description="Snapshot of normalized line items, refreshed on every sync"
    )

    decision_note: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    sent_at: Optional[datetime] = Field(default=None)
    accepted_at: Optional[datetime] = Field(default=None)
    rejected_at: Optional[datetime] = Field(default=None)
    deleted_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def is_expired(self, today: Optional[date] = None) -> bool:
        today = today or datetime.utcnow().date()
        return (
            self.valid_until is not None
            and self.valid_until < today
            and self.status != QuoteStatus.ACCEPTED
        )
