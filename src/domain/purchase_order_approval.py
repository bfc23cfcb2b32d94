"""Purchase Order Approval Domain Entity"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Text
from src.domain.base import BaseModel, IdType


class ApprovalStatus(str, Enum):
    """Approval decision states"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    ESCALATED = "escalated"


class PurchaseOrderApproval(BaseModel, table=True):
    """
    Purchase Order Approval

    Domain Rules:
    - any rejection cancels the purchase order
    - all approved -> purchase order approved (approved_at = latest decision)
    - any pending or escalated -> purchase order pending approval
    """

    __tablename__ = "purchase_order_approvals"
    __table_args__ = (
        Index('ix_purchase_order_approvals_purchase_order_id', 'purchase_order_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    purchase_order_id: int = Field(
        sa_column=Column(IdType, ForeignKey("purchase_orders.id", ondelete="CASCADE"), nullable=False),
    )

    tenant_id: str = Field(description="Tenant ID")
    requested_by_id: Optional[str] = Field(default=None)
    approver_id: Optional[str] = Field(default=None)

    status: ApprovalStatus = Field(default=ApprovalStatus.PENDING)

    due_at: Optional[datetime] = Field(default=None)
    decided_at: Optional[datetime] = Field(default=None)
    decision_notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
