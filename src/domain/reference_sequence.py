"""Reference Sequence Domain Entity

Locked counter row backing human-readable document numbers.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import BigInteger, String, UniqueConstraint
from src.domain.base import BaseModel, IdType


class ReferenceSequence(BaseModel, table=True):
    """
    Reference Sequence - One counter per tenant, scope and period

    Domain Rules:
    - current_value only ever increases
    - incremented under SELECT ... FOR UPDATE
    """

    __tablename__ = "reference_sequences"
    __table_args__ = (
        UniqueConstraint('tenant_id', 'scope', 'period', name='uq_reference_sequences_scope'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    tenant_id: str = Field(description="Tenant ID")

    scope: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Document type the counter numbers (e.g., invoice)"
    )

    period: str = Field(
        sa_column=Column(String(10), nullable=False),
        description="Reset period (year, e.g., 2025)"
    )

    current_value: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
    )

    updated_at: datetime = Field(default_factory=datetime.utcnow)
