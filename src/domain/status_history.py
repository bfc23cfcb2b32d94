"""Status History Domain Entity

Append-only log of lifecycle transitions of ledger documents.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import String, Text
from src.domain.base import BaseModel, IdType
from src.domain.document_type import DocumentType


class StatusHistory(BaseModel, table=True):
    """
    Status History - One row per actual status change

    Domain Rules:
    - Written only when from_status != to_status
    - Never updated or deleted
    """

    __tablename__ = "status_histories"
    __table_args__ = (
        Index('ix_status_histories_document', 'document_type', 'document_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    tenant_id: str = Field(description="Tenant ID")

    document_type: DocumentType = Field(description="Kind of document that changed")
    document_id: int = Field(sa_column=Column(IdType, nullable=False))

    from_status: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    to_status: str = Field(sa_column=Column(String(50), nullable=False))

    changed_by: Optional[str] = Field(default=None, description="User who triggered the change")
    note: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(default_factory=datetime.utcnow)
