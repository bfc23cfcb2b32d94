"""Request schemas for Ledger API

Bodies of endpoints whose document id comes from the path. Document
creation and line item bodies use the use case command DTOs directly.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from src.domain.invoice_payment import PaymentStatus
from src.domain.purchase_order_approval import ApprovalStatus
from src.domain.purchase_order_receipt import ReceiptType


class PaymentRequestSchema(BaseModel):
    """
    Request schema for recording a payment

    Used for POST /ledger/invoices/{invoice_id}/payments endpoint.
    """

    amount: Decimal = Field(..., description="Payment amount (must be > 0)")
    status: PaymentStatus = Field(default=PaymentStatus.COMPLETED)
    method: Optional[str] = Field(default=None, max_length=50)
    reference: Optional[str] = Field(default=None, max_length=100)
    paid_at: Optional[datetime] = None

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v):
        """Ensure amount is positive with at most 2 decimal places"""
        if v <= 0:
            raise ValueError("Amount must be greater than 0")
        if v.as_tuple().exponent < -2:
            raise ValueError("Amount must have at most 2 decimal places")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "amount": "64.92",
                "status": "completed",
                "method": "wire",
                "reference": "TRX-99812"
            }
        }


class PaymentStatusRequestSchema(BaseModel):
    status: PaymentStatus


class ReceiptRequestSchema(BaseModel):
    """Used for POST /ledger/purchase-orders/{purchase_order_id}/receipts"""

    purchase_order_line_item_id: int
    quantity: Decimal = Field(..., gt=0)
    unit_cost: Optional[Decimal] = Field(default=None, ge=0)
    receipt_type: ReceiptType = ReceiptType.RECEIPT
    received_at: Optional[datetime] = None
    notes: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "purchase_order_line_item_id": 12,
                "quantity": "4",
                "receipt_type": "receipt"
            }
        }


class ApprovalRequestSchema(BaseModel):
    approver_id: Optional[str] = None
    due_at: Optional[datetime] = None


class ApprovalDecisionRequestSchema(BaseModel):
    status: ApprovalStatus
    notes: Optional[str] = None


class TransitionRequestSchema(BaseModel):
    """Optional note stored on the status history row"""
    note: Optional[str] = Field(default=None, max_length=1000)
