"""Data Transfer Objects for Ledger Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from src.domain.document_type import DocumentType
from src.domain.invoice_payment import PaymentStatus
from src.domain.purchase_order_approval import ApprovalStatus
from src.domain.purchase_order_receipt import ReceiptType
from src.domain.quote_line_item import QuoteDiscountType


# Commands

class LineItemInputDTO(BaseModel):
    """
    A line item to add to any ledger document

    unit_price is read as unit_cost for purchase orders. Type-specific fields
    are ignored by documents that do not have them.
    """

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    sku: Optional[str] = Field(default=None, description="Quotes only")
    quantity: Decimal = Field(default=Decimal("1"), ge=0)
    unit_price: Decimal = Field(default=Decimal("0.00"), ge=0)
    tax_rate: Decimal = Field(default=Decimal("0.00"), ge=0, description="Percent, missing means 0")
    discount_type: QuoteDiscountType = Field(default=QuoteDiscountType.PERCENT, description="Quotes only")
    discount_value: Decimal = Field(default=Decimal("0.00"), ge=0, description="Quotes only")
    fulfilled_quantity: Decimal = Field(default=Decimal("0"), description="Orders only")
    order_line_item_id: Optional[int] = Field(default=None, description="Purchase orders only")
    sort_order: Optional[int] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Consulting hours",
                "quantity": "3",
                "unit_price": "19.99",
                "tax_rate": "8.25"
            }
        }


class LineItemUpdateDTO(BaseModel):
    """Partial update of a line item; omitted fields are left unchanged"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    sku: Optional[str] = None
    quantity: Optional[Decimal] = Field(default=None, ge=0)
    unit_price: Optional[Decimal] = Field(default=None, ge=0)
    tax_rate: Optional[Decimal] = Field(default=None, ge=0)
    discount_type: Optional[QuoteDiscountType] = None
    discount_value: Optional[Decimal] = Field(default=None, ge=0)
    fulfilled_quantity: Optional[Decimal] = None
    sort_order: Optional[int] = None


class CreateInvoiceCommandDTO(BaseModel):
    tenant_id: Optional[str] = Field(default=None, description="Defaults to the current tenant")
    order_id: Optional[int] = None
    parent_invoice_id: Optional[int] = Field(default=None, description="Credit note / recurring parent")
    number: Optional[str] = Field(default=None, description="Imported number; generated when omitted")
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    payment_terms: Optional[str] = None
    currency_code: Optional[str] = Field(default=None, min_length=3, max_length=3)
    fx_rate: Decimal = Field(default=Decimal("1"), gt=0)
    discount_total: Decimal = Field(default=Decimal("0.00"), ge=0)
    late_fee_rate: Decimal = Field(default=Decimal("0.00"), ge=0)
    notes: Optional[str] = None
    line_items: List[LineItemInputDTO] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "order_id": 1,
                "due_date": "2025-02-15",
                "late_fee_rate": "5",
                "line_items": [
                    {"name": "Consulting hours", "quantity": "3", "unit_price": "19.99", "tax_rate": "8.25"}
                ]
            }
        }


class CreateOrderCommandDTO(BaseModel):
    tenant_id: Optional[str] = None
    quote_id: Optional[int] = None
    number: Optional[str] = None
    ordered_at: Optional[date] = None
    fulfillment_due_at: Optional[date] = None
    currency_code: Optional[str] = Field(default=None, min_length=3, max_length=3)
    fx_rate: Decimal = Field(default=Decimal("1"), gt=0)
    discount_total: Decimal = Field(default=Decimal("0.00"), ge=0)
    notes: Optional[str] = None
    line_items: List[LineItemInputDTO] = Field(default_factory=list)
    embedded_line_items: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        description="Legacy line items stored on the order itself; used only without line item rows"
    )


class CreatePurchaseOrderCommandDTO(BaseModel):
    tenant_id: Optional[str] = None
    vendor_name: Optional[str] = None
    order_id: Optional[int] = None
    number: Optional[str] = None
    ordered_at: Optional[date] = None
    expected_delivery_date: Optional[date] = None
    currency_code: Optional[str] = Field(default=None, min_length=3, max_length=3)
    fx_rate: Decimal = Field(default=Decimal("1"), gt=0)
    freight_total: Decimal = Field(default=Decimal("0.00"), ge=0)
    fee_total: Decimal = Field(default=Decimal("0.00"), ge=0)
    notes: Optional[str] = None
    line_items: List[LineItemInputDTO] = Field(default_factory=list)


class CreateQuoteCommandDTO(BaseModel):
    tenant_id: Optional[str] = None
    title: str = Field(..., min_length=1, max_length=255)
    valid_until: Optional[date] = None
    currency_code: Optional[str] = Field(default=None, min_length=3, max_length=3)
    line_items: List[LineItemInputDTO] = Field(default_factory=list)
    embedded_line_items: Optional[List[Dict[str, Any]]] = None


class RecordPaymentCommandDTO(BaseModel):
    invoice_id: int
    amount: Decimal = Field(..., gt=0)
    status: PaymentStatus = PaymentStatus.COMPLETED
    method: Optional[str] = None
    reference: Optional[str] = None
    paid_at: Optional[datetime] = None


class UpdatePaymentStatusCommandDTO(BaseModel):
    invoice_id: int
    payment_id: int
    status: PaymentStatus


class RecordReceiptCommandDTO(BaseModel):
    purchase_order_id: int
    purchase_order_line_item_id: int
    quantity: Decimal = Field(..., gt=0)
    unit_cost: Optional[Decimal] = Field(default=None, ge=0, description="Defaults to the line's unit cost")
    receipt_type: ReceiptType = ReceiptType.RECEIPT
    received_at: Optional[datetime] = None
    notes: Optional[str] = None


class RequestApprovalCommandDTO(BaseModel):
    purchase_order_id: int
    approver_id: Optional[str] = None
    due_at: Optional[datetime] = None


class DecideApprovalCommandDTO(BaseModel):
    purchase_order_id: int
    approval_id: int
    status: ApprovalStatus
    notes: Optional[str] = None


# Responses

class StatusHistoryDTO(BaseModel):
    id: Optional[int] = None
    document_type: DocumentType
    document_id: int
    from_status: Optional[str] = None
    to_status: str
    changed_by: Optional[str] = None
    note: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DocumentSummaryDTO(BaseModel):
    """Result of any write: the recalculated document and the transitions it caused"""

    document_type: DocumentType
    id: int
    tenant_id: str
    number: Optional[str] = None
    status: str
    subtotal: Decimal
    discount_total: Decimal = Decimal("0.00")
    tax_total: Decimal
    total: Decimal
    balance_due: Optional[Decimal] = None
    transitions: List[StatusHistoryDTO] = Field(default_factory=list)


class LineItemDTO(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    sku: Optional[str] = None
    quantity: Decimal
    unit_price: Optional[Decimal] = None
    unit_cost: Optional[Decimal] = None
    tax_rate: Decimal
    discount_type: Optional[QuoteDiscountType] = None
    discount_value: Optional[Decimal] = None
    fulfilled_quantity: Optional[Decimal] = None
    received_quantity: Optional[Decimal] = None
    line_total: Decimal
    tax_total: Decimal
    sort_order: int = 0

    class Config:
        from_attributes = True


class PaymentDTO(BaseModel):
    id: int
    invoice_id: int
    amount: Decimal
    status: PaymentStatus
    method: Optional[str] = None
    reference: Optional[str] = None
    paid_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ReceiptDTO(BaseModel):
    id: int
    purchase_order_line_item_id: int
    receipt_type: ReceiptType
    reference: Optional[str] = None
    quantity: Decimal
    unit_cost: Decimal
    line_total: Decimal
    received_by_id: Optional[str] = None
    received_at: datetime

    class Config:
        from_attributes = True


class ApprovalDTO(BaseModel):
    id: int
    status: ApprovalStatus
    requested_by_id: Optional[str] = None
    approver_id: Optional[str] = None
    due_at: Optional[datetime] = None
    decided_at: Optional[datetime] = None
    decision_notes: Optional[str] = None

    class Config:
        from_attributes = True


class InvoiceDetailDTO(BaseModel):
    id: int
    tenant_id: str
    order_id: Optional[int] = None
    parent_invoice_id: Optional[int] = None
    number: Optional[str] = None
    status: str
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    currency_code: str
    subtotal: Decimal
    discount_total: Decimal
    tax_total: Decimal
    late_fee_rate: Decimal
    late_fee_amount: Decimal
    late_fee_applied_at: Optional[datetime] = None
    total: Decimal
    balance_due: Decimal
    sent_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    line_items: List[LineItemDTO] = Field(default_factory=list)
    payments: List[PaymentDTO] = Field(default_factory=list)


class OrderDetailDTO(BaseModel):
    id: int
    tenant_id: str
    quote_id: Optional[int] = None
    number: Optional[str] = None
    status: str
    fulfillment_status: str
    ordered_at: Optional[date] = None
    currency_code: str
    subtotal: Decimal
    discount_total: Decimal
    tax_total: Decimal
    total: Decimal
    invoiced_total: Decimal
    paid_total: Decimal
    balance_due: Decimal
    fulfilled_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    line_items: List[LineItemDTO] = Field(default_factory=list)
    embedded_line_items: Optional[List[Dict[str, Any]]] = None


class PurchaseOrderDetailDTO(BaseModel):
    id: int
    tenant_id: str
    order_id: Optional[int] = None
    vendor_name: Optional[str] = None
    number: Optional[str] = None
    status: str
    ordered_at: Optional[date] = None
    currency_code: str
    subtotal: Decimal
    tax_total: Decimal
    freight_total: Decimal
    fee_total: Decimal
    total: Decimal
    received_cost: Decimal
    outstanding_commitment: Decimal
    approved_at: Optional[datetime] = None
    last_received_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    line_items: List[LineItemDTO] = Field(default_factory=list)
    receipts: List[ReceiptDTO] = Field(default_factory=list)
    approvals: List[ApprovalDTO] = Field(default_factory=list)


class QuoteDetailDTO(BaseModel):
    id: int
    tenant_id: str
    title: str
    status: str
    currency_code: str
    subtotal: Decimal
    discount_total: Decimal
    tax_total: Decimal
    total: Decimal
    valid_until: Optional[date] = None
    is_expired: bool = False
    decision_note: Optional[str] = None
    sent_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    line_items: List[LineItemDTO] = Field(default_factory=list)
    snapshot: Optional[List[Dict[str, Any]]] = Field(default=None, description="Normalized line snapshot")


class OverdueSweepResultDTO(BaseModel):
    invoices_checked: int
    invoices_transitioned: int
    failed_invoice_ids: List[int] = Field(default_factory=list)
    swept_at: datetime
    execution_time_ms: int
