"""SQLAlchemy implementation of InvoicePaymentRepository"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_payment_repository import InvoicePaymentRepository
from src.domain.invoice import Invoice
from src.domain.invoice_payment import InvoicePayment, PaymentStatus


class SqlAlchemyInvoicePaymentRepository(InvoicePaymentRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, payment: InvoicePayment) -> InvoicePayment:
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def get_by_id(self, payment_id: int) -> Optional[InvoicePayment]:
        stmt = select(InvoicePayment).where(InvoicePayment.id == payment_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, payment: InvoicePayment) -> InvoicePayment:
        payment.updated_at = datetime.utcnow()
        self.session.add(payment)
        await self.session.flush()
        return payment

    async def list_by_invoice(self, invoice_id: int) -> List[InvoicePayment]:
        stmt = (
            select(InvoicePayment)
            .where(InvoicePayment.invoice_id == invoice_id)
            .order_by(InvoicePayment.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def sum_completed_by_invoice(self, invoice_id: int) -> Decimal:
        stmt = select(func.coalesce(func.sum(InvoicePayment.amount), 0)).where(
            InvoicePayment.invoice_id == invoice_id,
            InvoicePayment.status == PaymentStatus.COMPLETED,
        )
        result = await self.session.execute(stmt)
        return Decimal(str(result.scalar_one()))

    async def sum_completed_by_order(self, order_id: int) -> Decimal:
        stmt = (
            select(func.coalesce(func.sum(InvoicePayment.amount), 0))
            .join(Invoice, Invoice.id == InvoicePayment.invoice_id)
            .where(
                Invoice.order_id == order_id,
                Invoice.deleted_at.is_(None),
                InvoicePayment.status == PaymentStatus.COMPLETED,
            )
        )
        result = await self.session.execute(stmt)
        return Decimal(str(result.scalar_one()))
