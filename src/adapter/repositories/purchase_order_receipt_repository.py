"""SQLAlchemy implementation of PurchaseOrderReceiptRepository"""

from typing import List
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.purchase_order_receipt_repository import PurchaseOrderReceiptRepository
from src.domain.purchase_order_receipt import PurchaseOrderReceipt


class SqlAlchemyPurchaseOrderReceiptRepository(PurchaseOrderReceiptRepository):
    """Receipts are immutable once written"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, receipt: PurchaseOrderReceipt) -> PurchaseOrderReceipt:
        self.session.add(receipt)
        await self.session.flush()
        await self.session.refresh(receipt)
        return receipt

    async def list_by_purchase_order(self, purchase_order_id: int) -> List[PurchaseOrderReceipt]:
        stmt = (
            select(PurchaseOrderReceipt)
            .where(PurchaseOrderReceipt.purchase_order_id == purchase_order_id)
            .order_by(PurchaseOrderReceipt.received_at, PurchaseOrderReceipt.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def max_sequence(self, tenant_id: str, number_prefix: str) -> int:
        stmt = select(func.max(PurchaseOrderReceipt.sequence)).where(
            PurchaseOrderReceipt.tenant_id == tenant_id,
            PurchaseOrderReceipt.reference.like(f"{number_prefix}%"),
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one_or_none() or 0)
