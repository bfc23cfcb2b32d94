"""SQLAlchemy implementation of PurchaseOrderApprovalRepository"""

from datetime import datetime
from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.purchase_order_approval_repository import PurchaseOrderApprovalRepository
from src.domain.purchase_order_approval import PurchaseOrderApproval


class SqlAlchemyPurchaseOrderApprovalRepository(PurchaseOrderApprovalRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, approval: PurchaseOrderApproval) -> PurchaseOrderApproval:
        self.session.add(approval)
        await self.session.flush()
        await self.session.refresh(approval)
        return approval

    async def get_by_id(self, approval_id: int) -> Optional[PurchaseOrderApproval]:
        stmt = select(PurchaseOrderApproval).where(PurchaseOrderApproval.id == approval_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, approval: PurchaseOrderApproval) -> PurchaseOrderApproval:
        approval.updated_at = datetime.utcnow()
        self.session.add(approval)
        await self.session.flush()
        return approval

    async def list_by_purchase_order(self, purchase_order_id: int) -> List[PurchaseOrderApproval]:
        stmt = (
            select(PurchaseOrderApproval)
            .where(PurchaseOrderApproval.purchase_order_id == purchase_order_id)
            .order_by(PurchaseOrderApproval.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
