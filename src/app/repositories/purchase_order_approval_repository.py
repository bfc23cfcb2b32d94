"""Purchase Order Approval Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.purchase_order_approval import PurchaseOrderApproval


class PurchaseOrderApprovalRepository(ABC):

    @abstractmethod
    async def create(self, approval: PurchaseOrderApproval) -> PurchaseOrderApproval:
        pass

    @abstractmethod
    async def get_by_id(self, approval_id: int) -> Optional[PurchaseOrderApproval]:
        pass

    @abstractmethod
    async def update(self, approval: PurchaseOrderApproval) -> PurchaseOrderApproval:
        pass

    @abstractmethod
    async def list_by_purchase_order(self, purchase_order_id: int) -> List[PurchaseOrderApproval]:
        pass
