"""Purchase Order Receipt Repository Interface"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.purchase_order_receipt import PurchaseOrderReceipt


class PurchaseOrderReceiptRepository(ABC):

    @abstractmethod
    async def create(self, receipt: PurchaseOrderReceipt) -> PurchaseOrderReceipt:
        pass

    @abstractmethod
    async def list_by_purchase_order(self, purchase_order_id: int) -> List[PurchaseOrderReceipt]:
        """Receipts and returns of a purchase order, oldest first"""
        pass

    @abstractmethod
    async def max_sequence(self, tenant_id: str, number_prefix: str) -> int:
        pass
