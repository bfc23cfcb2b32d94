"""Purchase Order Repository Interface"""

from src.app.repositories.document_repository import DocumentRepository
from src.domain.purchase_order import PurchaseOrder


class PurchaseOrderRepository(DocumentRepository[PurchaseOrder]):
    """Repository interface for PurchaseOrder persistence"""
    pass
