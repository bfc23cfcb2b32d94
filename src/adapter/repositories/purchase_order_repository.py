"""SQLAlchemy implementation of PurchaseOrderRepository"""

from src.adapter.repositories.document_repository import SqlAlchemyDocumentRepository
from src.app.repositories.purchase_order_repository import PurchaseOrderRepository
from src.domain.purchase_order import PurchaseOrder


class SqlAlchemyPurchaseOrderRepository(SqlAlchemyDocumentRepository[PurchaseOrder], PurchaseOrderRepository):
    model = PurchaseOrder
