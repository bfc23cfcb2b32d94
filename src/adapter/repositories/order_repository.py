"""SQLAlchemy implementation of OrderRepository"""

from src.adapter.repositories.document_repository import SqlAlchemyDocumentRepository
from src.app.repositories.order_repository import OrderRepository
from src.domain.order import Order


class SqlAlchemyOrderRepository(SqlAlchemyDocumentRepository[Order], OrderRepository):
    model = Order
