"""Order Repository Interface"""

from src.app.repositories.document_repository import DocumentRepository
from src.domain.order import Order


class OrderRepository(DocumentRepository[Order]):
    """Repository interface for Order persistence"""
    pass
