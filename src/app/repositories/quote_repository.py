"""Quote Repository Interface"""

from src.app.repositories.document_repository import DocumentRepository
from src.domain.quote import Quote


class QuoteRepository(DocumentRepository[Quote]):
    """Repository interface for Quote persistence (quotes are not numbered)"""
    pass
