"""SQLAlchemy implementation of QuoteRepository"""

from src.adapter.repositories.document_repository import SqlAlchemyDocumentRepository
from src.app.repositories.quote_repository import QuoteRepository
from src.domain.quote import Quote


class SqlAlchemyQuoteRepository(SqlAlchemyDocumentRepository[Quote], QuoteRepository):
    model = Quote

    async def max_sequence(self, tenant_id: str, number_prefix: str) -> int:
        # Quotes carry no reference number
        return 0
