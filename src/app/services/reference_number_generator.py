"""Reference Number Generator

Assigns human-readable numbers such as INV-2025-00001. A number is assigned
once; documents that already carry one are left untouched.
"""

import logging
import re
from datetime import date, datetime
from typing import Awaitable, Callable, Optional
from src.app.repositories.reference_sequence_repository import ReferenceSequenceRepository
from src.domain.document_type import DocumentType, REFERENCE_PREFIXES
from src.domain.errors import LedgerDomainError, ReferenceSequenceConflictError

logger = logging.getLogger(__name__)

SeedLoader = Callable[[str, str], Awaitable[int]]

DATE_ATTRIBUTES = {
    DocumentType.INVOICE: "issue_date",
    DocumentType.ORDER: "ordered_at",
    DocumentType.PURCHASE_ORDER: "ordered_at",
    DocumentType.PURCHASE_ORDER_RECEIPT: "received_at",
}

NUMBER_ATTRIBUTES = {
    DocumentType.PURCHASE_ORDER_RECEIPT: "reference",
}

TRAILING_DIGITS = re.compile(r"(\d+)$")


def format_reference(prefix: str, year: int, sequence: int) -> str:
    return f"{prefix}-{year}-{sequence:05d}"


def extract_sequence(number: Optional[str]) -> Optional[int]:
    """Trailing sequence of a formatted number (None if there is none)"""
    if not number:
        return None
    match = TRAILING_DIGITS.search(number)
    return int(match.group(1)) if match else None


class ReferenceNumberGenerator:
    """
    Per-tenant, per-year sequential numbering

    The counter increment is atomic (row lock in the repository). When two
    transactions race to create the same counter row, the loser gets
    ReferenceSequenceConflictError and the increment is retried.
    """

    def __init__(self, sequence_repo: ReferenceSequenceRepository, retry_attempts: int = 5):
        self.sequence_repo = sequence_repo
        self.retry_attempts = max(int(retry_attempts), 1)

    async def register(
        self,
        document,
        document_type: DocumentType,
        seed_loader: Optional[SeedLoader] = None,
    ) -> str:
        """
        Assign a number to document unless it already has one

        Args:
            document: Entity with tenant_id, sequence and a number field
            document_type: Decides prefix, date field and counter scope
            seed_loader: Returns the highest sequence already stored for
                (tenant_id, number_prefix); seeds a brand new counter

        Returns:
            The document's number

        Raises:
            ReferenceSequenceConflictError: all retries lost the race
        """
        number_attribute = NUMBER_ATTRIBUTES.get(document_type, "number")
        existing = getattr(document, number_attribute)

        if existing:
            if document.sequence is None:
                document.sequence = extract_sequence(existing)
            return existing

        if not document.tenant_id:
            raise LedgerDomainError(
                f"Cannot number a {document_type.value} without a tenant", code="TENANT_REQUIRED"
            )

        prefix = REFERENCE_PREFIXES[document_type]
        year = self._period_of(document, document_type)
        number_prefix = f"{prefix}-{year}-"

        sequence = None
        for attempt in range(1, self.retry_attempts + 1):
            try:
                seed = await seed_loader(document.tenant_id, number_prefix) if seed_loader else 0
                sequence = await self.sequence_repo.next_value(
                    document.tenant_id, document_type.value, str(year), seed=seed
                )
                break
            except ReferenceSequenceConflictError:
                logger.warning(
                    f"Sequence conflict for {number_prefix}* (tenant {document.tenant_id}), "
                    f"attempt {attempt}/{self.retry_attempts}"
                )
                if attempt == self.retry_attempts:
                    raise

        number = format_reference(prefix, year, sequence)
        setattr(document, number_attribute, number)
        document.sequence = sequence

        logger.debug(f"Assigned {number} to {document_type.value} for tenant {document.tenant_id}")
        return number

    @staticmethod
    def _period_of(document, document_type: DocumentType) -> int:
        value = getattr(document, DATE_ATTRIBUTES[document_type], None)
        if isinstance(value, (date, datetime)):
            return value.year
        return datetime.utcnow().year
