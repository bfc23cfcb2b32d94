"""Reference Sequence Repository Interface"""

from abc import ABC, abstractmethod


class ReferenceSequenceRepository(ABC):

    @abstractmethod
    async def next_value(self, tenant_id: str, scope: str, period: str, seed: int = 0) -> int:
        """
        Atomically increment and return the counter for (tenant, scope, period)

        The counter row is locked with SELECT FOR UPDATE. A missing row is
        created starting at seed inside a savepoint. An existing row is
        moved up to seed first when seed is ahead of it.

        Args:
            tenant_id: Tenant identifier
            scope: Document type the counter numbers
            period: Reset period (year)
            seed: Highest value already in use (stored or imported numbers)

        Returns:
            The next value (always > seed)

        Raises:
            ReferenceSequenceConflictError: a concurrent transaction created
                the same counter row first; the caller should retry
        """
        pass
