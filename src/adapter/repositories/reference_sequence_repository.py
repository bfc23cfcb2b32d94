"""SQLAlchemy implementation of ReferenceSequenceRepository

Counter rows are locked with SELECT FOR UPDATE so that two transactions
never hand out the same value.
"""

import logging
from datetime import datetime
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.reference_sequence_repository import ReferenceSequenceRepository
from src.domain.errors import ReferenceSequenceConflictError
from src.domain.reference_sequence import ReferenceSequence

logger = logging.getLogger(__name__)


class SqlAlchemyReferenceSequenceRepository(ReferenceSequenceRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_for_update(self, tenant_id: str, scope: str, period: str):
        stmt = (
            select(ReferenceSequence)
            .where(
                ReferenceSequence.tenant_id == tenant_id,
                ReferenceSequence.scope == scope,
                ReferenceSequence.period == period,
            )
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def next_value(self, tenant_id: str, scope: str, period: str, seed: int = 0) -> int:
        counter = await self._get_for_update(tenant_id, scope, period)

        if counter is None:
            counter = ReferenceSequence(
                tenant_id=tenant_id,
                scope=scope,
                period=period,
                current_value=seed,
            )
            try:
                async with self.session.begin_nested():
                    self.session.add(counter)
                    await self.session.flush()
            except IntegrityError as e:
                logger.warning(
                    f"Reference counter {scope}/{period} for tenant {tenant_id} was created concurrently"
                )
                raise ReferenceSequenceConflictError(
                    f"Reference counter {scope}/{period} already exists for tenant {tenant_id}"
                ) from e

        # Imported numbers can run ahead of the counter
        counter.current_value = max(counter.current_value or 0, seed) + 1
        counter.updated_at = datetime.utcnow()
        self.session.add(counter)
        await self.session.flush()

        logger.debug(f"Issued {scope}/{period} value {counter.current_value} for tenant {tenant_id}")
        return counter.current_value
