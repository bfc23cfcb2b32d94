"""SQLAlchemy Unit of Work

Repositories flush into the shared session; only this class commits.
"""

from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        # Rolls back to the last commit, savepoints included
        await self.session.rollback()
