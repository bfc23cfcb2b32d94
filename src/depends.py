from typing import Optional
from fastapi import Depends, Header
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.database import create_engine, create_session_factory
from src.adapter.ledger import SqlAlchemyLedger
from src.adapter.services.identity_provider import StaticIdentityProvider
from src.adapter.services.notification_service import create_notification_service

engine = create_engine(ApplicationConfig.DB_URI)

AsyncSessionLocal = create_session_factory(engine)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_identity(
    x_tenant_id: Optional[str] = Header(default=None),
    x_user_id: Optional[str] = Header(default=None),
) -> StaticIdentityProvider:
    return StaticIdentityProvider(tenant_id=x_tenant_id, user_id=x_user_id)


def get_notification_service():
    return create_notification_service(ApplicationConfig.STATUS_NOTIFICATION_WEBHOOK)


def get_ledger(
    session: AsyncSession = Depends(get_session),
    identity: StaticIdentityProvider = Depends(get_identity),
) -> SqlAlchemyLedger:
    return SqlAlchemyLedger(
        session,
        identity=identity,
        strict_quantities=str(ApplicationConfig.QUANTITY_NORMALIZATION).lower() == "strict",
        reference_retry_attempts=ApplicationConfig.REFERENCE_RETRY_ATTEMPTS,
    )
