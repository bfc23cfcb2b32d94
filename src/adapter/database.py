"""Async engine and session factory"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession


def create_engine(db_uri: str, **kwargs) -> AsyncEngine:
    """
    Create an async engine for db_uri

    SQLite connections get explicit BEGIN handling so that SAVEPOINTs used
    by the reference counter behave as on other databases. SQLite ignores
    FOR UPDATE, so transactions start with BEGIN IMMEDIATE and concurrent
    writers wait on the busy timeout rather than fail on lock upgrade.
    """
    engine = create_async_engine(db_uri, echo=False, future=True, **kwargs)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine.sync_engine, "connect")
        def _disable_driver_transactions(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine.sync_engine, "begin")
        def _begin(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def create_session_factory(engine: AsyncEngine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
