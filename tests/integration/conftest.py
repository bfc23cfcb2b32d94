import pytest_asyncio
from datetime import date
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
import src.domain  # noqa: F401  registers every table on SQLModel.metadata
from src.adapter.database import create_engine, create_session_factory
from src.adapter.ledger import SqlAlchemyLedger
from src.adapter.services.identity_provider import StaticIdentityProvider
from src.depends import get_session

TENANT_ID = "tenant_integration"
THIS_YEAR = date.today().year


@pytest_asyncio.fixture(scope="function")
async def engine():
    """Create an in-memory SQLite engine with a fresh schema"""
    engine = create_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = create_session_factory(engine)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def ledger(db_session):
    """Ledger bound to the test session, acting as TENANT_ID"""
    return SqlAlchemyLedger(db_session, identity=StaticIdentityProvider(tenant_id=TENANT_ID, user_id="user_1"))


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-Tenant-ID": TENANT_ID, "X-User-ID": "user_1"},
    ) as ac:
        yield ac
