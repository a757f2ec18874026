"""
Test fixtures and configuration.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from caissier.config.settings import Settings
from caissier.infrastructure.persistence.database import Database
from tests.helpers.fake_ledger import FakeLedgerClient

# Shared in-memory database (StaticPool keeps one connection)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_JWT_SECRET = "test-secret-key-that-is-at-least-32-characters"
TEST_PASSWORD = "Sup3r$ecret"


@pytest.fixture
def settings() -> Settings:
    """Isolated settings; no .env or YAML involved."""
    return Settings(
        _env_file=None,
        ENV="test",
        DATABASE_URL=TEST_DATABASE_URL,
        JWT_SECRET_KEY=TEST_JWT_SECRET,
        LOG_LEVEL="WARNING",
        METRICS_ENABLED=True,
        RETRY_MAX_ATTEMPTS=1,
        ARGON2_TIME_COST=1,
        ARGON2_MEMORY_COST=1024,
        ARGON2_PARALLELISM=1,
        PAYMENT_CONFIRMATION_BLOCKS=1,
    )


@pytest_asyncio.fixture
async def test_db() -> AsyncGenerator[Database, None]:
    """
    Create test database and tables.

    Each test gets a clean database.
    """
    db = Database(database_url=TEST_DATABASE_URL, echo=False)
    await db.connect()
    await db.create_tables()

    yield db

    await db.disconnect()


@pytest_asyncio.fixture
async def db_session(test_db: Database) -> AsyncGenerator[AsyncSession, None]:
    """Provide database session for tests."""
    async with test_db.session() as session:
        yield session


@pytest.fixture
def fake_ledger() -> FakeLedgerClient:
    return FakeLedgerClient()


@pytest_asyncio.fixture
async def app(settings: Settings, fake_ledger: FakeLedgerClient):
    """
    Application wired to a fresh in-memory database and the fake ledger.

    ASGITransport does not run the lifespan, so the container is
    initialized here.
    """
    from caissier.di.container import initialize_container, shutdown_container
    from caissier.di.dependencies import get_ledger_client
    from caissier.main import create_app

    application = create_app(settings)
    container = await initialize_container(settings)
    await container.database.create_tables()

    application.dependency_overrides[get_ledger_client] = lambda: fake_ledger

    yield application

    application.dependency_overrides.clear()
    await shutdown_container()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
