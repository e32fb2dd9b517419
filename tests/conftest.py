"""
Shared test fixtures for Remotable tests.

Provides database session management, test clients, tenant fixtures and a
mock remote directory.
"""

from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from factories import build
from remotable.config import settings
from remotable.database import Base, get_db
from remotable.main import app
from remotable.middleware.rate_limit import reset_limiter

# Import models so they're registered with Base.metadata before table creation
from remotable.models.tenant import Tenant
from remotable.remote.client import RemoteClient, get_remote_client

TEST_DATABASE_URL = settings.test_database_url

# NullPool so each session gets a fresh connection
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    poolclass=NullPool,
    echo=False,
)

TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

REMOTE_BASE_URL = "http://directory.test/api"


# --- Rate Limiter Reset Fixture ---


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Reset rate limiter before each test to ensure test isolation."""
    reset_limiter()
    yield


# --- Database Fixtures ---


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create tables before each test function, drop after.
    Provides isolated database state per test.
    """
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client configured for testing.
    Overrides database dependency with test session.
    """

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        follow_redirects=True,
    ) as client:
        yield client

    app.dependency_overrides.clear()


# --- Tenant Fixtures ---


@pytest.fixture
def create_tenant(db_session: AsyncSession):
    """
    Factory fixture that builds a tenant with a named factory and saves it.

    Usage:
        tenant = await create_tenant("bespoke_tenant", nosync=False)
    """

    async def _create_tenant(factory_name: str = "tenant", /, **overrides) -> Tenant:
        tenant = build(factory_name, **overrides)
        db_session.add(tenant)
        await db_session.commit()
        return tenant

    return _create_tenant


@pytest_asyncio.fixture
async def test_tenant(create_tenant) -> Tenant:
    """A saved tenant built by the `tenant` factory."""
    return await create_tenant("tenant")


@pytest_asyncio.fixture
async def syncable_tenant(create_tenant) -> Tenant:
    """A saved tenant that may be looked up remotely."""
    return await create_tenant("tenant", nosync=False)


# --- Remote Directory Fixtures ---


@pytest.fixture
def mock_remote() -> Callable[[Callable[[httpx.Request], httpx.Response]], None]:
    """
    Route remote directory calls to a handler instead of the network.

    Usage:
        mock_remote(lambda request: httpx.Response(200, json={...}))

    The handler may also raise httpx exceptions to simulate transport failures.
    """

    def _mock_remote(handler: Callable[[httpx.Request], httpx.Response]) -> None:
        async def override_get_remote_client():
            async with httpx.AsyncClient(
                transport=httpx.MockTransport(handler),
                base_url=REMOTE_BASE_URL,
            ) as http:
                yield RemoteClient(http)

        app.dependency_overrides[get_remote_client] = override_get_remote_client

    return _mock_remote


@pytest.fixture
def frozen_time():
    """
    Fixture for time-based testing using freezegun.

    Usage:
        with frozen_time("2026-02-01 12:00:00"):
            # time is frozen
    """
    from freezegun import freeze_time

    return freeze_time
