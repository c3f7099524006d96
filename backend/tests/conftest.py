"""Pytest fixtures for testing."""
import os

# Settings are validated at import time of the app; configure before any app import.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["REDIS_ENABLED"] = "false"
os.environ["LOG_FILE"] = ""

from collections.abc import AsyncGenerator  # noqa: E402

import fakeredis  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.config import Settings, get_settings  # noqa: E402
from core.redis import RedisClient, set_redis_client  # noqa: E402
from core.sessions import SessionStore, set_session_store  # noqa: E402
from db.session import Database, set_database  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    """Settings built from the test environment."""
    get_settings.cache_clear()
    return get_settings()


@pytest.fixture
async def database() -> AsyncGenerator[Database]:
    """
    Fresh in-memory database per test.

    StaticPool keeps a single connection so every session sees the same
    in-memory schema and data.
    """
    db = Database("sqlite+aiosqlite://", poolclass=StaticPool)
    db.connect()
    await db.create_all()
    set_database(db)
    yield db
    set_database(None)
    await db.dispose()


@pytest.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession]:
    """Async session bound to the per-test database."""
    async with database.session() as session:
        yield session


@pytest.fixture
async def redis_client() -> AsyncGenerator[RedisClient]:
    """RedisClient backed by an in-process fake server."""
    client = RedisClient(url="redis://fake", client=fakeredis.FakeAsyncRedis())
    await client.connect()
    yield client
    await client.close()


@pytest.fixture
def session_store(redis_client: RedisClient) -> SessionStore:
    return SessionStore(redis_client, ttl_seconds=600)


@pytest.fixture
async def client(
    db_session: AsyncSession,
    redis_client: RedisClient,
    session_store: SessionStore,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client with database session override."""
    # Clear the settings cache so it picks up the test environment
    get_settings.cache_clear()

    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session
    set_redis_client(redis_client)
    set_session_store(session_store)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    set_session_store(None)
    set_redis_client(None)
    app.dependency_overrides.clear()
