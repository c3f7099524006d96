"""Async SQLAlchemy engine lifecycle and per-request sessions."""
import logging
from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING, Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from models import Base

if TYPE_CHECKING:
    from core.config import Settings

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the connection pool for the relational store.

    Created and connected at application startup, disposed at shutdown, and
    handed to request handlers through get_async_session().
    """

    def __init__(self, url: str, **engine_options: Any) -> None:
        self._url = url
        self._engine_options = engine_options
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    def connect(self) -> None:
        """Create the engine and session factory (connections open lazily)."""
        if self._engine is not None:
            return
        self._engine = create_async_engine(
            self._url,
            echo=False,
            pool_pre_ping=True,
            **self._engine_options,
        )
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Database engine created")

    async def dispose(self) -> None:
        """Close every pooled connection."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database pool closed")

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    def session(self) -> AsyncSession:
        """Return a new session; use it as an async context manager."""
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        return self._session_factory()

    async def create_all(self) -> None:
        """Create missing tables from model metadata (tests and local development)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Check that a connection can be checked out and used."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Database ping failed")
            return False
        return True


# Global database state using a container to avoid global statement
class _DatabaseState:
    """Container for global database state."""

    database: Database | None = None


_state = _DatabaseState()


def get_database() -> Database | None:
    """Get the global Database instance."""
    return _state.database


def set_database(database: Database | None) -> None:
    """Set the global Database instance."""
    _state.database = database


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """
    Yield an async database session.

    Services that write commit before returning, so a response is never sent
    for an uncommitted change; the commit here only covers anything left
    pending. If anything fails, pending changes are rolled back. Leaving the
    context always returns the connection to the pool.
    """
    database = get_database()
    if database is None:
        raise RuntimeError("Database is not initialized")
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def engine_options(settings: "Settings") -> dict[str, Any]:
    """Pool sizing for the configured backend (SQLite pools take no sizing)."""
    if settings.database_is_sqlite:
        return {}
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
    }
