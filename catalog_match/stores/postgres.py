"""PostgreSQL store with async SQLAlchemy.

Handles:
- Database session management
- Connection pooling
- Table creation for development/testing

SQLite (via aiosqlite) is accepted for local runs and the test suite.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from catalog_match.settings import get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""

    pass


# Engine and session factory (initialized on startup)
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """Let SQLAlchemy own transaction boundaries on pysqlite/aiosqlite.

    Without this the driver defers BEGIN and SAVEPOINT/ROLLBACK TO misbehave.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


async def init_db(database_url: str | None = None) -> None:
    """Initialize database connection pool.

    Args:
        database_url: Optional override of the configured DATABASE_URL.
    """
    global _engine, _session_factory

    settings = get_settings()
    url = database_url or settings.async_database_url

    if url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"):
            # Share one in-memory database across the pool
            kwargs["poolclass"] = StaticPool
        _engine = create_async_engine(url, echo=settings.debug, **kwargs)
        _enable_sqlite_savepoints(_engine)
    else:
        _engine = create_async_engine(
            url,
            echo=settings.debug,
            connect_args=settings.db_connect_args,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,
        )
    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def close_db() -> None:
    """Close database connection pool."""
    global _engine, _session_factory
    if _engine:
        await _engine.dispose()
        _engine = None
        _session_factory = None


async def ping_db() -> None:
    """Run a trivial query to validate connectivity."""
    from sqlalchemy import text

    async with get_session() as session:
        await session.execute(text("SELECT 1"))


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session context manager.

    Usage:
        async with get_session() as session:
            result = await session.execute(query)
    """
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")

    async with _session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables() -> None:
    """Create all tables (for development/testing only)."""
    if _engine is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")

    # Register models on the metadata
    import catalog_match.models  # noqa: F401

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables() -> None:
    """Drop all tables (for testing only)."""
    if _engine is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
