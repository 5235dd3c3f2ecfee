"""
Database session management with async SQLAlchemy 2.0.
Handles engine creation and the per-request session lifecycle.
"""

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from typing import AsyncGenerator

from staff_attendance.core.config import settings
from staff_attendance.core.logging import get_logger

logger = get_logger(__name__)

# Global engine and sessionmaker
engine: AsyncEngine = None
async_session_maker: async_sessionmaker[AsyncSession] = None


def enable_sqlite_foreign_keys(target: AsyncEngine) -> None:
    """SQLite ignores REFERENCES clauses unless the pragma is set per connection."""

    @event.listens_for(target.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine() -> AsyncEngine:
    """Create the async SQLAlchemy engine for DATABASE_URL."""
    global engine

    url = make_url(settings.DATABASE_URL)
    is_sqlite = url.get_backend_name() == "sqlite"

    engine_kwargs = {
        "echo": settings.DATABASE_ECHO,
        "pool_pre_ping": True,
    }
    if not is_sqlite:
        engine_kwargs.update(pool_size=5, max_overflow=10)

    engine = create_async_engine(settings.DATABASE_URL, **engine_kwargs)
    if is_sqlite:
        enable_sqlite_foreign_keys(engine)

    logger.info(
        "Database engine created",
        extra={"backend": url.get_backend_name(), "database": url.database},
    )
    return engine


def create_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Create async sessionmaker."""
    global async_session_maker

    if engine is None:
        create_engine()

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    logger.info("Sessionmaker created")
    return async_session_maker


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting database session.
    Yields a session, commits on success and rolls back on error.
    """
    if async_session_maker is None:
        create_sessionmaker()

    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Initialize database engine and sessionmaker."""
    if engine is None:
        create_engine()

    if async_session_maker is None:
        create_sessionmaker()

    logger.info("Database initialized")


async def close_db() -> None:
    """Close database connections."""
    global engine, async_session_maker

    if engine:
        await engine.dispose()
        logger.info("Database connections closed")
    engine = None
    async_session_maker = None
