"""Database Session Manager — async engine for the tool-call audit trail.

Invariants:
    - Every session rolls back on a SQLAlchemy error before it is closed
    - SQLAlchemy errors leave this module only as DatabaseError (core/errors.py),
      with the driver message kept in the server log
    - Postgres engines use pool_pre_ping and bounded pool sizes; SQLite engines don't

Design Decisions:
    - Singleton db_manager set by init_db in the lifespan hook; routes reach it
      through get_db, health checks through the module attribute
    - Error table ordered most specific first: IntegrityError and OperationalError
      are DBAPIError subclasses
    - expire_on_commit=False: audit rows are never read back lazily
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from app.core.errors import DatabaseError

logger = logging.getLogger(__name__)

_ERROR_TABLE: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "unknown"),
)


def to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    """First matching row of _ERROR_TABLE; the last row matches every SQLAlchemyError."""
    message, operation = next(
        (message, operation)
        for exc_type, message, operation in _ERROR_TABLE
        if isinstance(exc, exc_type)
    )
    return DatabaseError(message, operation)


def _engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_pre_ping": True,
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_recycle": 3600,
    }


class DatabaseSessionManager:
    """Owns the async engine and hands out sessions that roll back on failure."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine: AsyncEngine = create_async_engine(
            database_url, **_engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = to_database_error(e)
            logger.error(f"DB {error.operation} failed: {type(e).__name__}: {e}")
            raise error from e
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Create all ORM tables. Used for SQLite runs; Postgres uses alembic."""
        from app.db.base import Base
        import app.models  # noqa: F401
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    async def health_check(self) -> bool:
        """SELECT 1 through a managed session (readiness check)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except Exception as e:
            # Connection refusals can surface as OSError, outside SQLAlchemyError
            logger.error(f"DB health check failed: {type(e).__name__}")
            return False
        return True


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
