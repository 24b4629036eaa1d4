"""Database Session Manager — async SQLite engine with automatic rollback and health checks.

Invariants:
    - Every session closes on every exit path and rolls back on exception
    - transaction() commits only on clean exit: all rows of a batch or none
    - All SQLAlchemy exceptions mapped to PersistenceFailure (core/errors.py)
    - SQLite connections run with WAL journaling and foreign keys enabled

Design Decisions:
    - One manager per process, built by the app lifespan and kept on app.state;
      routes reach it through get_store(), never through a module global
    - expire_on_commit=False: rows stay readable after commit in async context
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from contacts_api.core.errors import PersistenceFailure
from contacts_api.db.base import Base
import contacts_api.models  # noqa: F401

logger = logging.getLogger(__name__)


def _set_sqlite_pragmas(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def to_persistence_failure(exc: SQLAlchemyError, operation: str) -> PersistenceFailure:
    """Classify a SQLAlchemy error. Driver text goes to `detail` only."""
    if isinstance(exc, IntegrityError):
        reason = "Integrity constraint violated"
    elif isinstance(exc, OperationalError):
        reason = "Connection or operational error"
    elif isinstance(exc, DBAPIError):
        reason = "Database driver error"
    else:
        reason = "Database operation failed"
    return PersistenceFailure(reason, operation, detail=str(exc))


class DatabaseSessionManager:
    """Owns the engine and hands out scoped sessions."""

    def __init__(self, database_url: str, echo: bool = False):
        self.engine = create_async_engine(
            database_url, echo=echo, pool_pre_ping=True,
        )
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _set_sqlite_pragmas)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self, operation: str = "query") -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            raise to_persistence_failure(e, operation) from e
        except BaseException:
            await session.rollback()
            raise
        finally:
            await session.close()

    @asynccontextmanager
    async def transaction(self, operation: str = "transaction") -> AsyncGenerator[AsyncSession, None]:
        """Session inside one atomic transaction: commit on exit, rollback on error."""
        async with self.session(operation) as session:
            async with session.begin():
                yield session

    async def create_schema(self) -> None:
        """Create all tables known to Base.metadata (no-op for existing ones)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session("health_check") as db:
                await db.execute(text("SELECT 1"))
            return True
        except PersistenceFailure as e:
            logger.error(f"DB health check failed: {e.detail}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_store(request: Request) -> DatabaseSessionManager:
    """FastAPI dependency for the process-wide store handle."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise PersistenceFailure("Database not initialized", "connect")
    return store
