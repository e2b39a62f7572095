"""Database Session Manager - async connection pool, snapshot transactions and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no transaction is left open)
    - snapshot() holds ONE transaction for its whole scope; on PostgreSQL it runs at
      the configured isolation level (REPEATABLE READ) and read-only
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to StoreError (core/errors.py); never retried here

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - Separate snapshot session factory bound to an engine view with isolation options,
      sharing the same pool as plain sessions
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, NoReturn

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from brc20_api.core.errors import StoreError

logger = logging.getLogger(__name__)


def _raise_store_error(e: SQLAlchemyError) -> NoReturn:
    if isinstance(e, OperationalError):
        logger.error(f"DB operational error: {e}", extra={"operation": "execute"})
        raise StoreError("Connection or operational error", "execute") from e
    if isinstance(e, DBAPIError):
        logger.error(f"DB driver error: {e}", extra={"operation": "query"})
        raise StoreError("Database driver error", "query") from e
    logger.error(f"SQLAlchemy error: {e}", extra={"operation": "unknown"})
    raise StoreError("Database operation failed", "unknown") from e


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        snapshot_isolation_level: str = "REPEATABLE READ",
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        snapshot_engine = self.engine
        if snapshot_isolation_level:
            options: dict = {"isolation_level": snapshot_isolation_level}
            if self.engine.dialect.name == "postgresql":
                options["postgresql_readonly"] = True
            snapshot_engine = self.engine.execution_options(**options)
        self._snapshot_factory = async_sessionmaker(
            snapshot_engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            _raise_store_error(e)
        finally:
            await session.close()

    @asynccontextmanager
    async def snapshot(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session pinned to one read transaction.

        The transaction is rolled back on any exception, including task
        cancellation, before the session is returned to the pool.
        """
        session = self._snapshot_factory()
        try:
            async with session.begin():
                yield session
        except SQLAlchemyError as e:
            _raise_store_error(e)
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


def get_db_manager() -> DatabaseSessionManager:
    if not db_manager:
        raise RuntimeError("Database not initialized")
    return db_manager
