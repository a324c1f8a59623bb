"""Database Session Manager — async engine with transaction scopes, rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - transaction() commits only when its block exits cleanly
    - All SQLAlchemy exceptions mapped to LedgerError(DATABASE)
    - SQLite connections enforce foreign keys and open transactions with BEGIN IMMEDIATE

Design Decisions:
    - No module-level singleton: the manager is built once and handed to the store
    - expire_on_commit=False: prevents lazy-load issues in async context
    - BEGIN IMMEDIATE on SQLite: the write lock is taken at transaction start, so
      concurrent writers queue on the busy timeout instead of deadlocking on upgrade
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)

from marketplace.core.errors import ErrorKind, LedgerError

logger = logging.getLogger(__name__)

_DB_ERROR_EXTRA = {"error_kind": ErrorKind.DATABASE.value}


def _configure_sqlite(engine: AsyncEngine) -> None:
    """Take over BEGIN from the driver and turn on foreign keys per connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
        # disable the driver's implicit BEGIN; _on_begin emits our own
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        isolation_level: str | None = None,
    ):
        self.is_sqlite = make_url(database_url).get_backend_name() == "sqlite"
        if self.is_sqlite:
            self.engine = create_async_engine(database_url)
            _configure_sqlite(self.engine)
        else:
            engine_kwargs = {}
            if isolation_level:
                engine_kwargs["isolation_level"] = isolation_level
            self.engine = create_async_engine(
                database_url,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=True,
                pool_recycle=3600,
                **engine_kwargs,
            )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}", extra=_DB_ERROR_EXTRA)
            raise LedgerError(
                ErrorKind.DATABASE, "Integrity constraint violated",
            ) from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}", extra=_DB_ERROR_EXTRA)
            raise LedgerError(
                ErrorKind.DATABASE, "Connection or operational error",
            ) from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}", extra=_DB_ERROR_EXTRA)
            raise LedgerError(ErrorKind.DATABASE, "Database driver error") from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}", extra=_DB_ERROR_EXTRA)
            raise LedgerError(
                ErrorKind.DATABASE, "Database operation failed",
            ) from e
        finally:
            await session.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """One all-or-nothing unit: commit on clean exit, rollback on any error."""
        async with self.session() as session:
            async with session.begin():
                yield session

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
