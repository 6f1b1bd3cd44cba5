"""Database Session Manager — the process-wide async engine and its session scope.

Invariants:
    - One engine (and one pool) per process, shared by every request
    - A session that raises is rolled back before the error leaves session()
    - IntegrityError → ConstraintViolationError; any other SQLAlchemyError → DatabaseError

Design Decisions:
    - db_manager set by init_db() from the FastAPI lifespan, cleared by close_db()
    - expire_on_commit=False: rows returned by services stay readable after commit
    - Pool sizing only applies to server databases; SQLite keeps its default pool
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from user_service.core.errors import ConstraintViolationError, DatabaseError

logger = logging.getLogger(__name__)

# Checked in order: most specific SQLAlchemy error first.
_OPERATION_BY_ERROR: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "unknown"),
)


def _translate(exc: SQLAlchemyError) -> DatabaseError:
    if isinstance(exc, IntegrityError):
        return ConstraintViolationError()
    for error_type, message, operation in _OPERATION_BY_ERROR:
        if isinstance(exc, error_type):
            return DatabaseError(message, operation)
    return DatabaseError("Database operation failed", "unknown")


class DatabaseSessionManager:
    """Owns the pooled engine; hands out sessions that roll back on failure."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        ssl: bool = False,
    ):
        options: dict = {"pool_pre_ping": True}
        if make_url(database_url).get_backend_name() != "sqlite":
            options.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        if ssl:
            options["connect_args"] = {"ssl": "require"}
        self.engine = create_async_engine(database_url, **options)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = _translate(e)
            logger.error(
                f"{type(e).__name__}: {getattr(e, 'orig', None) or e}",
                extra={"error_code": error.code},
            )
            raise error from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query succeeds (readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False
        return True

    async def close(self) -> None:
        logger.info("Closing database connection pool")
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.close()
        db_manager = None
