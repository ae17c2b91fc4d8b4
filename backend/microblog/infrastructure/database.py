"""Database Session Manager — async engine, short-lived sessions, error translation.

Invariants:
    - A session that raises is rolled back before the error leaves it
    - SQLAlchemy exceptions never escape: they surface as DatabaseError (503)
    - Domain errors raised inside a session (e.g. NotFoundError) pass through untouched
    - create_all is idempotent and only adds missing tables

Design Decisions:
    - db_manager is a module singleton set by the FastAPI lifespan; the SQL
      repositories receive it explicitly so tests can build their own
    - expire_on_commit=False: aggregates are mapped after commit without reloads
    - Pool sizing applies to server databases only; SQLite keeps its default pool
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from microblog.core.errors import DatabaseError
from microblog.db.base import Base
import microblog.models  # noqa: F401

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors.
_TRANSLATIONS = (
    (IntegrityError, "integrity constraint violated", "commit"),
    (OperationalError, "connection or operational error", "execute"),
    (DBAPIError, "driver error", "query"),
    (SQLAlchemyError, "unexpected SQLAlchemy error", "unknown"),
)


def translate_error(exc: SQLAlchemyError) -> DatabaseError:
    for kind, message, operation in _TRANSLATIONS:
        if isinstance(exc, kind):
            return DatabaseError(message, operation)
    return DatabaseError(str(exc), "unknown")


def _engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    options = {"pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        options.update(pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600)
    return options


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that fail as DatabaseError."""

    def __init__(self, database_url: str, pool_size: int = 20, max_overflow: int = 10):
        self.engine = create_async_engine(
            database_url, **_engine_options(database_url, pool_size, max_overflow),
        )
        self._factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                error = translate_error(e)
                logger.error(f"{error.message}: {e}", extra={"operation": error.operation})
                raise error from e

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Round-trip a trivial query; used by the readiness probe."""
        try:
            async with self.session() as s:
                await s.execute(text("SELECT 1"))
        except DatabaseError:
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager
