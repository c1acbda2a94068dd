"""Database Access - engine, per-request sessions, schema bootstrap, readiness.

Invariants:
    - A request's session is rolled back and closed when its handler raises
    - SQLAlchemy failures that escape a handler reach the client as
      DatabaseError (503), never as a raw driver exception
    - Domain errors raised inside a handler pass through untouched

Design Decisions:
    - Module-level db_manager set by the FastAPI lifespan; tests override
      get_db instead of touching it
    - SQLite URLs (local runs) skip pool sizing and create tables at startup;
      PostgreSQL schemas are owned by alembic
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from teamsignup.core.errors import DatabaseError
from teamsignup.db.base import Base

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors.
_FAILURE_KINDS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "write", "signup data violates a table constraint"),
    (OperationalError, "operation", "connection, lock or schema problem"),
    (DBAPIError, "query", "driver rejected the statement"),
    (SQLAlchemyError, "session", "unexpected ORM failure"),
)


def to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    return next(
        DatabaseError(message, operation)
        for kind, operation, message in _FAILURE_KINDS
        if isinstance(exc, kind)
    )


class DatabaseSessionManager:
    """Owns the engine and hands out one AsyncSession per request."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.is_sqlite = database_url.startswith("sqlite")
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not self.is_sqlite:
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                error = to_database_error(e)
                logger.error(
                    f"{error.message} ({type(e).__name__}: {e})",
                    extra={"error_code": error.code},
                )
                raise error from e

    async def create_schema(self) -> None:
        """Create all tables (SQLite / local development only)."""
        import teamsignup.models  # noqa: F401
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (DatabaseError, OSError) as e:
            logger.error(f"Readiness check could not reach the database: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
