"""Database Session Manager — async engine, per-request sessions, error mapping.

Invariants:
    - Any exception inside a session rolls it back before propagating
    - SQLAlchemy failures leave as MeedleError subclasses:
      IntegrityError → ConflictError (duplicate login, email, group name),
      everything else → DatabaseError; the access gate and schedule resolver
      see that error unchanged
    - Domain errors raised inside a session pass through untouched

Design Decisions:
    - Singleton db_manager assigned in the FastAPI lifespan, not at import time
    - expire_on_commit=False: records are read after commit in async code
    - Pool sizing only for server databases; aiosqlite uses a static pool
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from meedle.core.errors import ConflictError, DatabaseError, MeedleError

logger = logging.getLogger(__name__)


def _engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    options: dict = {"pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
        )
    return options


def map_db_error(exc: SQLAlchemyError) -> MeedleError:
    """Translate a SQLAlchemy failure into the error the API reports."""
    if isinstance(exc, IntegrityError):
        return ConflictError("Record conflicts with existing data")
    if isinstance(exc, OperationalError):
        return DatabaseError("connection unavailable", "execute")
    if isinstance(exc, DBAPIError):
        return DatabaseError("driver rejected statement", "query")
    return DatabaseError("unexpected ORM failure", "unknown")


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that roll back on failure."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
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
            mapped = map_db_error(e)
            logger.log(
                logging.WARNING if isinstance(mapped, ConflictError) else logging.ERROR,
                f"{type(e).__name__}: {e}",
                extra={"error_code": mapped.code},
            )
            raise mapped from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query succeeds (readiness check)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except MeedleError as e:
            logger.error(f"DB health check failed: {e.message}")
            return False

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
