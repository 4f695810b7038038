"""
NoteShelf Backend — Store Capability
======================================

What:  Async SQLAlchemy engine + session factory wrapped in an explicitly
       constructed `Database` object, plus the unique-violation classifier.
Why:   Services receive the store as a dependency instead of importing a
       module-level pool. Tests build their own Database (SQLite) and the
       app builds one from settings at startup.
How:   `Database.session()` is the only way to get a session: it acquires
       one AsyncSession, commits on success, rolls back on error and always
       closes it, which returns the connection to the pool.
Who:   Constructed by the app lifespan (or a test fixture); used by services.

Connection Pooling Strategy (non-SQLite URLs only):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour

    The pool is bounded, so a session that is never closed starves every
    other request. That is why sessions are only handed out through the
    context manager.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from sqlalchemy import delete, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from noteshelf.config import Settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic and Database.create_all()
    read to know about every table.
    """
    pass


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════


class Database:
    """
    Store capability consumed by the entity services.

    Mapping onto acquire / query / release / close:
        acquire + release  → `async with database.session() as session`
        query              → `await session.execute(<SQLAlchemy expression>)`
        close              → `await database.close()`

    Every statement is a SQLAlchemy expression, so values are always bound
    parameters and never interpolated into SQL text.
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 20,
        max_overflow: int = 10,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        engine_kwargs: Dict[str, Any] = {"echo": echo}
        # SQLite drivers bring their own pool class; sizing arguments only
        # apply to server databases
        if not url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=pool_pre_ping,
                pool_recycle=3600,
            )

        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

        # expire_on_commit=False: objects stay readable after commit, so a
        # service can build its response after the session is gone
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a Database from application settings."""
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide one session for the duration of a single service operation.

        How it works:
            1. Creates a new session from the factory
            2. Yields it to the caller (the caller performs queries)
            3. On success: commits the transaction
            4. On error: rolls back and re-raises the original exception
            5. Always: closes the session (returns the connection to the pool)

        Example:
            async with database.session() as session:
                result = await session.execute(select(Note))
        """
        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    # ── Schema helpers (tests, local development) ─────────────────────────

    async def create_all(self) -> None:
        """Create every table registered on Base.metadata."""
        import noteshelf.models  # noqa: F401  registers the models

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        import noteshelf.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def clear(self) -> None:
        """
        Delete every row from every table.

        Tables are emptied children-first so foreign keys never block a delete.
        """
        import noteshelf.models  # noqa: F401

        async with self.engine.begin() as conn:
            for table in reversed(Base.metadata.sorted_tables):
                await conn.execute(delete(table))
        logger.debug("Database cleared")

    async def ping(self) -> None:
        """Runs SELECT 1. Raises whatever the driver raises when unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def close(self) -> None:
        """
        Gracefully close all connections in the pool.

        Called during application shutdown (lifespan handler).
        """
        await self.engine.dispose()


# ══════════════════════════════════════════════════════════════════════════
# Integrity error classification
# ══════════════════════════════════════════════════════════════════════════

# https://www.postgresql.org/docs/current/errcodes-appendix.html
POSTGRES_UNIQUE_VIOLATION = "23505"
# MySQL / MariaDB ER_DUP_ENTRY
MYSQL_DUPLICATE_KEY_ERRNO = 1062

_UNIQUE_MESSAGE_MARKERS = ("unique constraint", "unique failed", "unique violation", "duplicate")


def is_unique_violation(exc: IntegrityError) -> bool:
    """
    Decide whether an IntegrityError is a uniqueness conflict.

    Prefers driver diagnostics (Postgres SQLSTATE, MySQL errno) and falls
    back to message matching for drivers that expose neither (SQLite).
    """
    orig = exc.orig

    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code:
        return code == POSTGRES_UNIQUE_VIOLATION

    args = getattr(orig, "args", ())
    if args and args[0] == MYSQL_DUPLICATE_KEY_ERRNO:
        return True

    message = str(orig if orig is not None else exc).lower()
    return any(marker in message for marker in _UNIQUE_MESSAGE_MARKERS)
