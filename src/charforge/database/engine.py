"""Async SQLAlchemy engine and session handling for the snapshot store.

One engine per process, created lazily from ``Settings.database_url``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from charforge.config import get_settings

from .models.base import Base

logger = structlog.get_logger(__name__)

_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def _sqlite_file(url: URL) -> Path | None:
    """Database file behind a SQLite URL, or None for other backends and memory."""
    if url.get_backend_name() != "sqlite" or url.database in (None, "", ":memory:"):
        return None
    return Path(url.database)


def get_engine() -> AsyncEngine:
    """Engine for the configured URL; SQLite files get their directory created."""
    global _engine

    if _engine is not None:
        return _engine

    settings = get_settings()
    url = make_url(settings.database_url)
    db_file = _sqlite_file(url)
    if db_file is not None:
        db_file.parent.mkdir(parents=True, exist_ok=True)

    _engine = create_async_engine(url, echo=settings.debug)
    logger.info(
        "database_engine_created",
        backend=url.get_backend_name(),
        database=str(db_file) if db_file else url.database,
    )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _async_session_factory

    if _async_session_factory is None:
        _async_session_factory = async_sessionmaker(get_engine(), expire_on_commit=False)
    return _async_session_factory


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Unit of work around one session.

    The session commits when the block exits normally and rolls back when it
    raises. :class:`~charforge.database.store.CharacterStore` only flushes, so
    this is where snapshots become durable.

    Example:
        async with get_session() as session:
            await CharacterStore(session, catalogs).save(character)
    """
    async with get_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        await session.commit()


async def init_db() -> None:
    """Create missing tables."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.debug("database_tables_ready", tables=sorted(Base.metadata.tables))


def reset_engine() -> None:
    """Forget the engine without disposing it, e.g. after the settings changed."""
    global _engine, _async_session_factory
    _engine = None
    _async_session_factory = None


async def close_db() -> None:
    """Dispose of the engine's connections."""
    if _engine is not None:
        await _engine.dispose()
    reset_engine()
