"""Async SQLAlchemy engine, session factory and declarative Base.

The engine is built on first use so importing models (Alembic, tests) never
reads settings. An empty DATABASE_URL leaves it unbuilt; the session
dependencies then raise SqlNotConfiguredException (HTTP 503).
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from showplan.core.config import get_settings
from showplan.domain.exceptions import SqlNotConfiguredException
from showplan.shared.telemetry import get_telemetry

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 10
DEFAULT_MAX_OVERFLOW = 20
DEFAULT_COMMAND_TIMEOUT_SECONDS = 60

engine: Any = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


class Base(DeclarativeBase):
    pass


def _or_default(value: int | None, default: int) -> int:
    return default if value is None else value


def _ensure_engine() -> None:
    """Build engine and AsyncSessionLocal once, if DATABASE_URL is configured."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    if not settings.database_url:
        return
    engine = create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
        pool_recycle=3600,
        pool_size=_or_default(settings.db_pool_size, DEFAULT_POOL_SIZE),
        max_overflow=_or_default(settings.db_max_overflow, DEFAULT_MAX_OVERFLOW),
        connect_args={
            "command_timeout": _or_default(
                settings.db_command_timeout, DEFAULT_COMMAND_TIMEOUT_SECONDS
            )
        },
    )
    # Snapshots and results are read after commit; keep loaded attributes.
    AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.instrument_sqlalchemy(engine)


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine (next use rebuilds it)."""
    global engine, AsyncSessionLocal
    if engine is None:
        return
    await engine.dispose()
    engine = None
    AsyncSessionLocal = None
    logger.info("Database engine disposed")


def _session_factory() -> async_sessionmaker[AsyncSession]:
    _ensure_engine()
    if AsyncSessionLocal is None:
        logger.error("DATABASE_URL is empty; set a postgresql+asyncpg URL and run alembic upgrade head")
        raise SqlNotConfiguredException()
    return AsyncSessionLocal


async def get_db():
    """Session for read endpoints. Never commits."""
    async with _session_factory()() as session:
        yield session


async def get_db_transactional():
    """Session for write endpoints: one transaction per request.

    Commits when the endpoint returns, rolls back if it raises. Use cases open
    SAVEPOINTs inside it through SqlAlchemyUnitOfWork.atomic().
    """
    async with _session_factory()() as session:
        async with session.begin():
            yield session
