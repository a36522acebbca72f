"""Async database engine, session factory and FastAPI session dependency."""

from datetime import datetime, timezone
from typing import AsyncGenerator, Optional
from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
import structlog

from cronara.config import get_settings

settings = get_settings()
logger = structlog.get_logger(__name__)

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def create_engine(database_url: Optional[str] = None, **engine_options) -> AsyncEngine:
    """Create the async engine for the record store."""
    url = database_url or settings.DATABASE_URL

    options = {"echo": settings.DEBUG}
    if not url.startswith("sqlite"):
        options.update(pool_size=10, max_overflow=0, pool_pre_ping=True)
    options.update(engine_options)

    return create_async_engine(url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the given engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create tables when running without migrations (development only)."""
    # Register every model with Base.metadata
    import cronara.models  # noqa: F401

    if settings.DB_CREATE_ALL:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("database_tables_created")


async def close_db(engine: AsyncEngine) -> None:
    """Dispose of pooled connections."""
    await engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields a session from the factory
    the application built at startup.
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
