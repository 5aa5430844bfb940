"""
Database configuration and session management.

Provides async database sessions and metadata for ORM models.
DATABASE_URL is resolved by ideaforge.core.config (already rewritten
to an async driver URL).
"""
import logging
from typing import Any, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from ideaforge.core.config import settings

logger = logging.getLogger(__name__)

# Create declarative base for ORM models
Base = declarative_base()


def create_engine_for_url(url: str) -> AsyncEngine:
    """Create an async engine with driver-appropriate pool settings."""
    kwargs: Dict[str, Any] = {"echo": False, "pool_pre_ping": True}
    if url.startswith("postgresql+asyncpg://"):
        kwargs.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            connect_args={"server_settings": {"client_encoding": "utf8"}},
        )
    return create_async_engine(url, **kwargs)


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = create_engine_for_url(settings.DATABASE_URL)
async_session_factory = create_session_factory(engine)


async def init_database(bind: AsyncEngine = None) -> None:
    """
    Create tables if they don't exist.

    Note: In production, use migrations instead.
    This is mainly for development/testing.
    """
    # Import ORM models so they're registered with Base
    from ideaforge.persistence.orm import AiArtifactORM  # noqa: F401

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")
