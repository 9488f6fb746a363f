import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

import models  # noqa: F401  registers the votes table on Base.metadata
from core.base import Base
from core.settings import Settings

logger = logging.getLogger(__name__)


def build_async_engine(settings: Settings) -> AsyncEngine:
    options = {
        "pool_pre_ping": True,
        "connect_args": settings.connect_args,
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.POSTGRES_POOL_SIZE,
            max_overflow=settings.POSTGRES_MAX_OVERFLOW,
            pool_recycle=600,
            pool_use_lifo=True,
        )
    return create_async_engine(settings.DATABASE_URL, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, autocommit=False, expire_on_commit=False)


async def create_schema(engine: AsyncEngine) -> None:
    """Create the votes table if it does not exist yet. Safe to run on every start."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("DB ready")
