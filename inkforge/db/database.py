"""
Database engine and session management.

One async engine per process; each request gets its own session from
get_session and commits only if the handler finished without raising.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from inkforge.config import settings
from inkforge.models.db import Base

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency providing a request-scoped session.

    Any exception, including known failures such as an unavailable
    catalog, rolls the session back before propagating.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create the catalog and collection tables if they do not exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database_initialized", extra={"tables": sorted(Base.metadata.tables)})


async def dispose_db() -> None:
    """Close pooled connections at shutdown."""
    await engine.dispose()
