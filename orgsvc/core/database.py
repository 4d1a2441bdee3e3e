"""Database connection and session management."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from orgsvc.core.config import get_settings
from orgsvc.core.structured_logging import log_json

settings = get_settings()
logger = logging.getLogger(__name__)


def _async_url(url: str) -> str:
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


# Use NullPool for testing environments to avoid connection pool issues
engine = create_async_engine(
    _async_url(settings.database_url),
    echo=False,
    poolclass=NullPool if "test" in settings.database_url else None,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def init_models(bind: AsyncEngine | None = None) -> None:
    """Create missing tables on ``bind`` (defaults to the application engine)."""
    # Imported here so every mapped class is registered on the metadata.
    from orgsvc.models import Base

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log_json(logger, logging.INFO, "database_tables_ready", url=target.url.render_as_string())


async def get_db() -> AsyncSession:
    """Get database session dependency.

    Yields:
        AsyncSession: Database session

    Usage:
        @router.get("/endpoint")
        async def endpoint(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
