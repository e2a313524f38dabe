"""
Database engines and sessions.

The API process shares one pooled engine. Celery tasks run each job in a
fresh event loop, and asyncpg connections cannot cross loops, so workers
get an unpooled engine instead.
"""

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator, AsyncIterator, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from booking_service.config.logging import get_logger
from booking_service.config.settings import settings

logger = get_logger(__name__)


def get_database_url() -> str:
    """Get database URL from settings."""
    return str(settings.DATABASE_URL)


def create_engine(database_url: Optional[str] = None, pooled: bool = True) -> AsyncEngine:
    """Create an async engine; SQLite and unpooled engines skip pool sizing."""
    url = make_url(database_url or get_database_url())

    if url.get_backend_name() == "sqlite":
        return create_async_engine(
            url,
            echo=settings.DATABASE_ECHO,
            connect_args={"check_same_thread": False},
        )

    if not pooled or settings.ENVIRONMENT == "test":
        return create_async_engine(url, echo=settings.DATABASE_ECHO, poolclass=NullPool)

    logger.info(
        "Creating pooled database engine",
        host=url.host,
        database=url.database,
        pool_size=settings.DATABASE_POOL_SIZE,
    )
    return create_async_engine(
        url,
        echo=settings.DATABASE_ECHO,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_pre_ping=True,
    )


def _session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Repositories flush explicitly; entities outlive the commit
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@lru_cache(maxsize=1)
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory over the API process's pooled engine."""
    return _session_factory(create_engine())


@asynccontextmanager
async def worker_session() -> AsyncIterator[AsyncSession]:
    """Session for one Celery task run, on an engine disposed afterwards."""
    engine = create_engine(pooled=False)
    try:
        async with _session_factory(engine)() as session:
            yield session
    finally:
        await engine.dispose()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request-scoped session."""
    async with get_async_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
