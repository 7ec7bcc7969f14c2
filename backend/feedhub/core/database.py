"""
Async engine, session factory and the request-scoped session dependency.
"""

import re
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from loguru import logger

from feedhub.core.config import settings

_CONNECTION_HINTS = (
    ("password authentication failed", "check database credentials"),
    ("connection refused", "check database host and port"),
    ("does not exist", "check database name"),
)

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    pool_recycle=300,
    pool_size=settings.DATABASE_POOL_SIZE,
    max_overflow=settings.DATABASE_MAX_OVERFLOW,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


def masked_database_url(url: str = settings.DATABASE_URL) -> str:
    return re.sub(r"://([^:/]+):([^@]+)@", r"://\1:***@", url)


def connection_hint(error: Exception) -> Optional[str]:
    message = str(error).lower()
    for needle, hint in _CONNECTION_HINTS:
        if needle in message:
            return hint
    return None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one session per request.

    Services commit their own work; anything left open when the request
    fails is rolled back here.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Check that the database answers before serving requests."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as exc:
        logger.error(f"Failed to connect to {masked_database_url()}: {exc}")
        hint = connection_hint(exc)
        if hint:
            logger.error(f"Database connection hint: {hint}")
        raise
    logger.info("Database connection established successfully")


async def close_db() -> None:
    await engine.dispose()
    logger.info("Database connections closed")
