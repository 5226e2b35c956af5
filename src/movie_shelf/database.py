"""Async SQLAlchemy engine, session factory and request-scoped sessions."""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from movie_shelf.config import get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for the collection tables."""

    pass


settings = get_settings()

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    # SQLite connections are local files; only pooled network databases go stale
    pool_pre_ping=not settings.database_url.startswith("sqlite"),
)

# Rows are validated into records after commit, so keep attributes loaded
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession]:
    """Provide a session for one request.

    The session commits when the endpoint returns and rolls back if it
    raises, so a rejected update never leaves a partial row behind.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            logger.debug("Rolling back collection session")
            await session.rollback()
            raise


async def dispose_engine() -> None:
    """Close every pooled connection; called on application shutdown."""
    await engine.dispose()
