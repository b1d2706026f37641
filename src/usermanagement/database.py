from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from usermanagement.config import Settings


def get_async_engine(settings: Settings) -> AsyncEngine:
    """Create an async SQLAlchemy engine sized by the ``database`` config section."""
    db = settings.database
    return create_async_engine(
        settings.database_url_async,
        echo=db.echo,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Objects stay readable after commit; routes serialize them afterwards.
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def get_session_factory(settings: Settings) -> async_sessionmaker[AsyncSession]:
    """Engine and session factory in one step, for scripts outside the app."""
    return create_session_factory(get_async_engine(settings))
