"""Async SQLAlchemy engine and session factory."""
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the process-wide engine (and its connection pool)."""
    return create_async_engine(
        settings.database_url,
        echo=False,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory bound to ``engine``."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession]:
    """
    Yield an async database session from the application context.

    Repositories commit their own writes so that cache invalidation happens
    after the data is durable. Anything left uncommitted is committed here at
    request end, and everything is rolled back if the request fails.
    """
    session_factory = request.app.state.context.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
