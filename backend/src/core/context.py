"""Process-wide application context built once at startup."""
import logging
from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from core.cache import CacheClient, create_cache_client
from core.config import Settings
from core.passwords import PasswordHasher
from core.storage import PhotoStorage, create_photo_storage
from core.task_cache import TaskCache
from db.session import create_engine, create_session_factory
from services.token_service import TokenService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """
    Shared handles for the lifetime of the process.

    Built by the FastAPI lifespan and stored on ``app.state.context``.
    Request handlers reach it through dependencies; nothing here is a
    module-level global, so tests can assemble a context from test doubles.
    """

    settings: Settings
    cache: CacheClient
    task_cache: TaskCache
    tokens: TokenService
    passwords: PasswordHasher
    photos: PhotoStorage
    engine: AsyncEngine | None = None
    session_factory: async_sessionmaker[AsyncSession] | None = None

    async def close(self) -> None:
        """Release the cache connection and the database pool."""
        await self.cache.close()
        if self.engine is not None:
            await self.engine.dispose()
        logger.info("Application context closed")


def build_context(
    settings: Settings,
    cache: CacheClient | None = None,
    photos: PhotoStorage | None = None,
    with_database: bool = True,
) -> AppContext:
    """
    Assemble the application context from settings.

    No I/O happens here; the cache is connected by the lifespan.
    """
    cache = cache if cache is not None else create_cache_client(settings)
    engine = create_engine(settings) if with_database else None
    return AppContext(
        settings=settings,
        cache=cache,
        task_cache=TaskCache(
            cache,
            namespace=settings.cache_namespace,
            ttl_seconds=settings.cache_ttl_seconds,
            fail_open=settings.cache_fail_open,
        ),
        tokens=TokenService(
            secret=settings.jwt_secret,
            expires_in=settings.jwt_expires_delta,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        ),
        passwords=PasswordHasher(rounds=settings.bcrypt_salt_rounds),
        photos=photos if photos is not None else create_photo_storage(settings),
        engine=engine,
        session_factory=create_session_factory(engine) if engine is not None else None,
    )


def get_app_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context stored on the app."""
    return request.app.state.context
