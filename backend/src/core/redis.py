"""Redis cache client with connection pooling."""
import logging

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from services.exceptions import CacheError

logger = logging.getLogger(__name__)


class RedisClient:
    """
    Async Redis client with connection pooling.

    Unlike a best-effort cache, every failed operation raises ``CacheError``.
    Whether a cache failure is fatal for the request is decided by the caller
    (see ``core.task_cache.TaskCache``).
    """

    def __init__(self, url: str, pool_size: int = 20) -> None:
        self._url = url
        self._pool_size = pool_size
        self._pool: ConnectionPool | None = None
        self._client: Redis | None = None

    async def connect(self) -> None:
        """Initialize the connection pool and verify the server answers."""
        try:
            self._pool = ConnectionPool.from_url(self._url, max_connections=self._pool_size)
            self._client = Redis(connection_pool=self._pool)
            await self._client.ping()
            logger.info("Redis connected successfully")
        except RedisError as e:
            logger.warning("Redis connection failed: %s", e)
            self._client = None
            self._pool = None
            raise CacheError(f"Redis connection failed: {e}") from e

    async def close(self) -> None:
        """Close connection pool."""
        if self._client:
            await self._client.aclose()
            self._client = None
            self._pool = None
            logger.info("Redis connection closed")

    @property
    def is_connected(self) -> bool:
        """Check if client is connected."""
        return self._client is not None

    def _require_client(self) -> Redis:
        if self._client is None:
            raise CacheError("Redis client is not connected")
        return self._client

    async def ping(self) -> bool:
        """Check Redis connectivity."""
        if not self._client:
            return False
        try:
            return await self._client.ping()
        except RedisError:
            return False

    async def get(self, key: str) -> bytes | None:
        """Get value, or None if the key does not exist."""
        client = self._require_client()
        try:
            return await client.get(key)
        except RedisError as e:
            raise CacheError(f"Redis GET failed: {e}") from e

    async def setex(self, key: str, seconds: int, value: str | bytes) -> None:
        """Set value with expiry."""
        client = self._require_client()
        try:
            await client.setex(key, seconds, value)
        except RedisError as e:
            raise CacheError(f"Redis SETEX failed: {e}") from e

    async def delete(self, *keys: str) -> None:
        """Delete key(s). Missing keys are ignored."""
        client = self._require_client()
        try:
            await client.delete(*keys)
        except RedisError as e:
            raise CacheError(f"Redis DELETE failed: {e}") from e
