"""Key-value cache clients: the protocol, an in-process driver, and the driver factory."""
import logging
import time
from collections.abc import Callable
from typing import Protocol

from core.config import Settings
from core.redis import RedisClient

logger = logging.getLogger(__name__)


class CacheClient(Protocol):
    """Operations the task cache needs from a key-value store."""

    async def connect(self) -> None: ...

    async def close(self) -> None: ...

    async def ping(self) -> bool: ...

    async def get(self, key: str) -> bytes | None: ...

    async def setex(self, key: str, seconds: int, value: str | bytes) -> None: ...

    async def delete(self, *keys: str) -> None: ...


class InMemoryCache:
    """
    In-process cache with per-key expiry.

    Intended for local development and tests. Entries are not shared between
    processes, so it is not suitable for multi-worker deployments.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        # key -> (value, expires_at)
        self._entries: dict[str, tuple[bytes, float]] = {}

    async def connect(self) -> None:
        logger.info("In-memory cache ready")

    async def close(self) -> None:
        self._entries.clear()

    async def ping(self) -> bool:
        return True

    async def get(self, key: str) -> bytes | None:
        """Return the value for ``key``, dropping it first if it has expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def setex(self, key: str, seconds: int, value: str | bytes) -> None:
        if isinstance(value, str):
            value = value.encode()
        self._entries[key] = (value, self._clock() + seconds)

    async def delete(self, *keys: str) -> None:
        for key in keys:
            self._entries.pop(key, None)

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self._clock() < entry[1]


def create_cache_client(settings: Settings) -> CacheClient:
    """Build the cache client selected by ``CACHE_DRIVER``."""
    if settings.cache_driver == "memory":
        return InMemoryCache()
    return RedisClient(url=settings.cache_url, pool_size=settings.cache_pool_size)
