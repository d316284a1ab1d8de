"""Read-through cache for the task list with whole-collection invalidation."""
import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from schemas.task import TaskResponse
from services.exceptions import CacheError

if TYPE_CHECKING:
    from core.cache import CacheClient

logger = logging.getLogger(__name__)

_task_list_adapter = TypeAdapter(list[TaskResponse])

TaskLoader = Callable[[], Awaitable[list[TaskResponse]]]


class TaskCache:
    """
    Cache of the full task collection under ``<namespace>:tasks``.

    Key lifecycle: ABSENT -> (write on miss) -> PRESENT -> (TTL or invalidate) -> ABSENT.
    Any task mutation deletes the key; the next listing repopulates it from the
    database. The entry is never patched in place.

    With ``fail_open=False`` cache errors propagate to the caller. With
    ``fail_open=True`` they are logged and the database serves the request.
    """

    def __init__(
        self,
        client: "CacheClient",
        namespace: str = "todoapp",
        ttl_seconds: int = 3600,
        fail_open: bool = False,
    ) -> None:
        self._client = client
        self._namespace = namespace
        self._ttl_seconds = ttl_seconds
        self._fail_open = fail_open
        # Concurrent misses in this process share one repopulation
        self._refill_lock = asyncio.Lock()

    @property
    def key(self) -> str:
        return f"{self._namespace}:tasks"

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    async def get_or_load(self, loader: TaskLoader) -> list[TaskResponse]:
        """
        Return the cached task list, or load it with ``loader`` and cache it.

        When the cache is unreachable and ``fail_open`` is set, ``loader`` is
        called directly without taking the refill lock or writing back.

        Args:
            loader: Reads the full task collection from the database.

        Raises:
            CacheError: If the cache fails and ``fail_open`` is False.
        """
        try:
            cached = await self._read()
        except CacheError as e:
            self._handle_error("get", e)
            return await loader()
        if cached is not None:
            logger.info("task_cache_hit key=%s", self.key)
            return cached

        async with self._refill_lock:
            try:
                # Another coroutine may have repopulated while we waited
                cached = await self._read()
            except CacheError as e:
                self._handle_error("get", e)
            else:
                if cached is not None:
                    logger.info("task_cache_hit key=%s", self.key)
                    return cached

                logger.info("task_cache_miss key=%s", self.key)
                tasks = await loader()
                await self._write(tasks)
                return tasks

        return await loader()

    async def invalidate(self) -> None:
        """
        Delete the task list entry whether or not it exists.

        Raises:
            CacheError: If the cache fails and ``fail_open`` is False.
        """
        try:
            await self._client.delete(self.key)
        except CacheError as e:
            self._handle_error("delete", e)
            return
        logger.debug("task_cache_invalidate key=%s", self.key)

    async def _read(self) -> list[TaskResponse] | None:
        """Cached list, or None on a miss. Cache errors propagate."""
        data = await self._client.get(self.key)
        if data is None:
            return None
        try:
            return _task_list_adapter.validate_json(data)
        except PydanticValidationError:
            logger.warning("task_cache_corrupt key=%s", self.key)
            await self.invalidate()
            return None

    async def _write(self, tasks: list[TaskResponse]) -> None:
        data = _task_list_adapter.dump_json(tasks)
        try:
            await self._client.setex(self.key, self._ttl_seconds, data)
        except CacheError as e:
            self._handle_error("setex", e)
            return
        logger.debug("task_cache_set key=%s count=%s", self.key, len(tasks))

    def _handle_error(self, operation: str, error: CacheError) -> None:
        if not self._fail_open:
            raise error
        logger.warning(
            "task_cache_unavailable operation=%s key=%s error=%s",
            operation,
            self.key,
            error.detail,
        )
