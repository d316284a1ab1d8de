"""Task use-cases: cached listing and invalidating mutations."""
from sqlalchemy.exc import SQLAlchemyError

from core.task_cache import TaskCache
from db.task_repository import TaskRepository
from schemas.task import TaskCreate, TaskResponse, TaskUpdate
from services.exceptions import (
    CacheError,
    NotFoundError,
    TaskCreateError,
    TaskDeleteError,
    TaskUpdateError,
)

TASK_NOT_FOUND = "Tarefa não encontrada"


class TaskService:
    """
    Task CRUD on top of the repository and the task list cache.

    Mutations write to the database first. The cache entry is deleted only
    after the write succeeds; a failed write leaves the cache untouched.
    Database or cache failures during a mutation surface as the
    operation-specific ``TaskCreateError``, ``TaskUpdateError`` or
    ``TaskDeleteError``.
    """

    def __init__(self, repository: TaskRepository, cache: TaskCache) -> None:
        self._repository = repository
        self._cache = cache

    async def list_tasks(self) -> list[TaskResponse]:
        return await self._cache.get_or_load(self._load_all)

    async def _load_all(self) -> list[TaskResponse]:
        tasks = await self._repository.list_all()
        return [TaskResponse.model_validate(task) for task in tasks]

    async def get_task(self, task_id: int) -> TaskResponse:
        """Read a single task straight from the database."""
        task = await self._repository.get(task_id)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)
        return TaskResponse.model_validate(task)

    async def create_task(self, data: TaskCreate) -> TaskResponse:
        try:
            task = await self._repository.create(data.description)
            await self._cache.invalidate()
        except (SQLAlchemyError, CacheError) as e:
            raise TaskCreateError(str(e)) from e
        return TaskResponse.model_validate(task)

    async def update_task(self, task_id: int, data: TaskUpdate) -> TaskResponse:
        try:
            task = await self._repository.update(
                task_id,
                description=data.description,
                completed=data.completed,
            )
            if task is None:
                raise NotFoundError(TASK_NOT_FOUND)
            await self._cache.invalidate()
        except (SQLAlchemyError, CacheError) as e:
            raise TaskUpdateError(str(e)) from e
        return TaskResponse.model_validate(task)

    async def delete_task(self, task_id: int) -> None:
        try:
            deleted = await self._repository.delete(task_id)
            if not deleted:
                raise NotFoundError(TASK_NOT_FOUND)
            await self._cache.invalidate()
        except (SQLAlchemyError, CacheError) as e:
            raise TaskDeleteError(str(e)) from e
