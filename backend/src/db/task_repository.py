"""Persistence for tasks."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.task import Task


class TaskRepository:
    """
    Task reads and writes over an ``AsyncSession``.

    Write methods commit before returning.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[Task]:
        """Return every task ordered by id."""
        result = await self._session.execute(select(Task).order_by(Task.id))
        return list(result.scalars().all())

    async def get(self, task_id: int) -> Task | None:
        return await self._session.get(Task, task_id)

    async def create(self, description: str) -> Task:
        task = Task(description=description, completed=False)
        self._session.add(task)
        await self._session.flush()
        await self._session.commit()
        await self._session.refresh(task)
        return task

    async def update(
        self,
        task_id: int,
        description: str | None = None,
        completed: bool | None = None,
    ) -> Task | None:
        """
        Update the given fields of a task.

        Returns:
            The updated task, or None if it does not exist.
        """
        task = await self.get(task_id)
        if task is None:
            return None
        if description is not None:
            task.description = description
        if completed is not None:
            task.completed = completed
        await self._session.flush()
        await self._session.commit()
        await self._session.refresh(task)
        return task

    async def delete(self, task_id: int) -> bool:
        """
        Delete a task.

        Returns:
            True if deleted, False if not found.
        """
        task = await self.get(task_id)
        if task is None:
            return False
        await self._session.delete(task)
        await self._session.commit()
        return True
