"""Task CRUD endpoints."""
from fastapi import APIRouter, Depends

from api.dependencies import get_current_user, get_task_service
from schemas.task import TaskCreate, TaskResponse, TaskUpdate
from services.task_service import TaskService

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    service: TaskService = Depends(get_task_service),
) -> list[TaskResponse]:
    """
    List all tasks.

    Served from the task list cache when present; otherwise read from the
    database and cached.
    """
    return await service.list_tasks()


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    data: TaskCreate,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """Create a task. Invalidates the task list cache."""
    return await service.create_task(data)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """Get a single task by ID."""
    return await service.get_task(task_id)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    data: TaskUpdate,
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """Update a task. Invalidates the task list cache."""
    return await service.update_task(task_id, data)


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: int,
    service: TaskService = Depends(get_task_service),
) -> None:
    """Delete a task. Invalidates the task list cache."""
    await service.delete_task(task_id)
