"""FastAPI dependencies for injection."""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import get_current_user, get_photo_uploader
from core.context import AppContext, get_app_context
from db.session import get_async_session
from db.task_repository import TaskRepository
from db.user_repository import UserRepository
from services.auth_service import AuthService
from services.task_service import TaskService


def get_task_repository(db: AsyncSession = Depends(get_async_session)) -> TaskRepository:
    return TaskRepository(db)


def get_user_repository(db: AsyncSession = Depends(get_async_session)) -> UserRepository:
    return UserRepository(db)


def get_task_service(
    repository: TaskRepository = Depends(get_task_repository),
    context: AppContext = Depends(get_app_context),
) -> TaskService:
    """Task service sharing the process-wide task cache."""
    return TaskService(repository, context.task_cache)


def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    context: AppContext = Depends(get_app_context),
) -> AuthService:
    return AuthService(users, context.passwords, context.tokens)


__all__ = [
    "get_app_context",
    "get_async_session",
    "get_auth_service",
    "get_current_user",
    "get_photo_uploader",
    "get_task_repository",
    "get_task_service",
    "get_user_repository",
]
