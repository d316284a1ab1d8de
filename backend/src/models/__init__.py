"""SQLAlchemy models."""
from models.base import Base, TimestampMixin
from models.task import Task
from models.user import User

__all__ = [
    "Base",
    "Task",
    "TimestampMixin",
    "User",
]
