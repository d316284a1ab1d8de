"""Pydantic schemas for task endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskCreate(BaseModel):
    """Schema for creating a new task."""

    description: str = Field(min_length=1)

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        """Reject whitespace-only descriptions."""
        if not value.strip():
            raise ValueError("description must not be blank")
        return value


class TaskUpdate(BaseModel):
    """
    Schema for updating a task.

    Omitted fields keep their stored value.
    """

    description: str | None = Field(default=None, min_length=1)
    completed: bool | None = None


class TaskResponse(BaseModel):
    """
    Task as returned by the API.

    This is also the shape stored in the task list cache entry.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    completed: bool
    created_at: datetime
    updated_at: datetime
