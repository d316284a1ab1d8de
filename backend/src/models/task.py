"""Task model."""
from sqlalchemy import Boolean, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin


class Task(Base, TimestampMixin):
    """A to-do item with a description and a completion flag."""

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(primary_key=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )
