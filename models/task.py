"""Task model - unit of work, optionally attached to a project."""

from datetime import date, datetime

from sqlalchemy import JSON, Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db import Base
from models.common import TABLE_ARGS, CamelModel, UTCDateTime, created_at_column, id_column

TASK_STATUSES = ("backlog", "inProgress", "testing", "completed")


class Task(Base):
    """Task ORM model.

    completed_at is derived by the store: it is stamped the first time the
    status moves into "completed" and is not cleared afterwards.
    """

    __tablename__ = "tasks"
    __table_args__ = TABLE_ARGS

    id: Mapped[int] = id_column()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    project_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    assignee_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="backlog")
    priority: Mapped[str] = mapped_column(String(50), nullable=False, default="medium")
    checklist: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    checklist_completed: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = created_at_column()
    completed_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)


# Pydantic schemas
class TaskBase(CamelModel):
    """Base task schema."""

    name: str
    description: str | None = None
    project_id: int | None = None
    assignee_id: int | None = None
    due_date: date | None = None
    status: str = "backlog"
    priority: str = "medium"
    checklist: list[str] | None = None
    checklist_completed: list[str] | None = None


class TaskUpdate(CamelModel):
    """Partial task update."""

    name: str | None = None
    description: str | None = None
    project_id: int | None = None
    assignee_id: int | None = None
    due_date: date | None = None
    status: str | None = None
    priority: str | None = None
    checklist: list[str] | None = None
    checklist_completed: list[str] | None = None


class TaskResponse(TaskBase):
    """Schema for task response."""

    id: int
    created_at: datetime
    completed_at: datetime | None = None
