"""Project model - client engagement owned by a responsible user."""

from datetime import date, datetime

from pydantic import Field
from sqlalchemy import JSON, Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db import Base
from models.common import TABLE_ARGS, CamelModel, created_at_column, id_column


class Project(Base):
    """Project ORM model."""

    __tablename__ = "projects"
    __table_args__ = TABLE_ARGS

    id: Mapped[int] = id_column()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    client_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    responsible_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="planning")
    progress: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0)
    tags: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = created_at_column()


# Pydantic schemas
class ProjectBase(CamelModel):
    """Base project schema."""

    name: str
    description: str | None = None
    client_id: int
    responsible_id: int
    start_date: date | None = None
    end_date: date | None = None
    status: str = "planning"
    progress: int | None = Field(default=0, ge=0, le=100)
    tags: list[str] | None = None


class ProjectUpdate(CamelModel):
    """Partial project update."""

    name: str | None = None
    description: str | None = None
    client_id: int | None = None
    responsible_id: int | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: str | None = None
    progress: int | None = Field(default=None, ge=0, le=100)
    tags: list[str] | None = None


class ProjectResponse(ProjectBase):
    """Schema for project response."""

    id: int
    created_at: datetime
