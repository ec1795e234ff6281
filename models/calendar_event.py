"""Calendar event model."""

from datetime import datetime

from pydantic import model_validator
from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db import Base
from models.common import (
    TABLE_ARGS,
    CamelModel,
    UTCDateTime,
    as_utc,
    created_at_column,
    id_column,
)

RANGE_ERROR = "endDate must not be before startDate"


class CalendarEvent(Base):
    """Calendar event ORM model, owned by a user and optionally tied to a task or project."""

    __tablename__ = "calendar_events"
    __table_args__ = TABLE_ARGS

    id: Mapped[int] = id_column()
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    end_date: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    all_day: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=False)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    task_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    project_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    created_at: Mapped[datetime] = created_at_column()


def event_range_errors(values) -> list[dict]:
    """Errors for a stored or merged event whose end precedes its start."""
    start, end = values.get("start_date"), values.get("end_date")
    if start is None or end is None or as_utc(end) >= as_utc(start):
        return []
    return [{"loc": ["endDate"], "msg": RANGE_ERROR, "type": "value_error"}]


# Pydantic schemas
class CalendarEventBase(CamelModel):
    """Base calendar event schema."""

    title: str
    description: str | None = None
    start_date: datetime
    end_date: datetime
    all_day: bool | None = False
    user_id: int
    task_id: int | None = None
    project_id: int | None = None


class CalendarEventCreate(CalendarEventBase):
    """Schema for creating a calendar event."""

    @model_validator(mode="after")
    def check_range(self):
        if as_utc(self.end_date) < as_utc(self.start_date):
            raise ValueError(RANGE_ERROR)
        return self


class CalendarEventUpdate(CamelModel):
    """Partial calendar event update."""

    title: str | None = None
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    all_day: bool | None = None
    user_id: int | None = None
    task_id: int | None = None
    project_id: int | None = None


class CalendarEventResponse(CalendarEventBase):
    """Schema for calendar event response."""

    id: int
    created_at: datetime
