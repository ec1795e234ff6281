"""Shared pydantic configuration and column helpers for entity models."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import mapped_column
from sqlalchemy.types import TypeDecorator

# Tables never reuse ids after deletion (SQLite otherwise reuses max(id))
TABLE_ARGS = {"sqlite_autoincrement": True}


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime column normalized to UTC.

    Backends without native timezone support (SQLite) hand back naive values;
    those are read as UTC so every timestamp the store returns is aware.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


def id_column():
    """Integer primary key, monotonically assigned by the store."""
    return mapped_column(Integer, primary_key=True, autoincrement=True, index=True)


def created_at_column():
    return mapped_column(UTCDateTime(), nullable=False, default=utc_now)


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire.

    Input accepts either spelling; responses are serialized by alias.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
