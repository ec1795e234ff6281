"""Expense model."""

import datetime as dt

from sqlalchemy import Boolean, Date, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db import Base
from models.common import TABLE_ARGS, CamelModel, created_at_column, id_column


class Expense(Base):
    """Expense ORM model."""

    __tablename__ = "expenses"
    __table_args__ = TABLE_ARGS

    id: Mapped[int] = id_column()
    description: Mapped[str] = mapped_column(Text, nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    # "date" shadows the type name, hence the module-qualified annotations
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    recurring: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=False)
    recurrence_interval: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[dt.datetime] = created_at_column()


# Pydantic schemas
class ExpenseBase(CamelModel):
    description: str
    value: float
    date: dt.date
    category: str
    recurring: bool | None = False
    recurrence_interval: str | None = None


class ExpenseUpdate(CamelModel):
    description: str | None = None
    value: float | None = None
    date: dt.date | None = None
    category: str | None = None
    recurring: bool | None = None
    recurrence_interval: str | None = None


class ExpenseResponse(ExpenseBase):
    id: int
    created_at: dt.datetime
