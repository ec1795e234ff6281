"""Proposal model - commercial offer sent to a client."""

from datetime import date, datetime

from sqlalchemy import Date, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db import Base
from models.common import TABLE_ARGS, CamelModel, created_at_column, id_column


class Proposal(Base):
    """Proposal ORM model."""

    __tablename__ = "proposals"
    __table_args__ = TABLE_ARGS

    id: Mapped[int] = id_column()
    client_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    services: Mapped[str | None] = mapped_column(Text, nullable=True)
    value: Mapped[float | None] = mapped_column(Float, nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="draft")
    created_at: Mapped[datetime] = created_at_column()


# Pydantic schemas
class ProposalBase(CamelModel):
    """Base proposal schema."""

    client_id: int
    title: str
    description: str | None = None
    services: str | None = None
    value: float | None = None
    due_date: date | None = None
    expiry_date: date | None = None
    status: str = "draft"


class ProposalUpdate(CamelModel):
    """Partial proposal update."""

    client_id: int | None = None
    title: str | None = None
    description: str | None = None
    services: str | None = None
    value: float | None = None
    due_date: date | None = None
    expiry_date: date | None = None
    status: str | None = None


class ProposalResponse(ProposalBase):
    """Schema for proposal response."""

    id: int
    created_at: datetime
