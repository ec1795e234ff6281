"""Invoice model - amount billed to a client."""

from datetime import date, datetime

from sqlalchemy import Date, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db import Base
from models.common import TABLE_ARGS, CamelModel, UTCDateTime, created_at_column, id_column


class Invoice(Base):
    """Invoice ORM model.

    paid_at is stamped by the store on the first transition into "paid".
    """

    __tablename__ = "invoices"
    __table_args__ = TABLE_ARGS

    id: Mapped[int] = id_column()
    client_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    project_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="pending")
    payment_link: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = created_at_column()
    paid_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)


# Pydantic schemas
class InvoiceBase(CamelModel):
    """Base invoice schema."""

    client_id: int
    project_id: int | None = None
    description: str | None = None
    value: float
    due_date: date
    status: str = "pending"
    payment_link: str | None = None


class InvoiceUpdate(CamelModel):
    """Partial invoice update."""

    client_id: int | None = None
    project_id: int | None = None
    description: str | None = None
    value: float | None = None
    due_date: date | None = None
    status: str | None = None
    payment_link: str | None = None


class InvoiceResponse(InvoiceBase):
    """Schema for invoice response."""

    id: int
    created_at: datetime
    paid_at: datetime | None = None
