"""Client model - a customer company."""

from datetime import date, datetime

from pydantic import EmailStr, Field
from sqlalchemy import Date, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db import Base
from models.common import TABLE_ARGS, CamelModel, created_at_column, id_column


class Client(Base):
    """Client ORM model."""

    __tablename__ = "clients"
    __table_args__ = TABLE_ARGS

    id: Mapped[int] = id_column()
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    cnpj_cpf: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    instagram: Mapped[str | None] = mapped_column(String(255), nullable=True)
    facebook: Mapped[str | None] = mapped_column(String(255), nullable=True)
    linkedin: Mapped[str | None] = mapped_column(String(255), nullable=True)
    payment_day: Mapped[int | None] = mapped_column(Integer, nullable=True)
    contract_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    contract_start: Mapped[date | None] = mapped_column(Date, nullable=True)
    contract_end: Mapped[date | None] = mapped_column(Date, nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    observations: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="active")
    created_at: Mapped[datetime] = created_at_column()


# Pydantic schemas
class ClientBase(CamelModel):
    """Base client schema."""

    company_name: str
    contact_name: str
    email: EmailStr
    phone: str | None = None
    cnpj_cpf: str | None = None
    address: str | None = None
    instagram: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    payment_day: int | None = Field(default=None, ge=1, le=31)
    contract_value: float | None = None
    contract_start: date | None = None
    contract_end: date | None = None
    category: str | None = None
    description: str | None = None
    observations: str | None = None
    status: str = "active"


class ClientUpdate(CamelModel):
    """Partial client update."""

    company_name: str | None = None
    contact_name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    cnpj_cpf: str | None = None
    address: str | None = None
    instagram: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    payment_day: int | None = Field(default=None, ge=1, le=31)
    contract_value: float | None = None
    contract_start: date | None = None
    contract_end: date | None = None
    category: str | None = None
    description: str | None = None
    observations: str | None = None
    status: str | None = None


class ClientResponse(ClientBase):
    """Schema for client response."""

    id: int
    email: str
    created_at: datetime
