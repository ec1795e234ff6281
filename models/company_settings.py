"""Company settings - singleton row holding company-wide preferences."""

from datetime import datetime

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db import Base
from models.common import CamelModel, UTCDateTime, utc_now


class CompanySettings(Base):
    """Company settings ORM model. At most one row exists."""

    __tablename__ = "company_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    cnpj: Mapped[str | None] = mapped_column(String(50), nullable=True)
    logo: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    theme: Mapped[str | None] = mapped_column(String(20), nullable=True, default="light")
    language: Mapped[str | None] = mapped_column(String(10), nullable=True, default="en")
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utc_now,
    )


# Pydantic schemas
class CompanySettingsUpdate(CamelModel):
    """Partial company settings update."""

    company_name: str | None = None
    email: str | None = None
    cnpj: str | None = None
    logo: str | None = None
    theme: str | None = None
    language: str | None = None


class CompanySettingsResponse(CamelModel):
    """Schema for company settings response."""

    id: int
    company_name: str
    email: str
    cnpj: str | None = None
    logo: str | None = None
    theme: str | None = None
    language: str | None = None
    updated_at: datetime
