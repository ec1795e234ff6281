"""User model and schema."""

from datetime import datetime

from pydantic import EmailStr
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db import Base
from models.common import TABLE_ARGS, CamelModel, created_at_column, id_column


class User(Base):
    """User ORM model - staff member or client-portal login."""

    __tablename__ = "users"
    __table_args__ = TABLE_ARGS

    id: Mapped[int] = id_column()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[str | None] = mapped_column(String(255), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    role: Mapped[str] = mapped_column(String(50), nullable=False, default="user")
    user_type: Mapped[str] = mapped_column(String(50), nullable=False, default="staff")
    # Set when user_type is "client"; not enforced as a foreign key
    client_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    created_at: Mapped[datetime] = created_at_column()


# Pydantic schemas
class UserBase(CamelModel):
    """Fields shared by user input and output."""

    name: str
    email: EmailStr
    username: str
    position: str | None = None
    avatar: str | None = None
    role: str = "user"
    user_type: str = "staff"
    client_id: int | None = None


class UserCreate(UserBase):
    """Schema for creating a user."""

    password: str


class UserUpdate(CamelModel):
    """Partial user update; only provided fields are applied."""

    name: str | None = None
    email: EmailStr | None = None
    username: str | None = None
    password: str | None = None
    position: str | None = None
    avatar: str | None = None
    role: str | None = None
    user_type: str | None = None
    client_id: int | None = None


class UserResponse(UserBase):
    """Schema for user response. Never carries the password."""

    id: int
    email: str
    created_at: datetime
