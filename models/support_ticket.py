"""Support ticket and message models."""

from datetime import datetime

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db import Base
from models.common import TABLE_ARGS, CamelModel, UTCDateTime, created_at_column, id_column


class SupportTicket(Base):
    """Support ticket ORM model.

    closed_at is stamped by the store on the first transition into "closed".
    """

    __tablename__ = "support_tickets"
    __table_args__ = TABLE_ARGS

    id: Mapped[int] = id_column()
    client_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="open")
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    created_at: Mapped[datetime] = created_at_column()
    closed_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)


class SupportMessage(Base):
    """Support message ORM model. Messages are append-only."""

    __tablename__ = "support_messages"
    __table_args__ = TABLE_ARGS

    id: Mapped[int] = id_column()
    ticket_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    sender_id: Mapped[int] = mapped_column(Integer, nullable=False)
    is_internal: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=False)
    created_at: Mapped[datetime] = created_at_column()


# Pydantic schemas
class SupportTicketBase(CamelModel):
    """Base support ticket schema."""

    client_id: int
    title: str
    description: str
    status: str = "open"
    type: str


class SupportTicketUpdate(CamelModel):
    """Partial support ticket update."""

    client_id: int | None = None
    title: str | None = None
    description: str | None = None
    status: str | None = None
    type: str | None = None


class SupportTicketResponse(SupportTicketBase):
    """Schema for support ticket response."""

    id: int
    created_at: datetime
    closed_at: datetime | None = None


class SupportMessageBase(CamelModel):
    """Base support message schema."""

    ticket_id: int
    message: str
    sender_id: int
    is_internal: bool | None = False


class SupportMessageCreate(CamelModel):
    """Request body for posting a message; the ticket comes from the URL."""

    message: str
    sender_id: int
    is_internal: bool | None = False


class SupportMessageResponse(SupportMessageBase):
    """Schema for support message response."""

    id: int
    created_at: datetime
