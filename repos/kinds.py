"""Registry describing every entity kind the store manages."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from sqlalchemy import Integer

from models.calendar_event import (
    CalendarEvent,
    CalendarEventCreate,
    CalendarEventResponse,
    CalendarEventUpdate,
    event_range_errors,
)
from models.client import Client, ClientBase, ClientResponse, ClientUpdate
from models.expense import Expense, ExpenseBase, ExpenseResponse, ExpenseUpdate
from models.invoice import Invoice, InvoiceBase, InvoiceResponse, InvoiceUpdate
from models.project import Project, ProjectBase, ProjectResponse, ProjectUpdate
from models.proposal import Proposal, ProposalBase, ProposalResponse, ProposalUpdate
from models.support_ticket import (
    SupportMessage,
    SupportMessageBase,
    SupportMessageResponse,
    SupportTicket,
    SupportTicketBase,
    SupportTicketResponse,
    SupportTicketUpdate,
)
from models.task import Task, TaskBase, TaskResponse, TaskUpdate
from models.user import User, UserCreate, UserResponse, UserUpdate


@dataclass(frozen=True)
class Lifecycle:
    """Timestamp field stamped on the first transition into a terminal status."""

    terminal_status: str
    field: str


@dataclass(frozen=True)
class EntityKind:
    name: str
    slug: str
    model: type
    create_schema: type[BaseModel]
    update_schema: type[BaseModel] | None
    response_schema: type[BaseModel]
    unique_fields: tuple[str, ...] = ()
    filter_fields: tuple[str, ...] = ()
    lifecycle: Lifecycle | None = None
    append_only: bool = False
    # Cross-field rule re-checked after a partial update is merged; returns error dicts
    merged_check: Callable[[Mapping[str, Any]], list[dict]] | None = None

    @property
    def attr(self) -> str:
        """Attribute name of this kind's repository on Storage."""
        return self.slug.replace("-", "_")

    def is_integer_field(self, field: str) -> bool:
        """True when `field` holds integer values (ids and foreign keys)."""
        return isinstance(self.model.__table__.columns[field].type, Integer)


USERS = EntityKind(
    name="User",
    slug="users",
    model=User,
    create_schema=UserCreate,
    update_schema=UserUpdate,
    response_schema=UserResponse,
    unique_fields=("email", "username"),
    filter_fields=("client_id",),
)

CLIENTS = EntityKind(
    name="Client",
    slug="clients",
    model=Client,
    create_schema=ClientBase,
    update_schema=ClientUpdate,
    response_schema=ClientResponse,
    filter_fields=("status",),
)

PROJECTS = EntityKind(
    name="Project",
    slug="projects",
    model=Project,
    create_schema=ProjectBase,
    update_schema=ProjectUpdate,
    response_schema=ProjectResponse,
    filter_fields=("client_id", "responsible_id"),
)

TASKS = EntityKind(
    name="Task",
    slug="tasks",
    model=Task,
    create_schema=TaskBase,
    update_schema=TaskUpdate,
    response_schema=TaskResponse,
    filter_fields=("project_id", "assignee_id"),
    lifecycle=Lifecycle(terminal_status="completed", field="completed_at"),
)

PROPOSALS = EntityKind(
    name="Proposal",
    slug="proposals",
    model=Proposal,
    create_schema=ProposalBase,
    update_schema=ProposalUpdate,
    response_schema=ProposalResponse,
    filter_fields=("client_id",),
)

INVOICES = EntityKind(
    name="Invoice",
    slug="invoices",
    model=Invoice,
    create_schema=InvoiceBase,
    update_schema=InvoiceUpdate,
    response_schema=InvoiceResponse,
    filter_fields=("client_id", "project_id"),
    lifecycle=Lifecycle(terminal_status="paid", field="paid_at"),
)

EXPENSES = EntityKind(
    name="Expense",
    slug="expenses",
    model=Expense,
    create_schema=ExpenseBase,
    update_schema=ExpenseUpdate,
    response_schema=ExpenseResponse,
    filter_fields=("category",),
)

SUPPORT_TICKETS = EntityKind(
    name="SupportTicket",
    slug="support-tickets",
    model=SupportTicket,
    create_schema=SupportTicketBase,
    update_schema=SupportTicketUpdate,
    response_schema=SupportTicketResponse,
    filter_fields=("client_id",),
    lifecycle=Lifecycle(terminal_status="closed", field="closed_at"),
)

SUPPORT_MESSAGES = EntityKind(
    name="SupportMessage",
    slug="support-messages",
    model=SupportMessage,
    create_schema=SupportMessageBase,
    update_schema=None,
    response_schema=SupportMessageResponse,
    filter_fields=("ticket_id",),
    append_only=True,
)

CALENDAR_EVENTS = EntityKind(
    name="CalendarEvent",
    slug="calendar-events",
    model=CalendarEvent,
    create_schema=CalendarEventCreate,
    update_schema=CalendarEventUpdate,
    response_schema=CalendarEventResponse,
    filter_fields=("user_id", "task_id", "project_id"),
    merged_check=event_range_errors,
)

ENTITY_KINDS: tuple[EntityKind, ...] = (
    USERS,
    CLIENTS,
    PROJECTS,
    TASKS,
    PROPOSALS,
    INVOICES,
    EXPENSES,
    SUPPORT_TICKETS,
    SUPPORT_MESSAGES,
    CALENDAR_EVENTS,
)

# Kinds served by the generic CRUD routes
CRUD_KINDS = tuple(kind for kind in ENTITY_KINDS if not kind.append_only)
