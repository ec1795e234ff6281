"""Database models."""

from db import Base

# Import all models so create_all and Alembic can detect them
from models.user import User
from models.client import Client
from models.project import Project
from models.task import Task
from models.proposal import Proposal
from models.invoice import Invoice
from models.expense import Expense
from models.support_ticket import SupportMessage, SupportTicket
from models.calendar_event import CalendarEvent
from models.company_settings import CompanySettings

__all__ = [
    "Base",
    "User",
    "Client",
    "Project",
    "Task",
    "Proposal",
    "Invoice",
    "Expense",
    "SupportTicket",
    "SupportMessage",
    "CalendarEvent",
    "CompanySettings",
]
