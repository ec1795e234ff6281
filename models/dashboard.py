"""Dashboard snapshot schemas (read-only projection, no table)."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from models.client import ClientResponse
from models.common import CamelModel
from models.invoice import InvoiceResponse
from models.proposal import ProposalResponse
from models.task import TaskResponse

ActivityType = Literal["task_completed", "proposal_created", "client_created", "invoice_paid"]


class DashboardCounts(CamelModel):
    clients: int = 0
    tasks_today: int = 0
    open_invoices: int = 0
    open_invoices_value: float = 0.0
    proposals_sent: int = 0
    proposals_accepted: int = 0


class TaskStatusCounts(CamelModel):
    backlog: int = 0
    in_progress: int = 0
    testing: int = 0
    completed: int = 0


class RecentActivity(CamelModel):
    """One feed item; exactly one of the record fields is set, matching `type`."""

    type: ActivityType
    date: datetime
    title: str
    task: TaskResponse | None = None
    proposal: ProposalResponse | None = None
    client: ClientResponse | None = None
    invoice: InvoiceResponse | None = None


class DashboardSnapshot(CamelModel):
    counts: DashboardCounts
    task_status_counts: TaskStatusCounts
    monthly_revenue: list[float] = Field(min_length=6, max_length=6)
    recent_activities: list[RecentActivity]
