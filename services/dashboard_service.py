"""Dashboard aggregation across clients, tasks, invoices and proposals.

The snapshot is recomputed on every request from the current store contents.
Reads across repositories are independent, so a snapshot taken during
concurrent writes may mix before/after states.
"""

import heapq
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime
from itertools import islice
from typing import Any

from models.client import ClientResponse
from models.common import as_utc, utc_now
from models.dashboard import (
    DashboardCounts,
    DashboardSnapshot,
    RecentActivity,
    TaskStatusCounts,
)
from models.invoice import InvoiceResponse
from models.proposal import ProposalResponse
from models.task import TaskResponse
from repos.storage import Storage

REVENUE_MONTHS = 6
RECENT_ACTIVITY_LIMIT = 10
UNKNOWN_CLIENT = "Unknown Client"

# Histogram bucket per recognized task status
_STATUS_BUCKETS = {
    "backlog": "backlog",
    "inProgress": "in_progress",
    "testing": "testing",
    "completed": "completed",
}


def count_tasks_due_today(tasks: Iterable[Any], today: date) -> int:
    """Tasks whose due date is the given calendar day."""
    return sum(1 for task in tasks if task.due_date is not None and task.due_date == today)


def task_status_histogram(tasks: Iterable[Any]) -> TaskStatusCounts:
    """Partition tasks into the four fixed buckets; other statuses are skipped."""
    counts = dict.fromkeys(_STATUS_BUCKETS.values(), 0)
    for task in tasks:
        bucket = _STATUS_BUCKETS.get(task.status)
        if bucket is not None:
            counts[bucket] += 1
    return TaskStatusCounts(**counts)


def monthly_revenue(invoices: Iterable[Any], now: datetime) -> list[float]:
    """
    Paid invoice value per month for the current month and the five before it.

    Index 0 is the oldest month, index 5 the current one. Invoices paid
    outside that window (or in the future) are dropped.
    """
    now = as_utc(now)
    buckets = [0.0] * REVENUE_MONTHS
    for invoice in invoices:
        if invoice.status != "paid" or invoice.paid_at is None:
            continue
        paid_at = as_utc(invoice.paid_at)
        months_diff = (now.year - paid_at.year) * 12 + (now.month - paid_at.month)
        if 0 <= months_diff < REVENUE_MONTHS:
            buckets[REVENUE_MONTHS - 1 - months_diff] += invoice.value or 0
    return buckets


def _client_name(client_names: Mapping[int, str], client_id: int | None) -> str:
    return client_names.get(client_id, UNKNOWN_CLIENT)


def recent_activities(
    *,
    tasks: Sequence[Any],
    proposals: Sequence[Any],
    clients: Sequence[Any],
    invoices: Sequence[Any],
    limit: int = RECENT_ACTIVITY_LIMIT,
) -> list[RecentActivity]:
    """
    Merge the four event streams into one feed, newest first.

    Each stream is sorted on its own and the streams are merged lazily, so
    only `limit` events are ever materialized. Events with equal timestamps
    keep stream order (tasks, proposals, clients, invoices) and then their
    order inside the stream.
    """
    client_names = {client.id: client.company_name for client in clients}

    def by_date(stream):
        return sorted(stream, key=lambda event: event[0], reverse=True)

    task_events = by_date(
        (as_utc(task.completed_at), "task_completed", task)
        for task in tasks
        if task.status == "completed" and task.completed_at is not None
    )
    proposal_events = by_date(
        (as_utc(proposal.created_at), "proposal_created", proposal)
        for proposal in proposals
    )
    client_events = by_date(
        (as_utc(client.created_at), "client_created", client) for client in clients
    )
    invoice_events = by_date(
        (as_utc(invoice.paid_at), "invoice_paid", invoice)
        for invoice in invoices
        if invoice.status == "paid" and invoice.paid_at is not None
    )

    merged = heapq.merge(
        task_events,
        proposal_events,
        client_events,
        invoice_events,
        key=lambda event: event[0],
        reverse=True,
    )

    feed = []
    for when, event_type, record in islice(merged, limit):
        if event_type == "task_completed":
            item = RecentActivity(
                type=event_type,
                date=when,
                title=f'Task "{record.name}" completed',
                task=TaskResponse.model_validate(record),
            )
        elif event_type == "proposal_created":
            item = RecentActivity(
                type=event_type,
                date=when,
                title=f"New proposal sent to {_client_name(client_names, record.client_id)}",
                proposal=ProposalResponse.model_validate(record),
            )
        elif event_type == "client_created":
            item = RecentActivity(
                type=event_type,
                date=when,
                title=f"New client added: {record.company_name}",
                client=ClientResponse.model_validate(record),
            )
        else:
            item = RecentActivity(
                type=event_type,
                date=when,
                title=(
                    f"Invoice #{record.id} paid by "
                    f"{_client_name(client_names, record.client_id)}"
                ),
                invoice=InvoiceResponse.model_validate(record),
            )
        feed.append(item)
    return feed


async def build_dashboard(storage: Storage, *, now: datetime | None = None) -> DashboardSnapshot:
    """
    Build the dashboard snapshot.

    Args:
        storage: Active storage (read only)
        now: Reference time; defaults to the current UTC time

    Returns:
        DashboardSnapshot with counts, task histogram, revenue series and feed
    """
    now = as_utc(now) if now is not None else utc_now()

    clients = await storage.clients.list()
    tasks = await storage.tasks.list()
    invoices = await storage.invoices.list()
    proposals = await storage.proposals.list()

    pending = [invoice for invoice in invoices if invoice.status == "pending"]
    counts = DashboardCounts(
        clients=len(clients),
        tasks_today=count_tasks_due_today(tasks, now.date()),
        open_invoices=len(pending),
        open_invoices_value=sum(invoice.value or 0 for invoice in pending),
        proposals_sent=len(proposals),
        proposals_accepted=sum(1 for proposal in proposals if proposal.status == "accepted"),
    )

    return DashboardSnapshot(
        counts=counts,
        task_status_counts=task_status_histogram(tasks),
        monthly_revenue=monthly_revenue(invoices, now),
        recent_activities=recent_activities(
            tasks=tasks,
            proposals=proposals,
            clients=clients,
            invoices=invoices,
        ),
    )
