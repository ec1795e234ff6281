"""Unit tests for dashboard aggregation."""

from datetime import UTC, date, datetime
from types import SimpleNamespace

import pytest

from repos.storage import Storage
from services.dashboard_service import (
    UNKNOWN_CLIENT,
    build_dashboard,
    count_tasks_due_today,
    monthly_revenue,
    task_status_histogram,
)

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


def _paid(value: float, paid_at: datetime, status: str = "paid"):
    return SimpleNamespace(status=status, value=value, paid_at=paid_at)


def test_histogram_counts_known_statuses_only():
    """Test: tasks with unrecognized statuses are left out of every bucket."""
    tasks = [
        SimpleNamespace(status=status)
        for status in ["backlog", "backlog", "inProgress", "testing", "completed", "blocked"]
    ]

    counts = task_status_histogram(tasks)

    assert counts.backlog == 2
    assert counts.in_progress == 1
    assert counts.testing == 1
    assert counts.completed == 1
    assert counts.backlog + counts.in_progress + counts.testing + counts.completed == 5


def test_histogram_serializes_in_progress_as_camel_case():
    """Test: the inProgress bucket keeps the status spelling on the wire."""
    counts = task_status_histogram([SimpleNamespace(status="inProgress")])

    assert counts.model_dump(by_alias=True)["inProgress"] == 1


def test_tasks_due_today():
    """Test: only tasks due on the current day are counted."""
    tasks = [
        SimpleNamespace(due_date=date(2026, 3, 15)),
        SimpleNamespace(due_date=date(2026, 3, 15)),
        SimpleNamespace(due_date=date(2026, 3, 14)),
        SimpleNamespace(due_date=None),
    ]

    assert count_tasks_due_today(tasks, NOW.date()) == 2


def test_monthly_revenue_buckets():
    """Test: paid invoices land in the bucket of their payment month."""
    invoices = [
        _paid(100.0, datetime(2026, 3, 1, tzinfo=UTC)),
        _paid(50.0, datetime(2026, 3, 15, 11, 0, tzinfo=UTC)),
        _paid(70.0, datetime(2026, 2, 28, tzinfo=UTC)),
        _paid(30.0, datetime(2025, 10, 31, 23, 59, tzinfo=UTC)),
    ]

    revenue = monthly_revenue(invoices, NOW)

    assert revenue == [30.0, 0.0, 0.0, 0.0, 70.0, 150.0]


def test_monthly_revenue_window_edges():
    """Test: payments six or more months back, or in the future, are dropped."""
    invoices = [
        _paid(999.0, datetime(2025, 9, 30, tzinfo=UTC)),
        _paid(888.0, datetime(2026, 4, 1, tzinfo=UTC)),
    ]

    assert monthly_revenue(invoices, NOW) == [0.0] * 6


def test_monthly_revenue_ignores_unpaid_invoices():
    """Test: a paidAt left over on a non-paid invoice does not count."""
    invoices = [
        _paid(100.0, datetime(2026, 3, 1, tzinfo=UTC), status="pending"),
        _paid(100.0, None),
    ]

    revenue = monthly_revenue(invoices, NOW)

    assert len(revenue) == 6
    assert sum(revenue) == 0.0


async def _seed_client(storage: Storage, name: str):
    return await storage.clients.create(
        {"company_name": name, "contact_name": "Contact", "email": "contact@example.com"}
    )


@pytest.mark.asyncio
async def test_dashboard_empty_store(memory_storage: Storage):
    """Test: an empty store yields zero counts and six zero revenue buckets."""
    snapshot = await build_dashboard(memory_storage, now=NOW)

    assert snapshot.counts.clients == 0
    assert snapshot.counts.open_invoices_value == 0.0
    assert snapshot.monthly_revenue == [0.0] * 6
    assert snapshot.recent_activities == []


@pytest.mark.asyncio
async def test_dashboard_counts(storage: Storage):
    """Test: counts reflect clients, due tasks, pending invoices and proposals."""
    client = await _seed_client(storage, "Acme")
    await storage.tasks.create({"name": "Today", "due_date": date(2026, 3, 15)})
    await storage.tasks.create({"name": "Later", "due_date": date(2026, 3, 16)})
    await storage.invoices.create(
        {"client_id": client.id, "value": 100.0, "due_date": date(2026, 4, 1)}
    )
    await storage.invoices.create(
        {"client_id": client.id, "value": 250.5, "due_date": date(2026, 4, 1)}
    )
    await storage.invoices.create(
        {"client_id": client.id, "value": 80.0, "due_date": date(2026, 4, 1), "status": "overdue"}
    )
    await storage.proposals.create({"client_id": client.id, "title": "A", "status": "accepted"})
    await storage.proposals.create({"client_id": client.id, "title": "B", "status": "sent"})

    snapshot = await build_dashboard(storage, now=NOW)

    assert snapshot.counts.clients == 1
    assert snapshot.counts.tasks_today == 1
    assert snapshot.counts.open_invoices == 2
    assert snapshot.counts.open_invoices_value == pytest.approx(350.5)
    assert snapshot.counts.proposals_sent == 2
    assert snapshot.counts.proposals_accepted == 1


@pytest.mark.asyncio
async def test_recent_activity_capped_and_newest_first(storage: Storage, clock):
    """Test: the feed holds at most ten events sorted newest first."""
    for i in range(12):
        clock.advance(minutes=1)
        await _seed_client(storage, f"Client {i}")

    snapshot = await build_dashboard(storage, now=clock.now)
    feed = snapshot.recent_activities

    assert len(feed) == 10
    dates = [item.date for item in feed]
    assert dates == sorted(dates, reverse=True)
    assert feed[0].title == "New client added: Client 11"
    assert feed[-1].title == "New client added: Client 2"


@pytest.mark.asyncio
async def test_recent_activity_merges_event_types(storage: Storage, clock):
    """Test: events of every type are interleaved by date."""
    client = await _seed_client(storage, "Acme")
    clock.advance(hours=1)
    task = await storage.tasks.create({"name": "Logo"})
    await storage.tasks.update(task.id, {"status": "completed"})
    clock.advance(hours=1)
    invoice = await storage.invoices.create(
        {"client_id": client.id, "value": 300.0, "due_date": date(2026, 4, 1)}
    )
    clock.advance(hours=1)
    await storage.invoices.update(invoice.id, {"status": "paid"})
    clock.advance(hours=1)
    await storage.proposals.create({"client_id": client.id, "title": "Rebrand"})

    snapshot = await build_dashboard(storage, now=clock.now)
    feed = snapshot.recent_activities

    assert [item.type for item in feed] == [
        "proposal_created",
        "invoice_paid",
        "task_completed",
        "client_created",
    ]
    assert feed[0].title == "New proposal sent to Acme"
    assert feed[0].proposal.title == "Rebrand"
    assert feed[1].title == f"Invoice #{invoice.id} paid by Acme"
    assert feed[1].invoice.paid_at is not None
    assert feed[2].title == 'Task "Logo" completed'
    assert feed[2].task.id == task.id
    assert feed[3].client.company_name == "Acme"


@pytest.mark.asyncio
async def test_recent_activity_ties_follow_stream_order(storage: Storage):
    """Test: events at the same instant are ordered task, proposal, client, invoice."""
    client = await _seed_client(storage, "Acme")
    invoice = await storage.invoices.create(
        {"client_id": client.id, "value": 10.0, "due_date": date(2026, 4, 1)}
    )
    await storage.invoices.update(invoice.id, {"status": "paid"})
    await storage.proposals.create({"client_id": client.id, "title": "Same time"})
    task = await storage.tasks.create({"name": "Same time"})
    await storage.tasks.update(task.id, {"status": "completed"})

    snapshot = await build_dashboard(storage, now=NOW)

    assert [item.type for item in snapshot.recent_activities] == [
        "task_completed",
        "proposal_created",
        "client_created",
        "invoice_paid",
    ]


@pytest.mark.asyncio
async def test_recent_activity_unknown_client(storage: Storage, clock):
    """Test: dangling client ids render as a placeholder name."""
    client = await _seed_client(storage, "Gone Inc")
    invoice = await storage.invoices.create(
        {"client_id": client.id, "value": 42.0, "due_date": date(2026, 4, 1)}
    )
    await storage.clients.delete(client.id)
    clock.advance(minutes=1)
    await storage.invoices.update(invoice.id, {"status": "paid"})
    clock.advance(minutes=1)
    await storage.proposals.create({"client_id": 999, "title": "Orphan"})

    snapshot = await build_dashboard(storage, now=clock.now)
    titles = [item.title for item in snapshot.recent_activities]

    assert titles == [
        f"New proposal sent to {UNKNOWN_CLIENT}",
        f"Invoice #{invoice.id} paid by {UNKNOWN_CLIENT}",
    ]


@pytest.mark.asyncio
async def test_recent_activity_skips_reopened_tasks(storage: Storage, clock):
    """Test: a task moved out of completed no longer shows in the feed."""
    task = await storage.tasks.create({"name": "Flaky"})
    clock.advance(minutes=1)
    await storage.tasks.update(task.id, {"status": "completed"})
    await storage.tasks.update(task.id, {"status": "testing"})

    snapshot = await build_dashboard(storage, now=clock.now)

    assert snapshot.recent_activities == []
    assert snapshot.task_status_counts.testing == 1


@pytest.mark.asyncio
async def test_dashboard_does_not_modify_store(storage: Storage, clock):
    """Test: building the snapshot leaves every record as it was."""
    client = await _seed_client(storage, "Acme")
    task = await storage.tasks.create({"name": "Docs", "status": "inProgress"})
    invoice = await storage.invoices.create(
        {"client_id": client.id, "value": 10.0, "due_date": date(2026, 4, 1)}
    )
    before = [
        (await storage.clients.get_by_id(client.id)).company_name,
        (await storage.tasks.get_by_id(task.id)).status,
        (await storage.invoices.get_by_id(invoice.id)).status,
    ]

    await build_dashboard(storage, now=clock.now)
    await build_dashboard(storage, now=clock.now)

    after = [
        (await storage.clients.get_by_id(client.id)).company_name,
        (await storage.tasks.get_by_id(task.id)).status,
        (await storage.invoices.get_by_id(invoice.id)).status,
    ]
    assert after == before
    assert len(await storage.clients.list()) == 1
    assert len(await storage.tasks.list()) == 1
