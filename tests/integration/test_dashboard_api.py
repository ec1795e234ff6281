"""Integration tests for the dashboard endpoint."""

from datetime import UTC, datetime, timedelta

from fastapi import status

BASE = "/api/v1"


def _create_client(client, name="Acme"):
    response = client.post(
        f"{BASE}/entities/clients",
        json={"companyName": name, "contactName": "Contact", "email": "c@acme.example.com"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


def test_dashboard_empty(client):
    """Test: an empty store returns zeroed counts and six revenue buckets."""
    response = client.get(f"{BASE}/dashboard")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["counts"] == {
        "clients": 0,
        "tasksToday": 0,
        "openInvoices": 0,
        "openInvoicesValue": 0.0,
        "proposalsSent": 0,
        "proposalsAccepted": 0,
    }
    assert body["taskStatusCounts"] == {
        "backlog": 0,
        "inProgress": 0,
        "testing": 0,
        "completed": 0,
    }
    assert body["monthlyRevenue"] == [0.0] * 6
    assert body["recentActivities"] == []


def test_dashboard_invoice_payment(client):
    """Test: paying an invoice moves its value from open to this month's revenue."""
    acme = _create_client(client)
    due = (datetime.now(UTC) + timedelta(days=30)).date().isoformat()
    invoice = client.post(
        f"{BASE}/entities/invoices",
        json={"clientId": acme["id"], "value": 1200.0, "dueDate": due},
    ).json()
    assert invoice["status"] == "pending"
    assert invoice["paidAt"] is None

    before = client.get(f"{BASE}/dashboard").json()
    assert before["counts"]["openInvoices"] == 1
    assert before["counts"]["openInvoicesValue"] == 1200.0
    assert before["monthlyRevenue"][5] == 0.0

    paid = client.patch(
        f"{BASE}/entities/invoices/{invoice['id']}", json={"status": "paid"}
    ).json()
    assert paid["paidAt"] is not None

    after = client.get(f"{BASE}/dashboard").json()
    assert after["counts"]["openInvoices"] == 0
    assert after["counts"]["openInvoicesValue"] == 0.0
    assert after["monthlyRevenue"][5] == 1200.0
    assert after["recentActivities"][0]["type"] == "invoice_paid"
    assert after["recentActivities"][0]["title"] == f"Invoice #{invoice['id']} paid by Acme"
    assert after["recentActivities"][0]["invoice"]["id"] == invoice["id"]


def test_dashboard_task_statuses(client):
    """Test: task histogram and due-today count follow the stored tasks."""
    today = datetime.now(UTC).date()
    client.post(
        f"{BASE}/entities/tasks",
        json={"name": "Later", "status": "backlog", "dueDate": (today + timedelta(days=3)).isoformat()},
    )

    body = client.get(f"{BASE}/dashboard").json()
    assert body["taskStatusCounts"]["backlog"] == 1
    assert body["counts"]["tasksToday"] == 0

    client.post(
        f"{BASE}/entities/tasks",
        json={"name": "Now", "status": "inProgress", "dueDate": today.isoformat()},
    )
    client.post(f"{BASE}/entities/tasks", json={"name": "Odd", "status": "archived"})

    body = client.get(f"{BASE}/dashboard").json()
    assert body["taskStatusCounts"] == {
        "backlog": 1,
        "inProgress": 1,
        "testing": 0,
        "completed": 0,
    }
    assert body["counts"]["tasksToday"] == 1


def test_dashboard_recent_activity_shape(client):
    """Test: feed items carry type, date, title and the related record."""
    _create_client(client, name="Nova")

    body = client.get(f"{BASE}/dashboard").json()
    item = body["recentActivities"][0]

    assert item["type"] == "client_created"
    assert item["title"] == "New client added: Nova"
    assert item["client"]["companyName"] == "Nova"
    assert item["task"] is None
    assert "date" in item
