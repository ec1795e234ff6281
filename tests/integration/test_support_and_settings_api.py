"""Integration tests for support messages, company settings and health."""

from fastapi import status

BASE = "/api/v1"


def _create_ticket(client):
    response = client.post(
        f"{BASE}/entities/support-tickets",
        json={"clientId": 1, "title": "Cannot log in", "description": "Error 500", "type": "bug"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


def test_post_and_list_ticket_messages(client):
    """Test: messages are appended to a ticket and listed oldest first."""
    ticket = _create_ticket(client)
    url = f"{BASE}/entities/support-tickets/{ticket['id']}/messages"

    first = client.post(url, json={"message": "Hello", "senderId": 3})
    second = client.post(url, json={"message": "Any news?", "senderId": 3, "isInternal": True})
    assert first.status_code == status.HTTP_201_CREATED
    assert first.json()["ticketId"] == ticket["id"]
    assert second.json()["isInternal"] is True

    response = client.get(url)
    assert response.status_code == status.HTTP_200_OK
    assert [m["message"] for m in response.json()] == ["Hello", "Any news?"]


def test_messages_are_scoped_to_their_ticket(client):
    """Test: listing one ticket's messages excludes other tickets."""
    first = _create_ticket(client)
    second = _create_ticket(client)
    client.post(
        f"{BASE}/entities/support-tickets/{first['id']}/messages",
        json={"message": "For first", "senderId": 1},
    )

    response = client.get(f"{BASE}/entities/support-tickets/{second['id']}/messages")

    assert response.json() == []


def test_post_message_to_unknown_ticket_returns_404(client):
    """Test: a message cannot be attached to a missing ticket."""
    response = client.post(
        f"{BASE}/entities/support-tickets/999/messages",
        json={"message": "Hello", "senderId": 1},
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "SupportTicket not found"


def test_post_message_without_body_text_returns_400(client):
    """Test: the message text is required."""
    ticket = _create_ticket(client)

    response = client.post(
        f"{BASE}/entities/support-tickets/{ticket['id']}/messages",
        json={"senderId": 1},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_closing_ticket_sets_closed_at(client):
    """Test: closing a ticket through PATCH stamps closedAt."""
    ticket = _create_ticket(client)

    response = client.patch(
        f"{BASE}/entities/support-tickets/{ticket['id']}", json={"status": "closed"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["closedAt"] is not None


def test_company_settings_defaults(client):
    """Test: settings are created with defaults on first read."""
    response = client.get(f"{BASE}/company-settings")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["companyName"] == "CRM System"
    assert body["email"] == "contact@crmsystem.com"
    assert body["theme"] == "light"
    assert body["language"] == "en"
    assert "updatedAt" in body


def test_company_settings_patch(client):
    """Test: PATCH merges the given fields into the settings."""
    response = client.patch(
        f"{BASE}/company-settings", json={"companyName": "Studio Nove", "theme": "dark"}
    )
    assert response.status_code == status.HTTP_200_OK

    body = client.get(f"{BASE}/company-settings").json()
    assert body["companyName"] == "Studio Nove"
    assert body["theme"] == "dark"
    assert body["language"] == "en"


def test_company_settings_patch_null_name_returns_400(client):
    """Test: company name cannot be cleared."""
    response = client.patch(f"{BASE}/company-settings", json={"companyName": None})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_health(client):
    """Test: health check reports status and storage backend."""
    response = client.get(f"{BASE}/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "ok"
    assert "storage" in response.json()


def test_root(client):
    """Test: root endpoint answers."""
    response = client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert "version" in response.json()
