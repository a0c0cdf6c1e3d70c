"""Reminder API tests — CRUD, due-date windows and status groups.

Learn: ``isOverdue`` and ``isUpcoming`` are derived from the due date and
status at response time; they are never stored.
"""

from datetime import datetime, timedelta, timezone

import pytest


async def _reminder(ac, title: str, due: datetime, status: str = "Pending", **extra) -> dict:
    resp = await ac.post(
        "/api/reminders",
        json={"title": title, "dueDate": due.isoformat(), "status": status, **extra},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def _titles(resp) -> list[str]:
    return [r["title"] for r in resp.json()]


# ═══════════════════════════════════════════════════════════
# CRUD
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_standalone_reminder(auth_client):
    """A reminder needs neither a client nor a project."""
    due = datetime.now(timezone.utc) + timedelta(days=5)
    data = await _reminder(auth_client, "Renew domain", due)
    assert data["status"] == "Pending"
    assert data["clientId"] is None
    assert data["client"] is None
    assert data["isOverdue"] is False
    assert data["isUpcoming"] is False


@pytest.mark.asyncio
async def test_reminder_due_soon_is_upcoming(auth_client):
    data = await _reminder(auth_client, "Call back", datetime.now(timezone.utc) + timedelta(hours=5))
    assert data["isUpcoming"] is True
    assert data["isOverdue"] is False


@pytest.mark.asyncio
async def test_past_pending_reminder_is_overdue(auth_client):
    data = await _reminder(auth_client, "Missed", datetime.now(timezone.utc) - timedelta(hours=1))
    assert data["isOverdue"] is True
    assert data["isUpcoming"] is False


@pytest.mark.asyncio
async def test_completed_reminder_is_never_overdue(auth_client):
    data = await _reminder(
        auth_client, "Done", datetime.now(timezone.utc) - timedelta(days=1), status="Completed"
    )
    assert data["isOverdue"] is False


@pytest.mark.asyncio
async def test_create_reminder_for_client(auth_client):
    acme = (await auth_client.post("/api/clients", json={"name": "Acme", "email": "a@x.test"})).json()
    data = await _reminder(
        auth_client, "Send invoice", datetime.now(timezone.utc) + timedelta(days=2), clientId=acme["id"]
    )
    assert data["client"]["name"] == "Acme"

    client = (await auth_client.get(f"/api/clients/{acme['id']}")).json()
    assert [r["title"] for r in client["reminders"]] == ["Send invoice"]


@pytest.mark.asyncio
async def test_create_reminder_invalid_status(auth_client):
    resp = await auth_client.post(
        "/api/reminders",
        json={"title": "X", "dueDate": "2026-01-01T00:00:00Z", "status": "Snoozed"},
    )
    assert resp.status_code == 400
    assert resp.json()["details"][0]["field"] == "status"


@pytest.mark.asyncio
async def test_complete_reminder(auth_client):
    due = datetime.now(timezone.utc) - timedelta(hours=3)
    reminder = await _reminder(auth_client, "Follow up", due)
    assert reminder["isOverdue"] is True

    resp = await auth_client.put(
        f"/api/reminders/{reminder['id']}",
        json={"title": "Follow up", "dueDate": due.isoformat(), "status": "Completed"},
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "Completed"
    assert resp.json()["isOverdue"] is False


@pytest.mark.asyncio
async def test_delete_reminder(auth_client):
    reminder = await _reminder(auth_client, "Bye", datetime.now(timezone.utc))
    resp = await auth_client.delete(f"/api/reminders/{reminder['id']}")
    assert resp.json() == {"message": "Reminder deleted successfully"}
    resp = await auth_client.get(f"/api/reminders/{reminder['id']}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Reminder not found"}


# ═══════════════════════════════════════════════════════════
# Listing: windows and status groups
# ═══════════════════════════════════════════════════════════


@pytest.fixture
async def spread(auth_client):
    """Reminders spread around now, in every status."""
    now = datetime.now(timezone.utc)
    await _reminder(auth_client, "last month", now - timedelta(days=20))
    await _reminder(auth_client, "yesterday", now - timedelta(days=1))
    await _reminder(auth_client, "in two days", now + timedelta(days=2))
    await _reminder(auth_client, "in two weeks", now + timedelta(days=14))
    await _reminder(auth_client, "done", now + timedelta(days=3), status="Completed")
    await _reminder(auth_client, "dropped", now + timedelta(days=4), status="Cancelled")


@pytest.mark.asyncio
async def test_list_reminders_sorted_by_due_date(auth_client, spread):
    resp = await auth_client.get("/api/reminders")
    assert _titles(resp) == [
        "last month",
        "yesterday",
        "in two days",
        "done",
        "dropped",
        "in two weeks",
    ]


@pytest.mark.asyncio
async def test_window_upcoming7days(auth_client, spread):
    resp = await auth_client.get("/api/reminders", params={"window": "upcoming7days"})
    assert _titles(resp) == ["in two days", "done", "dropped"]


@pytest.mark.asyncio
async def test_window_past7days(auth_client, spread):
    resp = await auth_client.get("/api/reminders", params={"window": "past7days"})
    assert _titles(resp) == ["yesterday"]


@pytest.mark.asyncio
async def test_window_past_and_upcoming_split_everything(auth_client, spread):
    past = _titles(await auth_client.get("/api/reminders", params={"window": "past"}))
    upcoming = _titles(await auth_client.get("/api/reminders", params={"window": "upcoming"}))
    assert past == ["last month", "yesterday"]
    assert len(past) + len(upcoming) == 6


@pytest.mark.asyncio
async def test_window_all_is_unfiltered(auth_client, spread):
    resp = await auth_client.get("/api/reminders", params={"window": "all"})
    assert len(resp.json()) == 6


@pytest.mark.asyncio
async def test_status_filter_due(auth_client, spread):
    resp = await auth_client.get("/api/reminders", params={"statusFilter": "due"})
    assert "done" not in _titles(resp)
    assert "dropped" not in _titles(resp)
    assert len(resp.json()) == 4


@pytest.mark.asyncio
async def test_status_filter_completed_and_cancelled(auth_client, spread):
    resp = await auth_client.get("/api/reminders", params={"statusFilter": "completed"})
    assert _titles(resp) == ["done"]
    resp = await auth_client.get("/api/reminders", params={"statusFilter": "cancelled"})
    assert _titles(resp) == ["dropped"]


@pytest.mark.asyncio
async def test_status_filter_combines_with_window(auth_client, spread):
    resp = await auth_client.get(
        "/api/reminders", params={"window": "upcoming7days", "statusFilter": "due"}
    )
    assert _titles(resp) == ["in two days"]


@pytest.mark.asyncio
async def test_status_filter_rejects_unknown_value(auth_client):
    resp = await auth_client.get("/api/reminders", params={"statusFilter": "later"})
    assert resp.status_code == 400
    assert resp.json()["details"][0]["field"] == "statusFilter"


@pytest.mark.asyncio
async def test_search_reminders(auth_client, spread):
    resp = await auth_client.get("/api/reminders", params={"search": "TWO"})
    assert _titles(resp) == ["in two days", "in two weeks"]
