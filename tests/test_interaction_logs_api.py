"""Interaction log API tests — calls, meetings, emails and notes.

Learn: A log hangs off a client, a project, or both. Whatever it
references must belong to the caller.
"""

from datetime import datetime, timedelta, timezone

import pytest


@pytest.fixture
async def acme(auth_client):
    resp = await auth_client.post("/api/clients", json={"name": "Acme", "email": "acme@x.test"})
    return resp.json()


@pytest.fixture
async def website(auth_client, acme):
    now = datetime.now(timezone.utc)
    resp = await auth_client.post(
        "/api/projects",
        json={
            "title": "Website",
            "budget": 1000,
            "startDate": now.isoformat(),
            "deadline": (now + timedelta(days=10)).isoformat(),
            "clientId": acme["id"],
        },
    )
    return resp.json()


# ═══════════════════════════════════════════════════════════
# Create
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_log_for_client(auth_client, acme):
    resp = await auth_client.post(
        "/api/interaction-logs",
        json={"type": "call", "notes": "Discussed scope", "clientId": acme["id"]},
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["type"] == "call"
    assert data["clientId"] == acme["id"]
    assert data["projectId"] is None
    assert data["client"]["name"] == "Acme"
    assert data["project"] is None
    # date defaults to now
    logged_at = datetime.fromisoformat(data["date"].replace("Z", "+00:00"))
    assert abs(datetime.now(timezone.utc) - logged_at) < timedelta(minutes=1)


@pytest.mark.asyncio
async def test_create_log_for_project(auth_client, website):
    resp = await auth_client.post(
        "/api/interaction-logs",
        json={
            "type": "meeting",
            "notes": "Design review",
            "date": "2026-03-01T15:00:00+01:00",
            "projectId": website["id"],
        },
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["project"]["title"] == "Website"
    assert data["date"].startswith("2026-03-01T14:00:00")


@pytest.mark.asyncio
async def test_create_log_needs_client_or_project(auth_client):
    resp = await auth_client.post("/api/interaction-logs", json={"type": "note", "notes": "Orphan"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid input data"


@pytest.mark.asyncio
async def test_create_log_rejects_unknown_type(auth_client, acme):
    resp = await auth_client.post(
        "/api/interaction-logs",
        json={"type": "fax", "notes": "Old school", "clientId": acme["id"]},
    )
    assert resp.status_code == 400
    assert resp.json()["details"][0]["field"] == "type"


@pytest.mark.asyncio
async def test_create_log_for_foreign_client(auth_client, other_client):
    theirs = (
        await other_client.post("/api/clients", json={"name": "Theirs", "email": "t@x.test"})
    ).json()
    resp = await auth_client.post(
        "/api/interaction-logs",
        json={"type": "email", "notes": "Sneaky", "clientId": theirs["id"]},
    )
    assert resp.status_code == 404
    assert resp.json() == {"error": "Client not found"}


@pytest.mark.asyncio
async def test_log_appears_on_client_and_project(auth_client, acme, website):
    await auth_client.post(
        "/api/interaction-logs",
        json={"type": "email", "notes": "Sent quote", "clientId": acme["id"], "projectId": website["id"]},
    )
    client = (await auth_client.get(f"/api/clients/{acme['id']}")).json()
    project = (await auth_client.get(f"/api/projects/{website['id']}")).json()
    assert [log["notes"] for log in client["logs"]] == ["Sent quote"]
    assert [log["notes"] for log in project["logs"]] == ["Sent quote"]


# ═══════════════════════════════════════════════════════════
# List / update / delete
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_list_logs_newest_first(auth_client, acme):
    for day, notes in ((1, "first"), (3, "third"), (2, "second")):
        await auth_client.post(
            "/api/interaction-logs",
            json={
                "type": "note",
                "notes": notes,
                "date": f"2026-05-0{day}T09:00:00Z",
                "clientId": acme["id"],
            },
        )

    resp = await auth_client.get("/api/interaction-logs")
    assert [log["notes"] for log in resp.json()] == ["third", "second", "first"]


@pytest.mark.asyncio
async def test_list_logs_filter_by_date_and_search(auth_client, acme):
    for day, kind in ((1, "call"), (15, "meeting"), (28, "call")):
        await auth_client.post(
            "/api/interaction-logs",
            json={
                "type": kind,
                "notes": f"day {day}",
                "date": f"2026-05-{day:02d}T09:00:00Z",
                "clientId": acme["id"],
            },
        )

    resp = await auth_client.get(
        "/api/interaction-logs",
        params={"startDate": "2026-05-10", "endDate": "2026-05-28"},
    )
    assert [log["notes"] for log in resp.json()] == ["day 28", "day 15"]

    resp = await auth_client.get("/api/interaction-logs", params={"search": "meeting"})
    assert [log["notes"] for log in resp.json()] == ["day 15"]


@pytest.mark.asyncio
async def test_update_log_keeps_date_when_omitted(auth_client, acme):
    log = (
        await auth_client.post(
            "/api/interaction-logs",
            json={"type": "call", "notes": "v1", "date": "2026-02-02T10:00:00Z", "clientId": acme["id"]},
        )
    ).json()

    resp = await auth_client.put(
        f"/api/interaction-logs/{log['id']}",
        json={"type": "email", "notes": "v2", "clientId": acme["id"]},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["type"] == "email"
    assert data["notes"] == "v2"
    assert data["date"].startswith("2026-02-02T10:00:00")


@pytest.mark.asyncio
async def test_delete_log(auth_client, acme):
    log = (
        await auth_client.post(
            "/api/interaction-logs",
            json={"type": "note", "notes": "bye", "clientId": acme["id"]},
        )
    ).json()
    resp = await auth_client.delete(f"/api/interaction-logs/{log['id']}")
    assert resp.json() == {"message": "Interaction log deleted successfully"}

    resp = await auth_client.get(f"/api/interaction-logs/{log['id']}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Interaction log not found"}
