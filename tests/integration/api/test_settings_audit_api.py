from uuid import UUID

import pytest
from httpx import AsyncClient

from tenantkit.domain.base import utcnow
from tenantkit.domain.entities import AuditLog


@pytest.mark.asyncio
async def test_setting_lifecycle(client: AsyncClient, auth, acme):
    headers = auth("alice", tenant="acme")

    created = await client.put("/settings/billing.plan", json={"value": {"tier": "pro"}}, headers=headers)
    replaced = await client.put("/settings/billing.plan", json={"value": {"tier": "team"}}, headers=headers)
    fetched = await client.get("/settings/billing.plan", headers=headers)
    listed = await client.get("/settings", headers=headers)
    deleted = await client.delete("/settings/billing.plan", headers=headers)
    missing = await client.get("/settings/billing.plan", headers=headers)

    assert created.status_code == 200
    assert replaced.json()["value"] == {"tier": "team"}
    assert fetched.json()["value"] == {"tier": "team"}
    assert [s["key"] for s in listed.json()["settings"]] == ["billing.plan"]
    assert deleted.json() == {"status": "deleted"}
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "SETTING_NOT_FOUND"

    audit = await client.get("/audit-logs", headers=headers)
    actions = [e["action"] for e in audit.json()["entries"]]
    assert actions[:3] == ["setting_deleted", "setting_updated", "setting_created"]


@pytest.mark.asyncio
async def test_setting_key_is_validated(client: AsyncClient, auth, acme):
    response = await client.put(
        "/settings/bad key!", json={"value": 1}, headers=auth("alice", tenant="acme")
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_viewer_cannot_read_settings(client: AsyncClient, auth, acme):
    await client.post(
        "/memberships",
        json={"external_id": "vic", "email": "vic@acme.com", "role": "viewer"},
        headers=auth("alice", tenant="acme"),
    )

    response = await client.get("/settings", headers=auth("vic", tenant="acme"))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_audit_log_pagination(client: AsyncClient, auth, acme):
    headers = auth("alice", tenant="acme")
    for key in ("a", "b", "c"):
        await client.put(f"/settings/{key}", json={"value": key}, headers=headers)

    first = await client.get("/audit-logs?limit=2", headers=headers)
    cursor = first.json()["next_cursor"]
    second = await client.get("/audit-logs", params={"limit": 2, "cursor": cursor}, headers=headers)

    first_ids = {e["id"] for e in first.json()["entries"]}
    second_ids = {e["id"] for e in second.json()["entries"]}
    assert len(first_ids) == 2
    assert cursor is not None
    assert first_ids.isdisjoint(second_ids)
    assert len(first_ids | second_ids) == 4


@pytest.mark.asyncio
async def test_audit_pages_split_entries_sharing_a_timestamp(client: AsyncClient, auth, acme, db_session):
    tenant_id = UUID(acme["tenant"]["id"])
    stamp = utcnow()
    for n in range(5):
        db_session.add(AuditLog(tenant_id=tenant_id, action=f"bulk_{n}", created_at=stamp))
    await db_session.commit()

    headers = auth("alice", tenant="acme")
    seen = []
    cursor = None
    for _ in range(10):
        params = {"limit": 2, **({"cursor": cursor} if cursor else {})}
        page = (await client.get("/audit-logs", params=params, headers=headers)).json()
        seen.extend(e["id"] for e in page["entries"])
        cursor = page["next_cursor"]
        if cursor is None:
            break

    assert len(seen) == 6
    assert len(set(seen)) == 6


@pytest.mark.asyncio
async def test_audit_limit_bounds(client: AsyncClient, auth, acme):
    response = await client.get("/audit-logs?limit=500", headers=auth("alice", tenant="acme"))

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_member_cannot_read_audit_logs(client: AsyncClient, auth, acme):
    await client.post(
        "/memberships",
        json={"external_id": "dave", "email": "dave@acme.com"},
        headers=auth("alice", tenant="acme"),
    )

    response = await client.get("/audit-logs", headers=auth("dave", tenant="acme"))

    assert response.status_code == 403
