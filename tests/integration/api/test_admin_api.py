from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlmodel import select

from tenantkit.domain.entities import Tenant, TenantSetting, TenantStatus


@pytest.mark.asyncio
async def test_admin_key_is_required(client: AsyncClient, acme):
    tenant_id = acme["tenant"]["id"]

    missing = await client.post(f"/admin/tenants/{tenant_id}/suspend")
    wrong = await client.post(
        f"/admin/tenants/{tenant_id}/suspend", headers={"X-Admin-API-Key": "guess"}
    )

    assert missing.status_code == 401
    assert wrong.status_code == 401
    assert wrong.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_suspend_and_activate_tenant(client: AsyncClient, auth, admin_headers, acme):
    tenant_id = acme["tenant"]["id"]

    suspended = await client.post(f"/admin/tenants/{tenant_id}/suspend", headers=admin_headers)
    suspended_again = await client.post(f"/admin/tenants/{tenant_id}/suspend", headers=admin_headers)
    activated = await client.post(f"/admin/tenants/{tenant_id}/activate", headers=admin_headers)

    assert suspended.status_code == 200
    assert suspended.json()["status"] == "suspended"
    assert suspended_again.status_code == 409
    assert activated.status_code == 200
    assert activated.json()["status"] == "active"

    audit = await client.get("/audit-logs", headers=auth("alice", tenant="acme"))
    entries = {e["action"]: e for e in audit.json()["entries"]}
    assert entries["tenant_suspended"]["user_id"] is None
    assert entries["tenant_suspended"]["details"] == {"previous_status": "active"}
    assert "tenant_activated" in entries


@pytest.mark.asyncio
async def test_suspended_tenant_still_resolves(client: AsyncClient, auth, admin_headers, acme):
    await client.post(f"/admin/tenants/{acme['tenant']['id']}/suspend", headers=admin_headers)

    me = await client.get("/me", headers=auth("alice", tenant="acme"))

    assert me.status_code == 200
    assert me.json()["tenant"]["status"] == "suspended"


@pytest.mark.asyncio
async def test_unknown_tenant(client: AsyncClient, admin_headers):
    response = await client.post(f"/admin/tenants/{uuid4()}/activate", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "TENANT_NOT_FOUND"


@pytest.mark.asyncio
async def test_tenant_with_members_is_not_deleted(client: AsyncClient, admin_headers, acme, db_session):
    response = await client.delete(f"/admin/tenants/{acme['tenant']['id']}", headers=admin_headers)

    assert response.status_code == 409
    assert response.json()["error"]["details"] == {"member_count": 1}

    result = await db_session.exec(select(Tenant).where(Tenant.slug == "acme"))
    assert result.one().status == TenantStatus.active


@pytest.mark.asyncio
async def test_empty_tenant_is_deleted_with_its_data(client: AsyncClient, admin_headers, db_session):
    tenant = Tenant(slug="empty", name="Empty Tenant")
    db_session.add(tenant)
    await db_session.flush()
    db_session.add(TenantSetting(tenant_id=tenant.id, key="theme", value="dark"))
    await db_session.commit()
    tenant_id = tenant.id

    response = await client.delete(f"/admin/tenants/{tenant_id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"status": "deleted"}

    tenants = await db_session.exec(select(Tenant).where(Tenant.id == tenant_id))
    settings = await db_session.exec(select(TenantSetting).where(TenantSetting.tenant_id == tenant_id))
    assert tenants.one_or_none() is None
    assert settings.all() == []
