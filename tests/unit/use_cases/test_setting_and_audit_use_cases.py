from uuid import uuid4

import pytest

from tenantkit.app.use_cases.audit import ListAuditLogsUseCase
from tenantkit.app.use_cases.settings import (
    DeleteSettingUseCase,
    GetSettingUseCase,
    ListSettingsUseCase,
    PutSettingCommand,
    PutSettingUseCase,
)
from tenantkit.domain.entities import AuditLog, MembershipRole, TenantSetting
from tenantkit.domain.errors import INSUFFICIENT_PERMISSIONS, SETTING_NOT_FOUND


@pytest.mark.asyncio
async def test_put_creates_missing_setting(mock_uow, make_context):
    result = await PutSettingUseCase(mock_uow).execute(
        make_context(role=MembershipRole.admin), "theme", PutSettingCommand(value={"mode": "dark"})
    )

    assert result.is_ok()
    assert result.value.key == "theme"
    assert result.value.value == {"mode": "dark"}
    mock_uow.settings.create.assert_called_once()
    assert mock_uow.audit_logs.create.call_args.args[0].action == "setting_created"


@pytest.mark.asyncio
async def test_put_replaces_existing_setting(mock_uow, tenant, make_context):
    existing = TenantSetting(id=uuid4(), tenant_id=tenant.id, key="theme", value="light")
    mock_uow.settings.get.return_value = existing

    result = await PutSettingUseCase(mock_uow).execute(
        make_context(), "theme", PutSettingCommand(value="dark")
    )

    assert result.value.value == "dark"
    mock_uow.settings.create.assert_not_called()
    mock_uow.settings.update.assert_called_once_with(existing)
    assert mock_uow.audit_logs.create.call_args.args[0].action == "setting_updated"


@pytest.mark.asyncio
async def test_member_reads_but_cannot_write_settings(mock_uow, tenant, make_context):
    ctx = make_context(role=MembershipRole.member)
    mock_uow.settings.list.return_value = [
        TenantSetting(id=uuid4(), tenant_id=tenant.id, key="timezone", value="UTC")
    ]

    listed = await ListSettingsUseCase(mock_uow).execute(ctx)
    written = await PutSettingUseCase(mock_uow).execute(ctx, "timezone", PutSettingCommand(value="CET"))

    assert listed.value.settings[0].value == "UTC"
    assert written.error.code == INSUFFICIENT_PERMISSIONS


@pytest.mark.asyncio
async def test_viewer_cannot_read_settings(mock_uow, make_context):
    result = await GetSettingUseCase(mock_uow).execute(make_context(role=MembershipRole.viewer), "theme")

    assert result.is_err()
    assert result.error.code == INSUFFICIENT_PERMISSIONS


@pytest.mark.asyncio
async def test_missing_setting(mock_uow, make_context):
    got = await GetSettingUseCase(mock_uow).execute(make_context(), "missing")
    deleted = await DeleteSettingUseCase(mock_uow).execute(make_context(), "missing")

    assert got.error.code == SETTING_NOT_FOUND
    assert deleted.error.code == SETTING_NOT_FOUND


@pytest.mark.asyncio
async def test_delete_setting(mock_uow, tenant, make_context):
    existing = TenantSetting(id=uuid4(), tenant_id=tenant.id, key="theme", value="dark")
    mock_uow.settings.get.return_value = existing

    result = await DeleteSettingUseCase(mock_uow).execute(make_context(), "theme")

    assert result.value.status == "deleted"
    mock_uow.settings.delete.assert_called_once_with(existing)
    assert mock_uow.audit_logs.create.call_args.args[0].action == "setting_deleted"


@pytest.mark.asyncio
async def test_list_audit_logs(mock_uow, tenant, make_context):
    ctx = make_context(role=MembershipRole.admin)
    entry = AuditLog(
        id=uuid4(),
        tenant_id=tenant.id,
        user_id=ctx.membership_id,
        action="membership_created",
        resource_type="membership",
        details={"role": "member"},
    )
    mock_uow.audit_logs.get_paginated.return_value = ([entry], "next-page")

    result = await ListAuditLogsUseCase(mock_uow).execute(ctx, limit=10)

    assert result.is_ok()
    assert result.value.next_cursor == "next-page"
    assert result.value.entries[0].action == "membership_created"
    assert result.value.entries[0].user_id == str(ctx.membership_id)
    assert result.value.entries[0].timestamp.endswith("Z")
    mock_uow.audit_logs.get_paginated.assert_called_once_with(limit=10, cursor=None)


@pytest.mark.asyncio
async def test_member_cannot_read_audit_logs(mock_uow, make_context):
    result = await ListAuditLogsUseCase(mock_uow).execute(make_context(role=MembershipRole.member))

    assert result.is_err()
    assert result.error.code == INSUFFICIENT_PERMISSIONS
