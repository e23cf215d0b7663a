from uuid import uuid4

import pytest

from tenantkit.app.services.caller_identity import CallerIdentity
from tenantkit.app.use_cases.tenants import (
    ActivateTenantUseCase,
    CreateTenantCommand,
    CreateTenantUseCase,
    DeleteTenantUseCase,
    GetTenantStatsUseCase,
    SuspendTenantUseCase,
    UpdateTenantCommand,
    UpdateTenantUseCase,
)
from tenantkit.domain.entities import MembershipRole, MembershipStatus, Tenant, TenantStatus
from tenantkit.domain.errors import (
    BUSINESS_RULE_VIOLATION,
    INSUFFICIENT_PERMISSIONS,
    TENANT_NOT_FOUND,
    MembershipConflict,
)


def create_command(**overrides) -> CreateTenantCommand:
    data = {"slug": "acme", "name": "Acme Corp", "owner_email": "alice@acme.com"}
    data.update(overrides)
    return CreateTenantCommand(**data)


@pytest.mark.asyncio
async def test_create_tenant_with_owner(mock_uow):
    """Tenant and its owner membership are created in one transaction"""
    result = await CreateTenantUseCase(mock_uow).execute(
        create_command(settings={"theme": "dark"}), CallerIdentity(external_id="alice")
    )

    assert result.is_ok()
    assert result.value.tenant.slug == "acme"
    assert result.value.tenant.status == "active"
    assert result.value.tenant.settings == {"theme": "dark"}
    assert result.value.owner.external_id == "alice"
    assert result.value.owner.role == "owner"
    assert result.value.owner.status == "active"

    mock_uow.tenants.create.assert_called_once()
    created_tenant = mock_uow.tenants.create.call_args.args[0]
    mock_uow.tenant_scope.assert_called_once_with(created_tenant.id)

    owner = mock_uow.memberships.create.call_args.args[0]
    assert owner.role == MembershipRole.owner
    assert owner.status == MembershipStatus.active
    assert owner.email == "alice@acme.com"

    entry = mock_uow.audit_logs.create.call_args.args[0]
    assert entry.action == "tenant_created"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_create_tenant_duplicate_slug(mock_uow, tenant):
    mock_uow.tenants.get_by_slug.return_value = tenant

    result = await CreateTenantUseCase(mock_uow).execute(
        create_command(), CallerIdentity(external_id="bob")
    )

    assert result.is_err()
    assert result.error.code == BUSINESS_RULE_VIOLATION
    assert result.error.message == "Tenant slug already exists"
    mock_uow.tenants.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_owner_with_existing_membership_cannot_create_tenant(mock_uow):
    mock_uow.memberships.create.side_effect = MembershipConflict("alice")

    result = await CreateTenantUseCase(mock_uow).execute(
        create_command(slug="acme-two"), CallerIdentity(external_id="alice")
    )

    assert result.is_err()
    assert result.error.code == BUSINESS_RULE_VIOLATION
    assert result.error.message == "Owner already holds a membership in a tenant"
    mock_uow.commit.assert_not_called()


@pytest.mark.parametrize("slug", ["A", "Acme", "acme_corp", "a" * 51, "acme corp"])
def test_create_tenant_command_rejects_bad_slugs(slug):
    with pytest.raises(ValueError):
        create_command(slug=slug)


def test_create_tenant_command_rejects_bad_owner_email():
    with pytest.raises(ValueError):
        create_command(owner_email="not-an-email")


@pytest.mark.asyncio
async def test_update_tenant_changes_only_given_fields(mock_uow, tenant, make_context):
    mock_uow.tenants.lock.return_value = tenant
    ctx = make_context(role=MembershipRole.admin)

    result = await UpdateTenantUseCase(mock_uow).execute(ctx, UpdateTenantCommand(name="Acme Inc"))

    assert result.is_ok()
    assert result.value.name == "Acme Inc"
    assert result.value.slug == "acme"
    entry = mock_uow.audit_logs.create.call_args.args[0]
    assert entry.action == "tenant_updated"
    assert entry.details["changed"] == ["name"]
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_update_tenant_slug_taken(mock_uow, tenant, make_context):
    mock_uow.tenants.lock.return_value = tenant
    mock_uow.tenants.get_by_slug.return_value = Tenant(id=uuid4(), slug="globex", name="Globex")

    result = await UpdateTenantUseCase(mock_uow).execute(
        make_context(role=MembershipRole.owner), UpdateTenantCommand(slug="globex")
    )

    assert result.is_err()
    assert result.error.code == BUSINESS_RULE_VIOLATION
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_member_cannot_update_tenant(mock_uow, make_context):
    result = await UpdateTenantUseCase(mock_uow).execute(
        make_context(role=MembershipRole.member), UpdateTenantCommand(name="Hijacked")
    )

    assert result.is_err()
    assert result.error.code == INSUFFICIENT_PERMISSIONS
    mock_uow.__aenter__.assert_not_called()


@pytest.mark.asyncio
async def test_suspend_and_activate_tenant(mock_uow, tenant):
    mock_uow.tenants.lock.return_value = tenant

    suspended = await SuspendTenantUseCase(mock_uow).execute(tenant.id, ip_address="127.0.0.1")

    assert suspended.is_ok()
    assert suspended.value.status == "suspended"
    entry = mock_uow.audit_logs.create.call_args.args[0]
    assert entry.action == "tenant_suspended"
    assert entry.user_id is None
    assert entry.details == {"previous_status": "active"}

    activated = await ActivateTenantUseCase(mock_uow).execute(tenant.id)

    assert activated.is_ok()
    assert activated.value.status == "active"
    assert mock_uow.audit_logs.create.call_args.args[0].action == "tenant_activated"


@pytest.mark.asyncio
async def test_suspend_already_suspended_tenant(mock_uow, tenant):
    tenant.status = TenantStatus.suspended
    mock_uow.tenants.lock.return_value = tenant

    result = await SuspendTenantUseCase(mock_uow).execute(tenant.id)

    assert result.is_err()
    assert result.error.message == "Tenant is already suspended"
    mock_uow.tenants.update.assert_not_called()


@pytest.mark.asyncio
async def test_activate_unknown_tenant(mock_uow):
    mock_uow.tenants.lock.return_value = None

    result = await ActivateTenantUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == TENANT_NOT_FOUND


@pytest.mark.asyncio
async def test_delete_tenant_with_members_is_refused(mock_uow, tenant):
    mock_uow.tenants.lock.return_value = tenant
    mock_uow.memberships.count.return_value = 3

    result = await DeleteTenantUseCase(mock_uow).execute(tenant.id)

    assert result.is_err()
    assert result.error.code == BUSINESS_RULE_VIOLATION
    assert result.error.details == {"member_count": 3}
    mock_uow.tenants.delete.assert_not_called()


@pytest.mark.asyncio
async def test_delete_empty_tenant(mock_uow, tenant):
    mock_uow.tenants.lock.return_value = tenant
    mock_uow.memberships.count.return_value = 0

    result = await DeleteTenantUseCase(mock_uow).execute(tenant.id)

    assert result.is_ok()
    assert result.value.status == "deleted"
    mock_uow.tenants.delete.assert_called_once_with(tenant)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_tenant_stats(mock_uow, make_context):
    async def count(role=None, status=None, exclude_id=None):
        return {None: 7, MembershipRole.owner: 1, MembershipRole.admin: 2}[role]

    mock_uow.memberships.count.side_effect = count
    mock_uow.invitations.count_pending.return_value = 4

    result = await GetTenantStatsUseCase(mock_uow).execute(make_context(role=MembershipRole.viewer))

    assert result.is_ok()
    assert result.value.total_users == 7
    assert result.value.admin_users == 3
    assert result.value.pending_invitations == 4
