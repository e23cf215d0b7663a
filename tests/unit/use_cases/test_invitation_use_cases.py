from datetime import timedelta
from uuid import uuid4

import pytest

from tenantkit.app.services.caller_identity import CallerIdentity
from tenantkit.app.use_cases.invitations import (
    INVITATION_TTL,
    AcceptInvitationCommand,
    AcceptInvitationUseCase,
    CreateInvitationCommand,
    CreateInvitationUseCase,
    ExpireInvitationsUseCase,
    GetInvitationByTokenUseCase,
    ListInvitationsUseCase,
    RevokeInvitationUseCase,
)
from tenantkit.domain.base import utcnow
from tenantkit.domain.entities import (
    Invitation,
    InvitationStatus,
    MembershipRole,
    MembershipStatus,
)
from tenantkit.domain.errors import (
    BUSINESS_RULE_VIOLATION,
    INSUFFICIENT_PERMISSIONS,
    INVITATION_NOT_FOUND,
    MembershipConflict,
)


@pytest.fixture
def make_invitation(tenant):
    def factory(
        email: str = "bob@example.com",
        role: MembershipRole = MembershipRole.member,
        status: InvitationStatus = InvitationStatus.pending,
        expires_in: timedelta = INVITATION_TTL,
    ) -> Invitation:
        return Invitation(
            id=uuid4(),
            tenant_id=tenant.id,
            email=email,
            role=role,
            token=f"token-{uuid4().hex}",
            status=status,
            expires_at=utcnow() + expires_in,
        )

    return factory


# ============================================================================
# Create
# ============================================================================


@pytest.mark.asyncio
async def test_create_invitation(mock_uow, make_context):
    ctx = make_context(role=MembershipRole.admin)

    result = await CreateInvitationUseCase(mock_uow).execute(
        ctx, CreateInvitationCommand(email="bob@example.com", role=MembershipRole.member)
    )

    assert result.is_ok()
    assert result.value.status == "pending"
    assert result.value.invited_by == str(ctx.membership_id)
    assert len(result.value.token) >= 32

    invitation = mock_uow.invitations.create.call_args.args[0]
    lifetime = invitation.expires_at - invitation.created_at
    assert timedelta(days=6, hours=23) < lifetime <= INVITATION_TTL + timedelta(seconds=1)
    assert mock_uow.audit_logs.create.call_args.args[0].action == "invitation_created"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_tokens_are_unique(mock_uow, make_context):
    ctx = make_context()
    use_case = CreateInvitationUseCase(mock_uow)

    first = await use_case.execute(ctx, CreateInvitationCommand(email="a@example.com"))
    second = await use_case.execute(ctx, CreateInvitationCommand(email="b@example.com"))

    assert first.value.token != second.value.token


@pytest.mark.asyncio
async def test_live_pending_invitation_blocks_new_one(mock_uow, make_context, make_invitation):
    mock_uow.invitations.get_pending_by_email.return_value = make_invitation()

    result = await CreateInvitationUseCase(mock_uow).execute(
        make_context(), CreateInvitationCommand(email="bob@example.com")
    )

    assert result.is_err()
    assert result.error.message == "User already has a pending invitation"
    mock_uow.invitations.create.assert_not_called()


@pytest.mark.asyncio
async def test_overdue_pending_invitation_is_expired_and_replaced(mock_uow, make_context, make_invitation):
    stale = make_invitation(expires_in=timedelta(seconds=-1))
    mock_uow.invitations.get_pending_by_email.return_value = stale

    result = await CreateInvitationUseCase(mock_uow).execute(
        make_context(), CreateInvitationCommand(email="bob@example.com")
    )

    assert result.is_ok()
    assert stale.status == InvitationStatus.expired
    mock_uow.invitations.update.assert_called_once_with(stale)
    mock_uow.invitations.create.assert_called_once()


@pytest.mark.asyncio
async def test_existing_member_cannot_be_invited(mock_uow, make_context, make_membership):
    mock_uow.memberships.get_by_email.return_value = make_membership(email="bob@example.com")

    result = await CreateInvitationUseCase(mock_uow).execute(
        make_context(), CreateInvitationCommand(email="bob@example.com")
    )

    assert result.is_err()
    assert result.error.code == BUSINESS_RULE_VIOLATION


@pytest.mark.asyncio
async def test_owner_invitation_while_owner_exists(mock_uow, make_context, make_membership):
    ctx = make_context(role=MembershipRole.owner)
    mock_uow.memberships.get_owner.return_value = ctx.membership

    result = await CreateInvitationUseCase(mock_uow).execute(
        ctx, CreateInvitationCommand(email="bob@example.com", role=MembershipRole.owner)
    )

    assert result.is_err()
    assert result.error.message == "Tenant already has an owner"


@pytest.mark.asyncio
async def test_member_cannot_invite(mock_uow, make_context):
    result = await CreateInvitationUseCase(mock_uow).execute(
        make_context(role=MembershipRole.member), CreateInvitationCommand(email="bob@example.com")
    )

    assert result.is_err()
    assert result.error.code == INSUFFICIENT_PERMISSIONS


# ============================================================================
# Accept
# ============================================================================


@pytest.mark.asyncio
async def test_accept_invitation_creates_membership(mock_uow, tenant, make_invitation):
    invitation = make_invitation(role=MembershipRole.admin)
    mock_uow.invitations.get_by_id.return_value = invitation

    result = await AcceptInvitationUseCase(mock_uow).execute(
        tenant.id,
        invitation.id,
        CallerIdentity(external_id="bob"),
        AcceptInvitationCommand(first_name="Bob"),
    )

    assert result.is_ok()
    assert result.value.invitation.status == "accepted"
    assert result.value.invitation.accepted_at is not None
    assert result.value.membership.external_id == "bob"
    assert result.value.membership.email == "bob@example.com"
    assert result.value.membership.role == "admin"
    assert result.value.membership.first_name == "Bob"

    membership = mock_uow.memberships.create.call_args.args[0]
    assert membership.status == MembershipStatus.active
    entry = mock_uow.audit_logs.create.call_args.args[0]
    assert entry.action == "invitation_accepted"
    assert entry.user_id == membership.id
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_second_acceptance_fails(mock_uow, tenant, make_invitation):
    """Exactly-once: an accepted invitation cannot be accepted again"""
    invitation = make_invitation()
    mock_uow.invitations.get_by_id.return_value = invitation
    use_case = AcceptInvitationUseCase(mock_uow)

    first = await use_case.execute(tenant.id, invitation.id, CallerIdentity(external_id="bob"))
    second = await use_case.execute(tenant.id, invitation.id, CallerIdentity(external_id="mallory"))

    assert first.is_ok()
    assert second.is_err()
    assert second.error.message == "Invalid or expired invitation"
    assert mock_uow.memberships.create.call_count == 1


@pytest.mark.asyncio
async def test_accepting_overdue_invitation_expires_it(mock_uow, tenant, make_invitation):
    invitation = make_invitation(expires_in=timedelta(seconds=-1))
    mock_uow.invitations.get_by_id.return_value = invitation

    result = await AcceptInvitationUseCase(mock_uow).execute(
        tenant.id, invitation.id, CallerIdentity(external_id="bob")
    )

    assert result.is_err()
    assert result.error.message == "Invitation has expired"
    assert invitation.status == InvitationStatus.expired
    # The expired transition is kept
    mock_uow.commit.assert_called_once()
    mock_uow.memberships.create.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status", [InvitationStatus.accepted, InvitationStatus.expired, InvitationStatus.revoked]
)
async def test_terminal_invitations_cannot_be_accepted(mock_uow, tenant, make_invitation, status):
    invitation = make_invitation(status=status)
    mock_uow.invitations.get_by_id.return_value = invitation

    result = await AcceptInvitationUseCase(mock_uow).execute(
        tenant.id, invitation.id, CallerIdentity(external_id="bob")
    )

    assert result.is_err()
    assert result.error.code == BUSINESS_RULE_VIOLATION
    assert invitation.status == status


@pytest.mark.asyncio
async def test_existing_member_cannot_accept(mock_uow, tenant, make_invitation, make_membership):
    invitation = make_invitation()
    mock_uow.invitations.get_by_id.return_value = invitation
    mock_uow.memberships.get_by_external_id.return_value = make_membership()

    result = await AcceptInvitationUseCase(mock_uow).execute(
        tenant.id, invitation.id, CallerIdentity(external_id="bob")
    )

    assert result.is_err()
    assert result.error.message == "User is already a member of this tenant"
    assert invitation.status == InvitationStatus.pending


@pytest.mark.asyncio
async def test_member_of_another_tenant_cannot_accept(mock_uow, tenant, make_invitation):
    invitation = make_invitation()
    mock_uow.invitations.get_by_id.return_value = invitation
    mock_uow.memberships.create.side_effect = MembershipConflict("gina")

    result = await AcceptInvitationUseCase(mock_uow).execute(
        tenant.id, invitation.id, CallerIdentity(external_id="gina")
    )

    assert result.is_err()
    assert result.error.code == BUSINESS_RULE_VIOLATION
    assert result.error.message == "User already holds a membership in a tenant"
    mock_uow.invitations.update.assert_not_called()
    mock_uow.commit.assert_not_called()


# ============================================================================
# Revoke, expire, lookup
# ============================================================================


@pytest.mark.asyncio
async def test_revoke_pending_invitation(mock_uow, make_context, make_invitation):
    invitation = make_invitation()
    mock_uow.invitations.get_by_id.return_value = invitation

    result = await RevokeInvitationUseCase(mock_uow).execute(make_context(), invitation.id)

    assert result.is_ok()
    assert result.value.status == "revoked"
    assert mock_uow.audit_logs.create.call_args.args[0].action == "invitation_revoked"


@pytest.mark.asyncio
async def test_revoke_accepted_invitation_fails(mock_uow, make_context, make_invitation):
    invitation = make_invitation(status=InvitationStatus.accepted)
    mock_uow.invitations.get_by_id.return_value = invitation

    result = await RevokeInvitationUseCase(mock_uow).execute(make_context(), invitation.id)

    assert result.is_err()
    assert result.error.message == "Only pending invitations can be revoked"


@pytest.mark.asyncio
async def test_revoke_unknown_invitation(mock_uow, make_context):
    result = await RevokeInvitationUseCase(mock_uow).execute(make_context(), uuid4())

    assert result.is_err()
    assert result.error.code == INVITATION_NOT_FOUND


@pytest.mark.asyncio
async def test_expire_overdue_invitations(mock_uow, make_context, make_invitation):
    overdue = [make_invitation(expires_in=timedelta(hours=-1)) for _ in range(2)]
    mock_uow.invitations.list_overdue.return_value = overdue

    result = await ExpireInvitationsUseCase(mock_uow).execute(make_context(role=MembershipRole.admin))

    assert result.is_ok()
    assert result.value.expired == 2
    assert all(i.status == InvitationStatus.expired for i in overdue)
    mock_uow.audit_logs.create.assert_called_once()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_expire_with_nothing_overdue(mock_uow, make_context):
    result = await ExpireInvitationsUseCase(mock_uow).execute(make_context())

    assert result.value.expired == 0
    mock_uow.audit_logs.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_lookup_by_token(mock_uow, tenant, make_invitation):
    invitation = make_invitation()
    mock_uow.invitations.get_by_token.return_value = invitation

    found = await GetInvitationByTokenUseCase(mock_uow).execute(tenant.id, invitation.token)
    mock_uow.invitations.get_by_token.return_value = None
    missing = await GetInvitationByTokenUseCase(mock_uow).execute(tenant.id, "nope")

    assert found.value.id == str(invitation.id)
    assert "token" not in found.value.model_dump()
    assert missing.error.code == INVITATION_NOT_FOUND


@pytest.mark.asyncio
async def test_list_pending_only(mock_uow, make_context, make_invitation):
    mock_uow.invitations.list.return_value = [make_invitation()]

    result = await ListInvitationsUseCase(mock_uow).execute(
        make_context(role=MembershipRole.viewer), pending_only=True
    )

    assert len(result.value.invitations) == 1
    assert mock_uow.invitations.list.call_args.kwargs["pending_only"] is True
