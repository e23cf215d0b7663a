"""
Create Invitation Use Case

Invites an email address to join the current tenant with a role.
"""

import secrets
from datetime import timedelta

from tenantkit.app.services.audit_trail import audit_entry
from tenantkit.app.services.role_guard import check_role_rank
from tenantkit.app.services.tenant_context import TenantContext, require_permission
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.base import utcnow
from tenantkit.domain.entities import Invitation, InvitationStatus, MembershipRole
from tenantkit.domain.errors import BUSINESS_RULE_VIOLATION
from tenantkit.domain.permissions import Permission
from tenantkit.libs.result import Error, Result, Return

from .dtos import CreateInvitationCommand, CreateInvitationResponse

INVITATION_TTL = timedelta(days=7)


class CreateInvitationUseCase:
    """
    Use case for inviting a user to a tenant.

    Business Rules:
    - Requires invitation:create and a role not ranked above the caller's
    - Fails if the email already belongs to a member
    - Fails if a live pending invitation exists for the email; an overdue
      one is expired first and no longer blocks
    - role=owner fails while the tenant has an owner
    - Token: secrets.token_urlsafe(32); expiry: 7 days from creation
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: TenantContext, command: CreateInvitationCommand
    ) -> Result[CreateInvitationResponse]:
        permitted = require_permission(ctx, Permission.invitation_create)
        if permitted.is_err():
            return permitted

        ranked = check_role_rank(ctx, granted_role=command.role)
        if ranked.is_err():
            return ranked

        async with self.uow:
            async with self.uow.tenant_scope(ctx.tenant_id):
                await self.uow.tenants.lock(ctx.tenant_id)
                now = utcnow()

                if await self.uow.memberships.get_by_email(command.email):
                    return Return.err(
                        Error(BUSINESS_RULE_VIOLATION, "User is already a member of this tenant")
                    )

                pending = await self.uow.invitations.get_pending_by_email(command.email)
                if pending is not None and pending.is_overdue(now):
                    pending.status = InvitationStatus.expired
                    await self.uow.invitations.update(pending)
                    pending = None

                if pending is not None:
                    return Return.err(
                        Error(BUSINESS_RULE_VIOLATION, "User already has a pending invitation")
                    )

                if command.role == MembershipRole.owner:
                    if await self.uow.memberships.get_owner():
                        return Return.err(
                            Error(BUSINESS_RULE_VIOLATION, "Tenant already has an owner")
                        )

                invitation = Invitation(
                    email=command.email,
                    role=command.role,
                    invited_by=ctx.membership_id,
                    token=secrets.token_urlsafe(32),
                    status=InvitationStatus.pending,
                    expires_at=now + INVITATION_TTL,
                )
                invitation = await self.uow.invitations.create(invitation)

                await self.uow.audit_logs.create(
                    audit_entry(
                        action="invitation_created",
                        resource_type="invitation",
                        resource_id=invitation.id,
                        details={"email": invitation.email, "role": command.role.value},
                        ctx=ctx,
                    )
                )

                await self.uow.commit()

                return Return.ok(CreateInvitationResponse.from_entity(invitation))
