"""
Revoke Invitation Use Case
"""

from uuid import UUID

from tenantkit.app.services.audit_trail import audit_entry
from tenantkit.app.services.tenant_context import TenantContext, require_permission
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.entities import InvitationStatus
from tenantkit.domain.errors import BUSINESS_RULE_VIOLATION, INVITATION_NOT_FOUND
from tenantkit.domain.permissions import Permission
from tenantkit.libs.result import Error, Result, Return

from .dtos import InvitationResponse


class RevokeInvitationUseCase:
    """
    Use case for revoking a pending invitation.

    Business Rules:
    - Requires invitation:delete
    - Only pending invitations can be revoked; revoked is terminal
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: TenantContext, invitation_id: UUID) -> Result[InvitationResponse]:
        permitted = require_permission(ctx, Permission.invitation_delete)
        if permitted.is_err():
            return permitted

        async with self.uow:
            async with self.uow.tenant_scope(ctx.tenant_id):
                await self.uow.tenants.lock(ctx.tenant_id)

                invitation = await self.uow.invitations.get_by_id(invitation_id)
                if invitation is None:
                    return Return.err(Error(INVITATION_NOT_FOUND, "Invitation not found"))

                if not invitation.is_pending():
                    return Return.err(
                        Error(BUSINESS_RULE_VIOLATION, "Only pending invitations can be revoked")
                    )

                invitation.status = InvitationStatus.revoked
                invitation = await self.uow.invitations.update(invitation)

                await self.uow.audit_logs.create(
                    audit_entry(
                        action="invitation_revoked",
                        resource_type="invitation",
                        resource_id=invitation.id,
                        details={"email": invitation.email},
                        ctx=ctx,
                    )
                )

                await self.uow.commit()

                return Return.ok(InvitationResponse.from_entity(invitation))
