"""
Expire Invitations Use Case

Bulk pending -> expired transition for overdue invitations of a tenant.
"""

import logging

from tenantkit.app.services.audit_trail import audit_entry
from tenantkit.app.services.tenant_context import TenantContext, require_permission
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.base import utcnow
from tenantkit.domain.entities import InvitationStatus
from tenantkit.domain.permissions import Permission
from tenantkit.libs.result import Result, Return

from .dtos import ExpireInvitationsResponse

logger = logging.getLogger(__name__)


class ExpireInvitationsUseCase:
    """
    Use case for expiring overdue invitations.

    Business Rules:
    - Requires invitation:delete
    - Only pending invitations with now >= expires_at are touched
    - One audit entry per run, none when nothing expired
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: TenantContext) -> Result[ExpireInvitationsResponse]:
        permitted = require_permission(ctx, Permission.invitation_delete)
        if permitted.is_err():
            return permitted

        async with self.uow:
            async with self.uow.tenant_scope(ctx.tenant_id):
                overdue = await self.uow.invitations.list_overdue(utcnow())

                for invitation in overdue:
                    invitation.status = InvitationStatus.expired
                    await self.uow.invitations.update(invitation)

                if overdue:
                    await self.uow.audit_logs.create(
                        audit_entry(
                            action="invitations_expired",
                            resource_type="invitation",
                            details={"invitation_ids": [str(i.id) for i in overdue]},
                            ctx=ctx,
                        )
                    )
                    await self.uow.commit()
                    logger.info(
                        "Expired %d invitation(s) in tenant %s", len(overdue), ctx.tenant.slug
                    )

            return Return.ok(ExpireInvitationsResponse(expired=len(overdue)))
