from tenantkit.app.services.tenant_context import TenantContext, require_permission
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.base import utcnow
from tenantkit.domain.permissions import Permission
from tenantkit.libs.result import Result, Return

from .dtos import InvitationListResponse, InvitationResponse


class ListInvitationsUseCase:
    """
    Invitations of the current tenant, newest first.

    pending_only keeps pending invitations that have not yet passed their
    expiry.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: TenantContext, pending_only: bool = False
    ) -> Result[InvitationListResponse]:
        permitted = require_permission(ctx, Permission.user_read)
        if permitted.is_err():
            return permitted

        async with self.uow:
            async with self.uow.tenant_scope(ctx.tenant_id):
                invitations = await self.uow.invitations.list(
                    pending_only=pending_only, now=utcnow()
                )

            return Return.ok(
                InvitationListResponse(
                    invitations=[InvitationResponse.from_entity(i) for i in invitations]
                )
            )
