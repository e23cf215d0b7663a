from tenantkit.app.services.tenant_context import TenantContext, require_permission
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.permissions import Permission
from tenantkit.libs.result import Result, Return

from .dtos import MembershipListResponse, MembershipResponse


class ListMembershipsUseCase:
    """All memberships of the current tenant, newest first (user:read)."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: TenantContext) -> Result[MembershipListResponse]:
        permitted = require_permission(ctx, Permission.user_read)
        if permitted.is_err():
            return permitted

        async with self.uow:
            async with self.uow.tenant_scope(ctx.tenant_id):
                memberships = await self.uow.memberships.list()

            return Return.ok(
                MembershipListResponse(
                    memberships=[MembershipResponse.from_entity(m) for m in memberships]
                )
            )
