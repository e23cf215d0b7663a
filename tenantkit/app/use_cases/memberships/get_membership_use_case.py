from uuid import UUID

from tenantkit.app.services.tenant_context import TenantContext, require_permission
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.errors import MEMBERSHIP_NOT_FOUND
from tenantkit.domain.permissions import Permission
from tenantkit.libs.result import Error, Result, Return

from .dtos import MembershipResponse


class GetMembershipUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: TenantContext, membership_id: UUID) -> Result[MembershipResponse]:
        permitted = require_permission(ctx, Permission.user_read)
        if permitted.is_err():
            return permitted

        async with self.uow:
            async with self.uow.tenant_scope(ctx.tenant_id):
                membership = await self.uow.memberships.get_by_id(membership_id)

            if membership is None:
                return Return.err(Error(MEMBERSHIP_NOT_FOUND, "Membership not found"))

            return Return.ok(MembershipResponse.from_entity(membership))
