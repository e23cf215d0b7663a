from tenantkit.app.services.tenant_context import TenantContext, require_permission
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.base import utcnow
from tenantkit.domain.entities import MembershipRole
from tenantkit.domain.permissions import Permission
from tenantkit.libs.result import Result, Return

from .dtos import TenantStatsResponse


class GetTenantStatsUseCase:
    """Membership and invitation counts for the current tenant (tenant:read)."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: TenantContext) -> Result[TenantStatsResponse]:
        permitted = require_permission(ctx, Permission.tenant_read)
        if permitted.is_err():
            return permitted

        async with self.uow:
            async with self.uow.tenant_scope(ctx.tenant_id):
                total = await self.uow.memberships.count()
                owners = await self.uow.memberships.count(role=MembershipRole.owner)
                admins = await self.uow.memberships.count(role=MembershipRole.admin)
                pending = await self.uow.invitations.count_pending(utcnow())

            return Return.ok(
                TenantStatsResponse(
                    total_users=total,
                    admin_users=owners + admins,
                    pending_invitations=pending,
                )
            )
