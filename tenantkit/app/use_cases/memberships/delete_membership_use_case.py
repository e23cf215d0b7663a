"""
Delete Membership Use Case

Removes a member from the current tenant.
"""

from uuid import UUID

from tenantkit.app.services.audit_trail import audit_entry
from tenantkit.app.services.role_guard import check_role_rank
from tenantkit.app.services.tenant_context import TenantContext, require_permission
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.entities import MembershipRole
from tenantkit.domain.errors import BUSINESS_RULE_VIOLATION, MEMBERSHIP_NOT_FOUND
from tenantkit.domain.permissions import Permission
from tenantkit.libs.result import Error, Result, Return

from .dtos import DeleteMembershipResponse


class DeleteMembershipUseCase:
    """
    Use case for removing a member.

    Business Rules:
    - Requires user:delete; target must not outrank the caller
    - The tenant's only owner cannot be removed
    - The audit entry is written before the row goes, so the acting
      membership reference is valid at insert time
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: TenantContext, membership_id: UUID
    ) -> Result[DeleteMembershipResponse]:
        permitted = require_permission(ctx, Permission.user_delete)
        if permitted.is_err():
            return permitted

        async with self.uow:
            async with self.uow.tenant_scope(ctx.tenant_id):
                await self.uow.tenants.lock(ctx.tenant_id)

                target = await self.uow.memberships.get_by_id(membership_id)
                if target is None:
                    return Return.err(Error(MEMBERSHIP_NOT_FOUND, "Membership not found"))

                ranked = check_role_rank(ctx, target_role=target.role)
                if ranked.is_err():
                    return ranked

                if target.role == MembershipRole.owner:
                    other_owners = await self.uow.memberships.count(
                        role=MembershipRole.owner, exclude_id=target.id
                    )
                    if other_owners == 0:
                        return Return.err(
                            Error(BUSINESS_RULE_VIOLATION, "Cannot remove the only owner")
                        )

                await self.uow.audit_logs.create(
                    audit_entry(
                        action="membership_deleted",
                        resource_type="membership",
                        resource_id=target.id,
                        details={"email": target.email, "role": MembershipRole(target.role).value},
                        ctx=ctx,
                    )
                )

                await self.uow.memberships.delete(target)
                await self.uow.commit()

                return Return.ok(DeleteMembershipResponse(status="deleted"))
