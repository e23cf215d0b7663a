"""
Update Membership Status Use Case

Suspends, cancels or reactivates a member.
"""

from uuid import UUID

from tenantkit.app.services.audit_trail import audit_entry
from tenantkit.app.services.role_guard import check_role_rank
from tenantkit.app.services.tenant_context import TenantContext, require_permission
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.entities import MembershipRole, MembershipStatus
from tenantkit.domain.errors import BUSINESS_RULE_VIOLATION, MEMBERSHIP_NOT_FOUND
from tenantkit.domain.permissions import Permission
from tenantkit.libs.result import Error, Result, Return

from .dtos import MembershipResponse, UpdateMembershipStatusCommand


class UpdateMembershipStatusUseCase:
    """
    Use case for changing a member's status.

    Business Rules:
    - Requires user:update; target must not outrank the caller
    - The sole active owner can be neither suspended nor cancelled
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: TenantContext, membership_id: UUID, command: UpdateMembershipStatusCommand
    ) -> Result[MembershipResponse]:
        permitted = require_permission(ctx, Permission.user_update)
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

                previous_status = MembershipStatus(target.status)

                if (
                    target.role == MembershipRole.owner
                    and previous_status == MembershipStatus.active
                    and command.status != MembershipStatus.active
                ):
                    other_active_owners = await self.uow.memberships.count(
                        role=MembershipRole.owner,
                        status=MembershipStatus.active,
                        exclude_id=target.id,
                    )
                    if other_active_owners == 0:
                        return Return.err(
                            Error(
                                BUSINESS_RULE_VIOLATION,
                                f"Cannot set the only active owner to {command.status.value}",
                            )
                        )

                target.status = command.status
                target = await self.uow.memberships.update(target)

                await self.uow.audit_logs.create(
                    audit_entry(
                        action="membership_status_updated",
                        resource_type="membership",
                        resource_id=target.id,
                        details={"from": previous_status.value, "to": command.status.value},
                        ctx=ctx,
                    )
                )

                await self.uow.commit()

                return Return.ok(MembershipResponse.from_entity(target))
