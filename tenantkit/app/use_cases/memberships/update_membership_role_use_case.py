"""
Update Membership Role Use Case

Changes a member's role, guarding single-owner governance.
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

from .dtos import (
    MembershipResponse,
    UpdateMembershipRoleCommand,
    UpdateMembershipRoleResponse,
)


class UpdateMembershipRoleUseCase:
    """
    Use case for changing a member's role.

    Business Rules:
    - Requires user:update; target and new role must not outrank the caller
    - Target must exist in the tenant
    - new_role=owner fails while another owner exists
    - Demoting the owner requires at least one other active admin and a
      successor_id naming one; the successor is promoted to owner in the
      same transaction, so the tenant never loses its owner

    The successor requirement goes beyond "an admin exists": a bare
    {"role": "admin"} aimed at the owner is refused with
    BUSINESS_RULE_VIOLATION (HTTP 409) even when admins exist, because
    completing it would leave the tenant with zero owners. Clients hand
    ownership over by naming the admin that takes it in successor_id.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: TenantContext, membership_id: UUID, command: UpdateMembershipRoleCommand
    ) -> Result[UpdateMembershipRoleResponse]:
        permitted = require_permission(ctx, Permission.user_update)
        if permitted.is_err():
            return permitted

        async with self.uow:
            async with self.uow.tenant_scope(ctx.tenant_id):
                await self.uow.tenants.lock(ctx.tenant_id)

                target = await self.uow.memberships.get_by_id(membership_id)
                if target is None:
                    return Return.err(Error(MEMBERSHIP_NOT_FOUND, "Membership not found"))

                ranked = check_role_rank(ctx, target_role=target.role, granted_role=command.role)
                if ranked.is_err():
                    return ranked

                previous_role = MembershipRole(target.role)
                new_role = command.role

                if previous_role == new_role:
                    return Return.ok(
                        UpdateMembershipRoleResponse(
                            membership=MembershipResponse.from_entity(target)
                        )
                    )

                if new_role == MembershipRole.owner:
                    if await self.uow.memberships.get_owner(exclude_id=target.id):
                        return Return.err(
                            Error(BUSINESS_RULE_VIOLATION, "Tenant already has an owner")
                        )

                successor = None
                if previous_role == MembershipRole.owner:
                    other_admins = await self.uow.memberships.count(
                        role=MembershipRole.admin,
                        status=MembershipStatus.active,
                        exclude_id=target.id,
                    )
                    if other_admins == 0:
                        return Return.err(
                            Error(
                                BUSINESS_RULE_VIOLATION,
                                "Cannot demote the owner: the tenant has no other admin",
                            )
                        )

                    if command.successor_id is None:
                        return Return.err(
                            Error(
                                BUSINESS_RULE_VIOLATION,
                                "Demoting the owner requires a successor_id naming an active admin",
                            )
                        )

                    successor = await self.uow.memberships.get_by_id(command.successor_id)
                    if (
                        successor is None
                        or successor.id == target.id
                        or successor.role != MembershipRole.admin
                        or successor.status != MembershipStatus.active
                    ):
                        return Return.err(
                            Error(BUSINESS_RULE_VIOLATION, "Successor must be an active admin")
                        )

                # Demotion is flushed before promotion so the single-owner
                # index never sees two owners
                target.role = new_role
                target = await self.uow.memberships.update(target)

                if successor is not None:
                    successor.role = MembershipRole.owner
                    successor = await self.uow.memberships.update(successor)

                details = {"from": previous_role.value, "to": new_role.value}
                if successor is not None:
                    details["successor_id"] = str(successor.id)

                await self.uow.audit_logs.create(
                    audit_entry(
                        action="membership_role_updated",
                        resource_type="membership",
                        resource_id=target.id,
                        details=details,
                        ctx=ctx,
                    )
                )

                await self.uow.commit()

                return Return.ok(
                    UpdateMembershipRoleResponse(
                        membership=MembershipResponse.from_entity(target),
                        successor=(
                            MembershipResponse.from_entity(successor) if successor else None
                        ),
                    )
                )
