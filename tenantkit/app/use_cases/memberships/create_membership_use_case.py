"""
Create Membership Use Case

Adds a member to the current tenant.
"""

from tenantkit.app.services.audit_trail import audit_entry
from tenantkit.app.services.role_guard import check_role_rank
from tenantkit.app.services.tenant_context import TenantContext, require_permission
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.entities import Membership, MembershipRole
from tenantkit.domain.errors import BUSINESS_RULE_VIOLATION, MembershipConflict
from tenantkit.domain.permissions import Permission
from tenantkit.libs.result import Error, Result, Return

from .dtos import CreateMembershipCommand, MembershipResponse


class CreateMembershipUseCase:
    """
    Use case for adding a member to a tenant.

    Business Rules:
    - Requires user:create and a role not ranked above the caller's
    - external_id must be new across all tenants, email within the tenant
    - role=owner fails while the tenant has an owner
    - Checks and insert run in one transaction under the tenant row lock
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: TenantContext, command: CreateMembershipCommand
    ) -> Result[MembershipResponse]:
        permitted = require_permission(ctx, Permission.user_create)
        if permitted.is_err():
            return permitted

        ranked = check_role_rank(ctx, granted_role=command.role)
        if ranked.is_err():
            return ranked

        async with self.uow:
            try:
                async with self.uow.tenant_scope(ctx.tenant_id):
                    await self.uow.tenants.lock(ctx.tenant_id)

                    if await self.uow.memberships.get_by_external_id(command.external_id):
                        return Return.err(
                            Error(BUSINESS_RULE_VIOLATION, "User is already a member of this tenant")
                        )

                    if await self.uow.memberships.get_by_email(command.email):
                        return Return.err(
                            Error(BUSINESS_RULE_VIOLATION, "Email is already used in this tenant")
                        )

                    if command.role == MembershipRole.owner:
                        if await self.uow.memberships.get_owner():
                            return Return.err(
                                Error(BUSINESS_RULE_VIOLATION, "Tenant already has an owner")
                            )

                    membership = Membership(
                        external_id=command.external_id,
                        email=command.email,
                        first_name=command.first_name,
                        last_name=command.last_name,
                        role=command.role,
                        status=command.status,
                        member_metadata=command.metadata,
                    )
                    membership = await self.uow.memberships.create(membership)

                    await self.uow.audit_logs.create(
                        audit_entry(
                            action="membership_created",
                            resource_type="membership",
                            resource_id=membership.id,
                            details={"email": membership.email, "role": command.role.value},
                            ctx=ctx,
                        )
                    )

                    await self.uow.commit()

                    return Return.ok(MembershipResponse.from_entity(membership))
            except MembershipConflict:
                return Return.err(
                    Error(BUSINESS_RULE_VIOLATION, "User already holds a membership in a tenant")
                )
