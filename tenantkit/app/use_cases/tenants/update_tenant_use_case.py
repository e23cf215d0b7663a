"""
Update Tenant Use Case

Partial update of tenant name, slug and settings document.
"""

from tenantkit.app.services.audit_trail import audit_entry
from tenantkit.app.services.tenant_context import TenantContext, require_permission
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.errors import BUSINESS_RULE_VIOLATION, TENANT_NOT_FOUND
from tenantkit.domain.permissions import Permission
from tenantkit.libs.result import Error, Result, Return

from .dtos import TenantResponse, UpdateTenantCommand


class UpdateTenantUseCase:
    """
    Use case for updating the current tenant.

    Business Rules:
    - Requires tenant:update
    - A new slug must not belong to another tenant
    - Only fields present in the command are changed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: TenantContext, command: UpdateTenantCommand
    ) -> Result[TenantResponse]:
        permitted = require_permission(ctx, Permission.tenant_update)
        if permitted.is_err():
            return permitted

        async with self.uow:
            async with self.uow.tenant_scope(ctx.tenant_id):
                tenant = await self.uow.tenants.lock(ctx.tenant_id)
                if tenant is None:
                    return Return.err(Error(TENANT_NOT_FOUND, "Tenant not found"))

                changes = command.model_dump(exclude_unset=True, exclude_none=True)

                new_slug = changes.get("slug")
                if new_slug and new_slug != tenant.slug:
                    taken = await self.uow.tenants.get_by_slug(new_slug)
                    if taken:
                        return Return.err(
                            Error(BUSINESS_RULE_VIOLATION, "Tenant slug already exists")
                        )

                previous = {field: getattr(tenant, field) for field in changes}
                for field, value in changes.items():
                    setattr(tenant, field, value)
                tenant = await self.uow.tenants.update(tenant)

                await self.uow.audit_logs.create(
                    audit_entry(
                        action="tenant_updated",
                        resource_type="tenant",
                        resource_id=tenant.id,
                        details={"changed": sorted(changes), "previous_slug": previous.get("slug")},
                        ctx=ctx,
                    )
                )

                await self.uow.commit()

                return Return.ok(TenantResponse.from_entity(tenant))
