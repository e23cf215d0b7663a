"""
Delete Tenant Use Case

Hard deletion of a tenant that no longer has any memberships.
"""

import logging
from uuid import UUID

from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.errors import BUSINESS_RULE_VIOLATION, TENANT_NOT_FOUND
from tenantkit.libs.result import Error, Result, Return

from .dtos import DeleteTenantResponse

logger = logging.getLogger(__name__)


class DeleteTenantUseCase:
    """
    Use case for deleting a tenant.

    Business Rules:
    - Fails unless the tenant has zero memberships
    - Invitations, audit logs and settings go with it (ON DELETE CASCADE),
      so the deletion is logged rather than audited
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID) -> Result[DeleteTenantResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.lock(tenant_id)
            if not tenant:
                return Return.err(Error(TENANT_NOT_FOUND, "Tenant not found"))

            async with self.uow.tenant_scope(tenant.id):
                member_count = await self.uow.memberships.count()

            if member_count > 0:
                return Return.err(
                    Error(
                        BUSINESS_RULE_VIOLATION,
                        "Cannot delete tenant with active users",
                        details={"member_count": member_count},
                    )
                )

            await self.uow.tenants.delete(tenant)
            await self.uow.commit()

            logger.info("Tenant %s (%s) deleted", tenant.slug, tenant_id)

            return Return.ok(DeleteTenantResponse(status="deleted"))
