"""
Activate Tenant Use Case

Admin endpoint for reactivating a suspended or cancelled tenant.
"""

from typing import Optional
from uuid import UUID

from tenantkit.app.services.audit_trail import audit_entry
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.entities import TenantStatus
from tenantkit.domain.errors import BUSINESS_RULE_VIOLATION, TENANT_NOT_FOUND
from tenantkit.libs.result import Error, Result, Return

from .dtos import TenantResponse


class ActivateTenantUseCase:
    """
    Activate a tenant.

    Business Logic:
    1. Validate tenant exists
    2. Reject if already active
    3. Update status and record a system audit entry
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, ip_address: Optional[str] = None
    ) -> Result[TenantResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.lock(tenant_id)
            if not tenant:
                return Return.err(Error(TENANT_NOT_FOUND, "Tenant not found"))

            if tenant.status == TenantStatus.active:
                return Return.err(
                    Error(BUSINESS_RULE_VIOLATION, "Tenant is already active")
                )

            previous = tenant.status
            tenant.status = TenantStatus.active
            tenant = await self.uow.tenants.update(tenant)

            async with self.uow.tenant_scope(tenant.id):
                await self.uow.audit_logs.create(
                    audit_entry(
                        action="tenant_activated",
                        resource_type="tenant",
                        resource_id=tenant.id,
                        details={"previous_status": previous.value},
                        ip_address=ip_address,
                    )
                )
                await self.uow.commit()

            return Return.ok(TenantResponse.from_entity(tenant))
