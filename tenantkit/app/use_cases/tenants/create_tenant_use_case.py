"""
Create Tenant Use Case

Creates a tenant together with its single owner membership.
"""

import logging

from tenantkit.app.services.audit_trail import audit_entry
from tenantkit.app.services.caller_identity import CallerIdentity
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.entities import (
    Membership,
    MembershipRole,
    MembershipStatus,
    Tenant,
    TenantStatus,
)
from tenantkit.domain.errors import BUSINESS_RULE_VIOLATION, MembershipConflict
from tenantkit.libs.result import Error, Result, Return

from .dtos import CreateTenantCommand, CreateTenantResponse, OwnerInfo, TenantResponse

logger = logging.getLogger(__name__)


class CreateTenantUseCase:
    """
    Use case for creating a tenant.

    Business Rules:
    - Slug must not be taken (unique index backs the check)
    - Tenant and owner membership are created in one transaction
    - The owner is the verified caller, role=owner, status=active, and must
      not hold a membership in any tenant yet
    - Creation is recorded in the new tenant's audit log
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: CreateTenantCommand, owner: CallerIdentity
    ) -> Result[CreateTenantResponse]:
        """
        Execute create tenant use case.

        Args:
            command: Validated tenant data and owner email
            owner: Verified identity of the caller who becomes owner

        Returns:
            Result with CreateTenantResponse, or Error BUSINESS_RULE_VIOLATION
        """
        async with self.uow:
            existing = await self.uow.tenants.get_by_slug(command.slug)
            if existing:
                return Return.err(
                    Error(BUSINESS_RULE_VIOLATION, "Tenant slug already exists")
                )

            tenant = Tenant(
                slug=command.slug,
                name=command.name,
                settings=command.settings,
                status=TenantStatus.active,
            )
            tenant = await self.uow.tenants.create(tenant)

            try:
                async with self.uow.tenant_scope(tenant.id):
                    membership = Membership(
                        external_id=owner.external_id,
                        email=command.owner_email,
                        first_name=command.owner_first_name,
                        last_name=command.owner_last_name,
                        role=MembershipRole.owner,
                        status=MembershipStatus.active,
                    )
                    membership = await self.uow.memberships.create(membership)

                    await self.uow.audit_logs.create(
                        audit_entry(
                            action="tenant_created",
                            resource_type="tenant",
                            resource_id=tenant.id,
                            details={"slug": tenant.slug, "owner_id": str(membership.id)},
                        )
                    )

                    await self.uow.commit()
            except MembershipConflict:
                return Return.err(
                    Error(BUSINESS_RULE_VIOLATION, "Owner already holds a membership in a tenant")
                )

            logger.info("Tenant %s created by %s", tenant.slug, owner.external_id)

            return Return.ok(
                CreateTenantResponse(
                    tenant=TenantResponse.from_entity(tenant),
                    owner=OwnerInfo.from_entity(membership),
                )
            )
