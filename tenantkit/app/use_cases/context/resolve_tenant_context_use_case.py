"""
Resolve Tenant Context Use Case

Binds an inbound request to exactly one tenant and the caller's membership
in it, before any tenant-scoped data access happens.
"""

import logging
from typing import Optional

from tenantkit.app.services.caller_identity import CallerIdentity
from tenantkit.app.services.membership_validator import MembershipValidator
from tenantkit.app.services.tenant_context import TenantContext
from tenantkit.app.services.tenant_gateway import TenantGateway
from tenantkit.app.services.tenant_resolver import RequestSnapshot, TenantResolver
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.entities import Tenant
from tenantkit.domain.errors import TENANT_NOT_FOUND
from tenantkit.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class ResolveTenantUseCase:
    """
    Resolve the tenant named by a request, without checking membership.

    Used where the caller is not yet a member (accepting an invitation).
    A required slug that is absent fails in the resolver with TENANT_REQUIRED;
    an optional one that resolves to nothing is TENANT_NOT_FOUND.
    """

    def __init__(self, uow: UnitOfWork, resolver: TenantResolver):
        self.uow = uow
        self.resolver = resolver

    async def execute(self, request: RequestSnapshot) -> Result[Tenant]:
        slug_result = self.resolver.resolve(request)
        if slug_result.is_err():
            return slug_result

        slug = slug_result.value
        if slug is None:
            # Optional resolution with no fallback: the request names no tenant
            return Return.err(Error(TENANT_NOT_FOUND, "No tenant named by the request"))

        async with self.uow:
            return await TenantGateway(self.uow).resolve_tenant(slug)


class ResolveTenantContextUseCase:
    """
    Resolve tenant and caller membership for a request.

    Flow:
    1. Resolver extracts the slug (or applies the fallback)
    2. Gateway loads the tenant row (never scoped)
    3. Validator looks up the caller's membership inside the tenant scope
    4. Permissions are derived from role and membership status

    The scope opened for validation is closed before returning; use cases
    open their own scope for the actual work.
    """

    def __init__(self, uow: UnitOfWork, resolver: TenantResolver):
        self.uow = uow
        self.resolver = resolver

    async def execute(
        self,
        request: RequestSnapshot,
        caller: CallerIdentity,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[TenantContext]:
        """
        Execute resolve tenant context use case.

        Returns:
            Result with TenantContext, or Error TENANT_REQUIRED,
            TENANT_NOT_FOUND or MEMBERSHIP_NOT_FOUND
        """
        tenant_result = await ResolveTenantUseCase(self.uow, self.resolver).execute(request)
        if tenant_result.is_err():
            return tenant_result
        tenant = tenant_result.value

        async with self.uow:
            gateway = TenantGateway(self.uow)
            validator = MembershipValidator(self.uow)

            async def validate(scope):
                return await validator.validate(tenant, caller)

            membership_result = await gateway.with_tenant_scope(tenant.id, validate)

        if membership_result.is_err():
            logger.warning(
                "Caller %s has no membership in tenant %s", caller.external_id, tenant.slug
            )
            return membership_result

        membership, permissions = membership_result.value
        return Return.ok(
            TenantContext(
                tenant=tenant,
                membership=membership,
                permissions=permissions,
                ip_address=ip_address,
                user_agent=user_agent,
            )
        )
