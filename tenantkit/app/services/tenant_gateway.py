"""
Tenant Gateway

Loads tenants (never scoped) and runs operations inside a tenant scope.
Must be used inside an entered unit of work.
"""

import logging
from typing import Awaitable, Callable, TypeVar
from uuid import UUID

from tenantkit.app.services.tenant_scope import TenantScope
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.entities import Tenant
from tenantkit.domain.errors import TENANT_NOT_FOUND
from tenantkit.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TenantGateway:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def resolve_tenant(self, slug: str) -> Result[Tenant]:
        tenant = await self.uow.tenants.get_by_slug(slug)
        if tenant is None:
            logger.info("Tenant not found for slug %r", slug)
            return Return.err(Error(TENANT_NOT_FOUND, f"Tenant not found: {slug}"))
        return Return.ok(tenant)

    async def with_tenant_scope(
        self, tenant_id: UUID, operation: Callable[[TenantScope], Awaitable[T]]
    ) -> T:
        """Run `operation(scope)` with the session bound to `tenant_id`.

        The scope is cleared however the operation ends; exceptions are
        re-raised after the transaction is rolled back.
        """
        async with self.uow.tenant_scope(tenant_id) as scope:
            return await operation(scope)
