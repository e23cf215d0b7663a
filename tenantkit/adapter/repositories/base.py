from sqlmodel.ext.asyncio.session import AsyncSession

from tenantkit.app.services.tenant_scope import TenantScope


class TenantScopedRepository:
    """Base for repositories over tenant-scoped tables.

    Every query filters on the scope's tenant_id in addition to the RLS
    policy, and every insert takes tenant_id from the scope.
    """

    def __init__(self, session: AsyncSession, scope: TenantScope):
        self.session = session
        self.scope = scope

    @property
    def tenant_id(self):
        return self.scope.tenant_id

    async def _save(self, entity):
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity
