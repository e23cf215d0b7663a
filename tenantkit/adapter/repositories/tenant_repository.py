from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenantkit.app.repositories.tenant_repository import ITenantRepository
from tenantkit.domain.entities import Tenant


class TenantRepository(ITenantRepository):
    """Tenant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID"""
        stmt = select(Tenant).where(Tenant.id == tenant_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[Tenant]:
        """Get tenant by slug"""
        stmt = select(Tenant).where(Tenant.slug == slug)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def lock(self, tenant_id: UUID) -> Optional[Tenant]:
        """Row lock serializing rule checks per tenant (no-op on SQLite)"""
        stmt = select(Tenant).where(Tenant.id == tenant_id).with_for_update()
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant"""
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def update(self, tenant: Tenant) -> Tenant:
        """Update existing tenant"""
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def delete(self, tenant: Tenant) -> None:
        """Delete tenant"""
        await self.session.delete(tenant)
        await self.session.flush()
