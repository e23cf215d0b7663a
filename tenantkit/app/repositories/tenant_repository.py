from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from tenantkit.domain.entities import Tenant


class ITenantRepository(ABC):
    """Tenant repository interface - never tenant scoped"""

    @abstractmethod
    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID"""
        pass

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Tenant]:
        """Get tenant by slug"""
        pass

    @abstractmethod
    async def lock(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID holding a row lock until the transaction ends"""
        pass

    @abstractmethod
    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant"""
        pass

    @abstractmethod
    async def update(self, tenant: Tenant) -> Tenant:
        """Update existing tenant"""
        pass

    @abstractmethod
    async def delete(self, tenant: Tenant) -> None:
        """Delete tenant (cascades to every tenant-scoped row)"""
        pass
