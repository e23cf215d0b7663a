from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from tenantkit.domain.entities import Membership, MembershipRole, MembershipStatus


class IMembershipRepository(ABC):
    """Membership repository interface - tenant scoped"""

    @abstractmethod
    async def get_by_id(self, membership_id: UUID) -> Optional[Membership]:
        """Get membership by ID"""
        pass

    @abstractmethod
    async def get_by_external_id(self, external_id: str) -> Optional[Membership]:
        """Get membership by the caller's external identity"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Membership]:
        """Get membership by email"""
        pass

    @abstractmethod
    async def get_owner(self, exclude_id: Optional[UUID] = None) -> Optional[Membership]:
        """Get the tenant owner, optionally ignoring one membership"""
        pass

    @abstractmethod
    async def list(self) -> List[Membership]:
        """All memberships, newest first"""
        pass

    @abstractmethod
    async def count(
        self,
        role: Optional[MembershipRole] = None,
        status: Optional[MembershipStatus] = None,
        exclude_id: Optional[UUID] = None,
    ) -> int:
        """Count memberships matching the optional filters"""
        pass

    @abstractmethod
    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        pass

    @abstractmethod
    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        pass

    @abstractmethod
    async def delete(self, membership: Membership) -> None:
        """Delete membership"""
        pass
