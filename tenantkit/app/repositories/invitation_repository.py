from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from tenantkit.domain.entities import Invitation


class IInvitationRepository(ABC):
    """Invitation repository interface - tenant scoped"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[Invitation]:
        """Get invitation by token"""
        pass

    @abstractmethod
    async def get_pending_by_email(self, email: str) -> Optional[Invitation]:
        """Get the pending invitation for an email"""
        pass

    @abstractmethod
    async def list(
        self, pending_only: bool = False, now: Optional[datetime] = None
    ) -> List[Invitation]:
        """Invitations newest first; pending_only drops overdue ones"""
        pass

    @abstractmethod
    async def count_pending(self, now: datetime) -> int:
        """Count pending invitations that have not yet expired"""
        pass

    @abstractmethod
    async def list_overdue(self, now: datetime) -> List[Invitation]:
        """Pending invitations whose expiry has passed"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        pass
