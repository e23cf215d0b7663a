from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from tenantkit.adapter.repositories.base import TenantScopedRepository
from tenantkit.app.repositories.invitation_repository import IInvitationRepository
from tenantkit.domain.entities import Invitation, InvitationStatus


class InvitationRepository(TenantScopedRepository, IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def _select(self):
        return select(Invitation).where(Invitation.tenant_id == self.tenant_id)

    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        result = await self.session.exec(self._select().where(Invitation.id == invitation_id))
        return result.one_or_none()

    async def get_by_token(self, token: str) -> Optional[Invitation]:
        """Get invitation by token"""
        result = await self.session.exec(self._select().where(Invitation.token == token))
        return result.one_or_none()

    async def get_pending_by_email(self, email: str) -> Optional[Invitation]:
        """Get pending invitation by email"""
        stmt = self._select().where(
            Invitation.email == email,
            Invitation.status == InvitationStatus.pending,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list(
        self, pending_only: bool = False, now: Optional[datetime] = None
    ) -> List[Invitation]:
        """Invitations newest first"""
        stmt = self._select()
        if pending_only:
            stmt = stmt.where(Invitation.status == InvitationStatus.pending)
            if now is not None:
                stmt = stmt.where(Invitation.expires_at > now)
        result = await self.session.exec(stmt.order_by(Invitation.created_at.desc()))
        return list(result.all())

    async def count_pending(self, now: datetime) -> int:
        """Count live pending invitations"""
        stmt = (
            select(func.count())
            .select_from(Invitation)
            .where(
                Invitation.tenant_id == self.tenant_id,
                Invitation.status == InvitationStatus.pending,
                Invitation.expires_at > now,
            )
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def list_overdue(self, now: datetime) -> List[Invitation]:
        """Pending invitations past their expiry"""
        stmt = self._select().where(
            Invitation.status == InvitationStatus.pending,
            Invitation.expires_at <= now,
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation in the scoped tenant"""
        invitation.tenant_id = self.tenant_id
        return await self._save(invitation)

    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        return await self._save(invitation)
