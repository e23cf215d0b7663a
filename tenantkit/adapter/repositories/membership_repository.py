from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from tenantkit.adapter.repositories.base import TenantScopedRepository
from tenantkit.app.repositories.membership_repository import IMembershipRepository
from tenantkit.domain.entities import Membership, MembershipRole, MembershipStatus
from tenantkit.domain.errors import MembershipConflict


class MembershipRepository(TenantScopedRepository, IMembershipRepository):
    """Membership repository implementation using SQLModel"""

    def _select(self):
        return select(Membership).where(Membership.tenant_id == self.tenant_id)

    async def get_by_id(self, membership_id: UUID) -> Optional[Membership]:
        """Get membership by ID"""
        result = await self.session.exec(self._select().where(Membership.id == membership_id))
        return result.one_or_none()

    async def get_by_external_id(self, external_id: str) -> Optional[Membership]:
        """Get membership by external identity"""
        result = await self.session.exec(
            self._select().where(Membership.external_id == external_id)
        )
        return result.one_or_none()

    async def get_by_email(self, email: str) -> Optional[Membership]:
        """Get membership by email"""
        result = await self.session.exec(self._select().where(Membership.email == email))
        return result.one_or_none()

    async def get_owner(self, exclude_id: Optional[UUID] = None) -> Optional[Membership]:
        """Get the tenant owner"""
        stmt = self._select().where(Membership.role == MembershipRole.owner)
        if exclude_id is not None:
            stmt = stmt.where(Membership.id != exclude_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def list(self) -> List[Membership]:
        """All memberships, newest first"""
        result = await self.session.exec(
            self._select().order_by(Membership.created_at.desc())
        )
        return list(result.all())

    async def count(
        self,
        role: Optional[MembershipRole] = None,
        status: Optional[MembershipStatus] = None,
        exclude_id: Optional[UUID] = None,
    ) -> int:
        """Count memberships matching the optional filters"""
        stmt = (
            select(func.count())
            .select_from(Membership)
            .where(Membership.tenant_id == self.tenant_id)
        )
        if role is not None:
            stmt = stmt.where(Membership.role == role)
        if status is not None:
            stmt = stmt.where(Membership.status == status)
        if exclude_id is not None:
            stmt = stmt.where(Membership.id != exclude_id)
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, membership: Membership) -> Membership:
        """Create a new membership in the scoped tenant

        Raises MembershipConflict when a unique index rejects the row.
        """
        membership.tenant_id = self.tenant_id
        try:
            return await self._save(membership)
        except IntegrityError as exc:
            raise MembershipConflict(membership.external_id) from exc

    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        return await self._save(membership)

    async def delete(self, membership: Membership) -> None:
        """Delete membership"""
        await self.session.delete(membership)
        await self.session.flush()
