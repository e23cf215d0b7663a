"""
Invitation Entity

Time-bounded, single-use offer to join a tenant with a given role.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from tenantkit.domain.base import created_at_column, updated_at_column, utcnow

from .enums import InvitationStatus, MembershipRole


class Invitation(SQLModel, table=True):
    """
    Invitation entity - pending invitation to join a tenant.

    State machine:
        pending --accept--> accepted
        pending --expire (now >= expires_at)--> expired
        pending --revoke--> revoked

    Business Rules:
    - Expires 7 days after creation
    - Token is single-use, cryptographically random
    - At most one pending invitation per (tenant, email)
    """

    __tablename__ = "tenant_invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(
        foreign_key="tenants.id", ondelete="CASCADE", nullable=False, index=True
    )
    email: str = Field(max_length=255, nullable=False, index=True)

    role: MembershipRole = Field(default=MembershipRole.member, nullable=False)
    invited_by: Optional[UUID] = Field(
        default=None, foreign_key="tenant_users.id", ondelete="SET NULL"
    )
    token: str = Field(unique=True, max_length=255, nullable=False)

    status: InvitationStatus = Field(default=InvitationStatus.pending)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    accepted_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )
    created_at: datetime = Field(default_factory=utcnow, sa_column=created_at_column())
    updated_at: datetime = Field(default_factory=utcnow, sa_column=updated_at_column())

    __table_args__ = (
        Index("idx_tenant_invitations_status", "status"),
        Index("idx_tenant_invitations_expires_at", "expires_at"),
        Index(
            "idx_tenant_invitations_pending_email",
            "tenant_id",
            "email",
            unique=True,
            postgresql_where=text("status = 'pending'"),
            sqlite_where=text("status = 'pending'"),
        ),
    )

    def is_pending(self) -> bool:
        return self.status == InvitationStatus.pending

    def is_overdue(self, now: datetime) -> bool:
        return now >= self.expires_at
