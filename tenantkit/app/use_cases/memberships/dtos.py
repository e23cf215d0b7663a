"""
Membership Use Case DTOs (Data Transfer Objects)
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from tenantkit.domain.entities import Membership, MembershipRole, MembershipStatus
from tenantkit.domain.validation import ExternalId, PersonName


# ============================================================================
# Command DTOs
# ============================================================================


class CreateMembershipCommand(BaseModel):
    """Add a member to the current tenant"""

    external_id: ExternalId
    email: EmailStr
    first_name: Optional[PersonName] = None
    last_name: Optional[PersonName] = None
    role: MembershipRole = MembershipRole.member
    status: MembershipStatus = MembershipStatus.active
    metadata: Dict[str, Any] = Field(default_factory=dict)


class UpdateMembershipRoleCommand(BaseModel):
    """
    Change a member's role.

    successor_id is required when the owner is demoted: that active admin
    becomes owner in the same transaction.
    """

    role: MembershipRole
    successor_id: Optional[UUID] = None


class UpdateMembershipStatusCommand(BaseModel):
    status: MembershipStatus


# ============================================================================
# Response DTOs
# ============================================================================


class MembershipResponse(BaseModel):
    id: str
    tenant_id: str
    external_id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: str
    status: str
    metadata: Dict[str, Any]
    last_login_at: Optional[str] = None
    created_at: str
    updated_at: str

    @classmethod
    def from_entity(cls, membership: Membership) -> "MembershipResponse":
        return cls(
            id=str(membership.id),
            tenant_id=str(membership.tenant_id),
            external_id=membership.external_id,
            email=membership.email,
            first_name=membership.first_name,
            last_name=membership.last_name,
            role=MembershipRole(membership.role).value,
            status=MembershipStatus(membership.status).value,
            metadata=membership.member_metadata or {},
            last_login_at=(
                membership.last_login_at.isoformat() if membership.last_login_at else None
            ),
            created_at=membership.created_at.isoformat(),
            updated_at=membership.updated_at.isoformat(),
        )


class MembershipListResponse(BaseModel):
    memberships: List[MembershipResponse]


class UpdateMembershipRoleResponse(BaseModel):
    membership: MembershipResponse
    successor: Optional[MembershipResponse] = None


class DeleteMembershipResponse(BaseModel):
    status: str
