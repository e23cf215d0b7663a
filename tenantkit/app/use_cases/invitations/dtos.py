"""
Invitation Use Case DTOs (Data Transfer Objects)
"""

from typing import List, Optional

from pydantic import BaseModel, EmailStr

from tenantkit.domain.entities import Invitation, InvitationStatus, MembershipRole
from tenantkit.domain.validation import PersonName

from ..memberships.dtos import MembershipResponse


# ============================================================================
# Command DTOs
# ============================================================================


class CreateInvitationCommand(BaseModel):
    email: EmailStr
    role: MembershipRole = MembershipRole.member


class AcceptInvitationCommand(BaseModel):
    """Profile details for the membership created on acceptance"""

    first_name: Optional[PersonName] = None
    last_name: Optional[PersonName] = None


# ============================================================================
# Response DTOs
# ============================================================================


class InvitationResponse(BaseModel):
    """Invitation as listed to tenant members; never carries the token"""

    id: str
    tenant_id: str
    email: str
    role: str
    status: str
    invited_by: Optional[str] = None
    expires_at: str
    accepted_at: Optional[str] = None
    created_at: str

    @classmethod
    def from_entity(cls, invitation: Invitation) -> "InvitationResponse":
        return cls(
            id=str(invitation.id),
            tenant_id=str(invitation.tenant_id),
            email=invitation.email,
            role=MembershipRole(invitation.role).value,
            status=InvitationStatus(invitation.status).value,
            invited_by=str(invitation.invited_by) if invitation.invited_by else None,
            expires_at=invitation.expires_at.isoformat(),
            accepted_at=invitation.accepted_at.isoformat() if invitation.accepted_at else None,
            created_at=invitation.created_at.isoformat(),
        )


class CreateInvitationResponse(InvitationResponse):
    """Creation response - the only place the token is returned"""

    token: str

    @classmethod
    def from_entity(cls, invitation: Invitation) -> "CreateInvitationResponse":
        data = InvitationResponse.from_entity(invitation).model_dump()
        return cls(**data, token=invitation.token)


class InvitationListResponse(BaseModel):
    invitations: List[InvitationResponse]


class AcceptInvitationResponse(BaseModel):
    invitation: InvitationResponse
    membership: MembershipResponse


class ExpireInvitationsResponse(BaseModel):
    expired: int
