"""
Invitation Use Cases

Invitation lifecycle: pending -> accepted | expired | revoked.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .create_invitation_use_case import INVITATION_TTL, CreateInvitationUseCase
from .dtos import (
    AcceptInvitationCommand,
    AcceptInvitationResponse,
    CreateInvitationCommand,
    CreateInvitationResponse,
    ExpireInvitationsResponse,
    InvitationListResponse,
    InvitationResponse,
)
from .expire_invitations_use_case import ExpireInvitationsUseCase
from .get_invitation_by_token_use_case import GetInvitationByTokenUseCase
from .list_invitations_use_case import ListInvitationsUseCase
from .revoke_invitation_use_case import RevokeInvitationUseCase

__all__ = [
    "CreateInvitationUseCase",
    "AcceptInvitationUseCase",
    "RevokeInvitationUseCase",
    "ListInvitationsUseCase",
    "GetInvitationByTokenUseCase",
    "ExpireInvitationsUseCase",
    "INVITATION_TTL",
    "CreateInvitationCommand",
    "AcceptInvitationCommand",
    "InvitationResponse",
    "CreateInvitationResponse",
    "InvitationListResponse",
    "AcceptInvitationResponse",
    "ExpireInvitationsResponse",
]
