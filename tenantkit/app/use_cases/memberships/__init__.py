"""
Membership Use Cases

Member management inside the current tenant.
"""

from .create_membership_use_case import CreateMembershipUseCase
from .delete_membership_use_case import DeleteMembershipUseCase
from .dtos import (
    CreateMembershipCommand,
    DeleteMembershipResponse,
    MembershipListResponse,
    MembershipResponse,
    UpdateMembershipRoleCommand,
    UpdateMembershipRoleResponse,
    UpdateMembershipStatusCommand,
)
from .get_membership_use_case import GetMembershipUseCase
from .list_memberships_use_case import ListMembershipsUseCase
from .update_membership_role_use_case import UpdateMembershipRoleUseCase
from .update_membership_status_use_case import UpdateMembershipStatusUseCase

__all__ = [
    "CreateMembershipUseCase",
    "UpdateMembershipRoleUseCase",
    "UpdateMembershipStatusUseCase",
    "DeleteMembershipUseCase",
    "ListMembershipsUseCase",
    "GetMembershipUseCase",
    "CreateMembershipCommand",
    "UpdateMembershipRoleCommand",
    "UpdateMembershipStatusCommand",
    "MembershipResponse",
    "MembershipListResponse",
    "UpdateMembershipRoleResponse",
    "DeleteMembershipResponse",
]
