"""
Tenant Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class TenantStatus(str, Enum):
    """Tenant status"""

    active = "active"
    suspended = "suspended"
    cancelled = "cancelled"


class MembershipRole(str, Enum):
    """Role within a tenant, declared from most to least privileged"""

    owner = "owner"
    admin = "admin"
    member = "member"
    viewer = "viewer"

    @property
    def rank(self) -> int:
        # owner=3 > admin=2 > member=1 > viewer=0
        return len(_ROLE_ORDER) - 1 - _ROLE_ORDER.index(self)


_ROLE_ORDER = list(MembershipRole)


class MembershipStatus(str, Enum):
    """Membership status"""

    active = "active"
    suspended = "suspended"
    cancelled = "cancelled"


class InvitationStatus(str, Enum):
    """Invitation status. Every status except pending is terminal."""

    pending = "pending"
    accepted = "accepted"
    expired = "expired"
    revoked = "revoked"
