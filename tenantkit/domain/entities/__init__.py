"""
Tenant Domain Entities

Each entity in its own file; all tenant-scoped tables carry tenant_id.
"""

# Export all enums
from .enums import (
    TenantStatus,
    MembershipRole,
    MembershipStatus,
    InvitationStatus,
)

# Export all entities
from .tenant import Tenant
from .membership import Membership
from .invitation import Invitation
from .audit_log import AuditLog
from .tenant_setting import TenantSetting

__all__ = [
    # Enums
    "TenantStatus",
    "MembershipRole",
    "MembershipStatus",
    "InvitationStatus",
    # Entities
    "Tenant",
    "Membership",
    "Invitation",
    "AuditLog",
    "TenantSetting",
]
