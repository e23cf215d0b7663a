"""
Role -> Permission Table

Static, total mapping from every MembershipRole to a fixed permission set.
Adding a role without extending ROLE_PERMISSIONS fails at import time.
"""

from enum import Enum
from typing import Dict, FrozenSet, Union

from .entities.enums import MembershipRole, MembershipStatus


class Permission(str, Enum):
    tenant_read = "tenant:read"
    tenant_update = "tenant:update"
    tenant_delete = "tenant:delete"
    user_read = "user:read"
    user_create = "user:create"
    user_update = "user:update"
    user_delete = "user:delete"
    invitation_create = "invitation:create"
    invitation_delete = "invitation:delete"
    settings_read = "settings:read"
    settings_update = "settings:update"
    audit_read = "audit:read"


PermissionSet = FrozenSet[Permission]

_FULL_ACCESS: PermissionSet = frozenset(Permission)

ROLE_PERMISSIONS: Dict[MembershipRole, PermissionSet] = {
    MembershipRole.owner: _FULL_ACCESS,
    MembershipRole.admin: _FULL_ACCESS,
    MembershipRole.member: frozenset(
        {Permission.tenant_read, Permission.user_read, Permission.settings_read}
    ),
    MembershipRole.viewer: frozenset({Permission.tenant_read, Permission.user_read}),
}

_unmapped = set(MembershipRole) - set(ROLE_PERMISSIONS)
if _unmapped:
    raise RuntimeError(
        f"ROLE_PERMISSIONS is missing roles: {sorted(r.value for r in _unmapped)}"
    )


def permissions_for_role(role: Union[MembershipRole, str]) -> PermissionSet:
    """Permission set for a role; unknown roles get the empty set."""
    try:
        return ROLE_PERMISSIONS[MembershipRole(role)]
    except ValueError:
        return frozenset()


def effective_permissions(role: Union[MembershipRole, str], status: MembershipStatus) -> PermissionSet:
    """Only active memberships carry their role's permissions."""
    if status != MembershipStatus.active:
        return frozenset()
    return permissions_for_role(role)
