from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from tenantkit.domain.entities import Membership, Tenant
from tenantkit.domain.errors import INSUFFICIENT_PERMISSIONS
from tenantkit.domain.permissions import Permission, PermissionSet
from tenantkit.libs.result import Error, Result, Return


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant, the caller's membership in it and what it may do."""

    tenant: Tenant
    membership: Membership
    permissions: PermissionSet
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @property
    def tenant_id(self) -> UUID:
        return self.tenant.id

    @property
    def membership_id(self) -> UUID:
        return self.membership.id


def has_permission(ctx: TenantContext, permission: Permission) -> bool:
    return permission in ctx.permissions


def require_permission(ctx: TenantContext, permission: Permission) -> Result[None]:
    if not has_permission(ctx, permission):
        return Return.err(
            Error(INSUFFICIENT_PERMISSIONS, f"Insufficient permissions: {permission.value}")
        )
    return Return.ok(None)
