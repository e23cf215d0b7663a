from typing import Optional

from tenantkit.app.services.tenant_context import TenantContext
from tenantkit.domain.entities import MembershipRole
from tenantkit.domain.errors import INSUFFICIENT_PERMISSIONS
from tenantkit.libs.result import Error, Result, Return


def check_role_rank(
    ctx: TenantContext,
    target_role: Optional[MembershipRole] = None,
    granted_role: Optional[MembershipRole] = None,
) -> Result[None]:
    """Callers may neither act on a membership ranked above their own
    nor hand out a role ranked above their own."""
    caller_rank = MembershipRole(ctx.membership.role).rank

    if target_role is not None and MembershipRole(target_role).rank > caller_rank:
        return Return.err(
            Error(
                INSUFFICIENT_PERMISSIONS,
                f"Cannot modify a member with role {MembershipRole(target_role).value}",
            )
        )

    if granted_role is not None and MembershipRole(granted_role).rank > caller_rank:
        return Return.err(
            Error(
                INSUFFICIENT_PERMISSIONS,
                f"Cannot grant role {MembershipRole(granted_role).value}",
            )
        )

    return Return.ok(None)
