from typing import Any, Dict, Optional

from tenantkit.app.services.tenant_context import TenantContext
from tenantkit.domain.entities import AuditLog


def audit_entry(
    action: str,
    resource_type: str,
    resource_id: Any = None,
    details: Optional[Dict[str, Any]] = None,
    ctx: Optional[TenantContext] = None,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> AuditLog:
    """Build an audit log row for the acting membership in `ctx`.

    tenant_id is left unset; the scoped repository stamps it on insert.
    Without a context the entry is recorded as a system action.
    """
    if ctx is not None:
        ip_address = ip_address or ctx.ip_address
        user_agent = user_agent or ctx.user_agent

    return AuditLog(
        user_id=ctx.membership_id if ctx is not None else None,
        action=action,
        resource_type=resource_type,
        resource_id=str(resource_id) if resource_id is not None else None,
        details=details or {},
        ip_address=ip_address,
        user_agent=user_agent,
    )
