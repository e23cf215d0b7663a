from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from tenantkit.app.services.tenant_context import TenantContext
from tenantkit.app.use_cases.memberships import MembershipResponse
from tenantkit.app.use_cases.tenants import TenantResponse
from tenantkit.depends import get_tenant_context

router = APIRouter(tags=["Me"])


class MeResponse(BaseModel):
    """Resolved tenant context of the caller"""

    tenant: TenantResponse
    membership: MembershipResponse
    permissions: List[str]


@router.get("/me", response_model=MeResponse)
async def get_me(ctx: TenantContext = Depends(get_tenant_context)):
    """
    Current Context

    Returns the tenant, the caller's membership and effective permissions.
    A suspended or cancelled membership resolves with no permissions.
    """
    return MeResponse(
        tenant=TenantResponse.from_entity(ctx.tenant),
        membership=MembershipResponse.from_entity(ctx.membership),
        permissions=sorted(permission.value for permission in ctx.permissions),
    )
