"""
Admin API Routes

Tenant lifecycle endpoints for internal services, authenticated with
X-Admin-API-Key instead of a caller token.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from tenantkit.api.error import raise_for_error
from tenantkit.api.utils.admin_auth import verify_admin_api_key
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.app.use_cases.tenants import (
    ActivateTenantUseCase,
    DeleteTenantResponse,
    DeleteTenantUseCase,
    SuspendTenantUseCase,
    TenantResponse,
)
from tenantkit.depends import get_client_ip, get_unit_of_work

router = APIRouter(
    prefix="/admin/tenants",
    tags=["Admin"],
    dependencies=[Depends(verify_admin_api_key)],
)


@router.post("/{tenant_id}/suspend", response_model=TenantResponse)
async def suspend_tenant(
    tenant_id: UUID,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Suspend Tenant

    Raises:
        - 401 Unauthorized: missing or invalid admin API key
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: BUSINESS_RULE_VIOLATION (already suspended)
    """
    result = await SuspendTenantUseCase(uow).execute(tenant_id, ip_address=get_client_ip(request))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{tenant_id}/activate", response_model=TenantResponse)
async def activate_tenant(
    tenant_id: UUID,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Activate Tenant

    Raises:
        - 401 Unauthorized: missing or invalid admin API key
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: BUSINESS_RULE_VIOLATION (already active)
    """
    result = await ActivateTenantUseCase(uow).execute(tenant_id, ip_address=get_client_ip(request))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{tenant_id}", response_model=DeleteTenantResponse)
async def delete_tenant(
    tenant_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Tenant

    Raises:
        - 401 Unauthorized: missing or invalid admin API key
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: BUSINESS_RULE_VIOLATION (tenant still has members)
    """
    result = await DeleteTenantUseCase(uow).execute(tenant_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
