from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from tenantkit.api.error import ClientError, raise_for_error
from tenantkit.app.services.caller_identity import CallerIdentity
from tenantkit.app.services.tenant_context import TenantContext, require_permission
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.app.use_cases.tenants import (
    CreateTenantCommand,
    CreateTenantResponse,
    CreateTenantUseCase,
    DeleteTenantResponse,
    DeleteTenantUseCase,
    GetTenantStatsUseCase,
    TenantResponse,
    TenantStatsResponse,
    UpdateTenantCommand,
    UpdateTenantUseCase,
)
from tenantkit.depends import get_caller_identity, get_tenant_context, get_unit_of_work
from tenantkit.domain.errors import VALIDATION_ERROR
from tenantkit.domain.permissions import Permission
from tenantkit.domain.validation import PersonName, Slug, TenantName
from tenantkit.libs.result import Error

router = APIRouter(prefix="/tenants", tags=["Tenant"])


class CreateTenantRequest(BaseModel):
    """
    Create tenant HTTP request payload

    owner_email defaults to the email claim of the caller's token.
    """

    slug: Slug = Field(..., description="URL-safe identifier (a-z, 0-9, hyphen)")
    name: TenantName
    settings: Dict[str, Any] = Field(default_factory=dict)
    owner_email: Optional[EmailStr] = None
    owner_first_name: Optional[PersonName] = None
    owner_last_name: Optional[PersonName] = None


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CreateTenantResponse)
async def create_tenant(
    request: CreateTenantRequest,
    caller: CallerIdentity = Depends(get_caller_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Tenant

    Creates a tenant with the caller as its owner. No tenant context needed.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (bad slug/name, no owner email)
        - 401 Unauthorized: missing or invalid bearer token
        - 409 Conflict: BUSINESS_RULE_VIOLATION (slug taken)
    """
    owner_email = request.owner_email or caller.email
    if not owner_email:
        raise ClientError(
            Error(
                VALIDATION_ERROR,
                "Owner email is required",
                details=[{"field": "body.owner_email", "message": "Field required"}],
            ),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    command = CreateTenantCommand(
        slug=request.slug,
        name=request.name,
        settings=request.settings,
        owner_email=owner_email,
        owner_first_name=request.owner_first_name,
        owner_last_name=request.owner_last_name,
    )

    result = await CreateTenantUseCase(uow).execute(command, caller)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/current", response_model=TenantResponse)
async def read_current_tenant(ctx: TenantContext = Depends(get_tenant_context)):
    permitted = require_permission(ctx, Permission.tenant_read)
    if permitted.is_err():
        raise_for_error(permitted.error)
    return TenantResponse.from_entity(ctx.tenant)


class UpdateTenantRequest(BaseModel):
    slug: Optional[Slug] = None
    name: Optional[TenantName] = None
    settings: Optional[Dict[str, Any]] = None


@router.patch("/current", response_model=TenantResponse)
async def update_current_tenant(
    request: UpdateTenantRequest,
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Current Tenant

    Raises:
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS (tenant:update)
        - 409 Conflict: BUSINESS_RULE_VIOLATION (slug taken)
    """
    command = UpdateTenantCommand(**request.model_dump(exclude_unset=True))
    result = await UpdateTenantUseCase(uow).execute(ctx, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/current", response_model=DeleteTenantResponse)
async def delete_current_tenant(
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Current Tenant

    Only succeeds once the tenant has no memberships left.

    Raises:
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS (tenant:delete)
        - 409 Conflict: BUSINESS_RULE_VIOLATION (tenant still has members)
    """
    permitted = require_permission(ctx, Permission.tenant_delete)
    if permitted.is_err():
        raise_for_error(permitted.error)

    result = await DeleteTenantUseCase(uow).execute(ctx.tenant_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/current/stats", response_model=TenantStatsResponse)
async def get_current_tenant_stats(
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetTenantStatsUseCase(uow).execute(ctx)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
