from uuid import UUID

from fastapi import APIRouter, Depends, status

from tenantkit.api.error import raise_for_error
from tenantkit.app.services.tenant_context import TenantContext
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.app.use_cases.memberships import (
    CreateMembershipCommand,
    CreateMembershipUseCase,
    DeleteMembershipResponse,
    DeleteMembershipUseCase,
    GetMembershipUseCase,
    ListMembershipsUseCase,
    MembershipListResponse,
    MembershipResponse,
    UpdateMembershipRoleCommand,
    UpdateMembershipRoleResponse,
    UpdateMembershipRoleUseCase,
    UpdateMembershipStatusCommand,
    UpdateMembershipStatusUseCase,
)
from tenantkit.depends import get_tenant_context, get_unit_of_work

router = APIRouter(prefix="/memberships", tags=["Memberships"])


@router.get("", response_model=MembershipListResponse)
async def list_memberships(
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListMembershipsUseCase(uow).execute(ctx)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MembershipResponse)
async def create_membership(
    request: CreateMembershipCommand,
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Add Member

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS (user:create, role rank)
        - 409 Conflict: BUSINESS_RULE_VIOLATION (duplicate identity/email,
          second owner)
    """
    result = await CreateMembershipUseCase(uow).execute(ctx, request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{membership_id}", response_model=MembershipResponse)
async def get_membership(
    membership_id: UUID,
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetMembershipUseCase(uow).execute(ctx, membership_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch("/{membership_id}/role", response_model=UpdateMembershipRoleResponse)
async def update_membership_role(
    membership_id: UUID,
    request: UpdateMembershipRoleCommand,
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Member Role

    Demoting the owner needs `successor_id`, an active admin who becomes
    owner in the same transaction.

    Raises:
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS (user:update, role rank)
        - 404 Not Found: MEMBERSHIP_NOT_FOUND
        - 409 Conflict: BUSINESS_RULE_VIOLATION (second owner, orphaned
          governance, invalid successor)
    """
    result = await UpdateMembershipRoleUseCase(uow).execute(ctx, membership_id, request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch("/{membership_id}/status", response_model=MembershipResponse)
async def update_membership_status(
    membership_id: UUID,
    request: UpdateMembershipStatusCommand,
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Member Status

    Raises:
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS (user:update, role rank)
        - 404 Not Found: MEMBERSHIP_NOT_FOUND
        - 409 Conflict: BUSINESS_RULE_VIOLATION (sole active owner)
    """
    result = await UpdateMembershipStatusUseCase(uow).execute(ctx, membership_id, request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{membership_id}", response_model=DeleteMembershipResponse)
async def delete_membership(
    membership_id: UUID,
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove Member

    Raises:
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS (user:delete, role rank)
        - 404 Not Found: MEMBERSHIP_NOT_FOUND
        - 409 Conflict: BUSINESS_RULE_VIOLATION (only owner)
    """
    result = await DeleteMembershipUseCase(uow).execute(ctx, membership_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
