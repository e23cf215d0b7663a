from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from tenantkit.api.error import raise_for_error
from tenantkit.app.services.caller_identity import CallerIdentity
from tenantkit.app.services.tenant_context import TenantContext
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.app.use_cases.invitations import (
    AcceptInvitationCommand,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CreateInvitationCommand,
    CreateInvitationResponse,
    CreateInvitationUseCase,
    ExpireInvitationsResponse,
    ExpireInvitationsUseCase,
    GetInvitationByTokenUseCase,
    InvitationListResponse,
    InvitationResponse,
    ListInvitationsUseCase,
    RevokeInvitationUseCase,
)
from tenantkit.depends import (
    get_caller_identity,
    get_client_ip,
    get_current_tenant,
    get_tenant_context,
    get_unit_of_work,
)
from tenantkit.domain.entities import Tenant
from tenantkit.domain.validation import PersonName

router = APIRouter(prefix="/invitations", tags=["Invitations"])


@router.get("", response_model=InvitationListResponse)
async def list_invitations(
    pending_only: bool = False,
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListInvitationsUseCase(uow).execute(ctx, pending_only=pending_only)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CreateInvitationResponse)
async def create_invitation(
    request: CreateInvitationCommand,
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Invite User

    Creates a pending invitation valid for 7 days. The response carries
    the token to deliver to the invitee.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS (invitation:create, role rank)
        - 409 Conflict: BUSINESS_RULE_VIOLATION (pending invitation, existing
          member, second owner)
    """
    result = await CreateInvitationUseCase(uow).execute(ctx, request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


class AcceptInvitationRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=255)
    first_name: Optional[PersonName] = None
    last_name: Optional[PersonName] = None


@router.post("/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    request: AcceptInvitationRequest,
    http_request: Request,
    tenant: Tenant = Depends(get_current_tenant),
    caller: CallerIdentity = Depends(get_caller_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Accept Invitation

    The caller need not be a member yet; the tenant comes from the request
    and the invitation from its token.

    Raises:
        - 401 Unauthorized: missing or invalid bearer token
        - 404 Not Found: TENANT_NOT_FOUND, INVITATION_NOT_FOUND
        - 409 Conflict: BUSINESS_RULE_VIOLATION (not pending, expired,
          already a member, second owner)
    """
    lookup = await GetInvitationByTokenUseCase(uow).execute(tenant.id, request.token)
    if lookup.is_err():
        raise_for_error(lookup.error)

    result = await AcceptInvitationUseCase(uow).execute(
        tenant.id,
        UUID(lookup.value.id),
        caller,
        AcceptInvitationCommand(first_name=request.first_name, last_name=request.last_name),
        ip_address=get_client_ip(http_request),
        user_agent=http_request.headers.get("user-agent"),
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/expire", response_model=ExpireInvitationsResponse)
async def expire_invitations(
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ExpireInvitationsUseCase(uow).execute(ctx)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{invitation_id}", response_model=InvitationResponse)
async def revoke_invitation(
    invitation_id: UUID,
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke Invitation

    Raises:
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS (invitation:delete)
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: BUSINESS_RULE_VIOLATION (not pending)
    """
    result = await RevokeInvitationUseCase(uow).execute(ctx, invitation_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
