from typing import Optional

from fastapi import APIRouter, Depends, Query

from tenantkit.api.error import raise_for_error
from tenantkit.app.services.tenant_context import TenantContext
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.app.use_cases.audit import AuditLogPage, ListAuditLogsUseCase
from tenantkit.depends import get_tenant_context, get_unit_of_work

router = APIRouter(tags=["Audit"])


@router.get("/audit-logs", response_model=AuditLogPage)
async def list_audit_logs(
    limit: int = Query(50, ge=1, le=100, description="Maximum entries per page"),
    cursor: Optional[str] = Query(None, description="Cursor from the previous page"),
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Audit Trail

    Newest first with cursor pagination.

    Raises:
        - 403 Forbidden: INSUFFICIENT_PERMISSIONS (audit:read)
    """
    result = await ListAuditLogsUseCase(uow).execute(ctx, limit=limit, cursor=cursor)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
