"""
List Audit Logs Use Case

Retrieves a tenant's audit trail with cursor pagination.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from tenantkit.app.services.tenant_context import TenantContext, require_permission
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.permissions import Permission
from tenantkit.libs.result import Result, Return


class AuditLogEntry(BaseModel):
    id: str
    action: str
    user_id: Optional[str] = None
    resource_type: Optional[str] = None
    resource_id: Optional[str] = None
    details: Dict[str, Any]
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    timestamp: str


class AuditLogPage(BaseModel):
    entries: List[AuditLogEntry]
    next_cursor: Optional[str] = None


class ListAuditLogsUseCase:
    """
    Use case for reading the audit trail of the current tenant.

    Business Rules:
    - Requires audit:read
    - Results are tenant-scoped, newest first
    - An unreadable cursor restarts from the newest entry
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: TenantContext, limit: int = 50, cursor: Optional[str] = None
    ) -> Result[AuditLogPage]:
        permitted = require_permission(ctx, Permission.audit_read)
        if permitted.is_err():
            return permitted

        async with self.uow:
            async with self.uow.tenant_scope(ctx.tenant_id):
                entries, next_cursor = await self.uow.audit_logs.get_paginated(
                    limit=limit, cursor=cursor
                )

            return Return.ok(
                AuditLogPage(
                    entries=[
                        AuditLogEntry(
                            id=str(entry.id),
                            action=entry.action,
                            user_id=str(entry.user_id) if entry.user_id else None,
                            resource_type=entry.resource_type,
                            resource_id=entry.resource_id,
                            details=entry.details or {},
                            ip_address=entry.ip_address,
                            user_agent=entry.user_agent,
                            timestamp=entry.created_at.isoformat() + "Z",
                        )
                        for entry in entries
                    ],
                    next_cursor=next_cursor,
                )
            )
