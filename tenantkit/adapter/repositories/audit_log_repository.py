import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, or_
from sqlmodel import select

from tenantkit.adapter.repositories.base import TenantScopedRepository
from tenantkit.app.repositories.audit_log_repository import IAuditLogRepository
from tenantkit.domain.entities import AuditLog


class AuditLogRepository(TenantScopedRepository, IAuditLogRepository):
    """AuditLog repository implementation using SQLModel"""

    async def create(self, audit_log: AuditLog) -> AuditLog:
        """Append an audit log entry (immutable)"""
        audit_log.tenant_id = self.tenant_id
        self.session.add(audit_log)
        await self.session.flush()
        return audit_log

    async def get_paginated(
        self, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[AuditLog], Optional[str]]:
        """
        Get audit log entries with cursor-based pagination.

        Cursor format: urlsafe base64 of "<created_at ISO>|<id>" for the last
        entry returned. Entries sharing a timestamp are ordered by id, so a
        page boundary never skips or repeats one.
        """
        stmt = select(AuditLog).where(AuditLog.tenant_id == self.tenant_id)

        position = _decode_cursor(cursor) if cursor else None
        if position is not None:
            created_at, entry_id = position
            stmt = stmt.where(
                or_(
                    AuditLog.created_at < created_at,
                    and_(AuditLog.created_at == created_at, AuditLog.id < entry_id),
                )
            )

        stmt = stmt.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit + 1)
        result = await self.session.exec(stmt)
        entries = list(result.all())

        has_more = len(entries) > limit
        if has_more:
            entries = entries[:limit]

        next_cursor = None
        if has_more and entries:
            next_cursor = _encode_cursor(entries[-1])

        return entries, next_cursor


def _encode_cursor(entry: AuditLog) -> str:
    raw = f"{entry.created_at.isoformat()}|{entry.id}"
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("utf-8")


def _decode_cursor(cursor: str) -> Optional[Tuple[datetime, UUID]]:
    """Position encoded in a cursor; None for an unreadable one."""
    try:
        raw = base64.urlsafe_b64decode(cursor.encode("utf-8")).decode("utf-8")
        created_at, entry_id = raw.split("|", 1)
        return datetime.fromisoformat(created_at), UUID(entry_id)
    except ValueError:
        # Invalid cursor, start from the newest entry
        return None
