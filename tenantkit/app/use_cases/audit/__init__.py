"""
Audit Log Use Cases

Read access to the per-tenant audit trail.
"""

from .list_audit_logs_use_case import AuditLogEntry, AuditLogPage, ListAuditLogsUseCase

__all__ = [
    "ListAuditLogsUseCase",
    "AuditLogEntry",
    "AuditLogPage",
]
