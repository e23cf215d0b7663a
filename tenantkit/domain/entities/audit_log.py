"""
AuditLog Entity

Append-only record of an action performed inside a tenant.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, Field, Index, SQLModel

from tenantkit.domain.base import created_at_column, utcnow


class AuditLog(SQLModel, table=True):
    """
    AuditLog entity - immutable trail of tenant activity.

    Business Rules:
    - Never updated or deleted by the application
    - user_id is the acting membership, null for system/admin actions
    - Written in the same transaction as the mutation it records
    """

    __tablename__ = "audit_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(
        foreign_key="tenants.id", ondelete="CASCADE", nullable=False, index=True
    )
    user_id: Optional[UUID] = Field(
        default=None, foreign_key="tenant_users.id", ondelete="SET NULL", index=True
    )

    action: str = Field(max_length=100)  # e.g. "membership_created"
    resource_type: Optional[str] = Field(default=None, max_length=50)
    resource_id: Optional[str] = Field(default=None, max_length=100)
    details: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

    ip_address: Optional[str] = Field(default=None, max_length=45)
    user_agent: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utcnow, sa_column=created_at_column())

    __table_args__ = (
        Index("idx_audit_logs_action", "action"),
        Index("idx_audit_logs_resource_type", "resource_type"),
        Index("idx_audit_logs_created_at", "created_at"),
    )
