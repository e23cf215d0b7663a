"""
TenantSetting Entity

Tenant-scoped key -> JSON value store.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, Field, Index, SQLModel

from tenantkit.domain.base import created_at_column, updated_at_column, utcnow


class TenantSetting(SQLModel, table=True):
    __tablename__ = "tenant_settings"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(
        foreign_key="tenants.id", ondelete="CASCADE", nullable=False, index=True
    )
    key: str = Field(max_length=100, nullable=False)
    value: Optional[Any] = Field(default=None, sa_column=Column(JSON, nullable=True))

    created_at: datetime = Field(default_factory=utcnow, sa_column=created_at_column())
    updated_at: datetime = Field(default_factory=utcnow, sa_column=updated_at_column())

    __table_args__ = (
        Index("idx_tenant_settings_tenant_key", "tenant_id", "key", unique=True),
    )
