"""
Tenant Entity

Root of data partitioning. Never subject to the tenant scope.
"""

from datetime import datetime
from typing import Any, Dict
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, Field, Index, SQLModel

from tenantkit.domain.base import created_at_column, updated_at_column, utcnow

from .enums import TenantStatus


class Tenant(SQLModel, table=True):
    """
    Tenant entity - isolated customer account.

    Business Rules:
    - slug is unique and URL safe (lowercase letters, digits, hyphen)
    - Created together with exactly one owner membership
    - Deleted only when it has no memberships; deletion cascades to
      invitations, audit logs and settings
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    slug: str = Field(max_length=50, unique=True, nullable=False)
    name: str = Field(max_length=100, nullable=False)

    status: TenantStatus = Field(default=TenantStatus.active)
    settings: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=created_at_column())
    updated_at: datetime = Field(default_factory=utcnow, sa_column=updated_at_column())

    __table_args__ = (
        Index("idx_tenants_status", "status"),
        Index("idx_tenants_created_at", "created_at"),
    )
