"""
Membership Entity

A caller's role-bearing association with one tenant (table tenant_users).
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from tenantkit.domain.base import created_at_column, updated_at_column, utcnow

from .enums import MembershipRole, MembershipStatus


class Membership(SQLModel, table=True):
    """
    Membership entity - links an external identity to a tenant with a role.

    Business Rules:
    - external_id is unique across all tenants; (tenant_id, email) is unique
    - At most one owner per tenant; the owner can never be removed,
      suspended or demoted without a successor
    - tenant_id is stamped from the active tenant scope on insert
    """

    __tablename__ = "tenant_users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(
        foreign_key="tenants.id", ondelete="CASCADE", nullable=False, index=True
    )
    external_id: str = Field(max_length=100, nullable=False)
    email: str = Field(max_length=255, nullable=False)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)

    role: MembershipRole = Field(default=MembershipRole.member, nullable=False)
    status: MembershipStatus = Field(default=MembershipStatus.active)

    member_metadata: Dict[str, Any] = Field(
        default_factory=dict, sa_column=Column("metadata", JSON)
    )
    last_login_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=created_at_column())
    updated_at: datetime = Field(default_factory=utcnow, sa_column=updated_at_column())

    __table_args__ = (
        Index("idx_tenant_users_external_id", "external_id", unique=True),
        Index("idx_tenant_users_tenant_email", "tenant_id", "email", unique=True),
        Index(
            "idx_tenant_users_single_owner",
            "tenant_id",
            unique=True,
            postgresql_where=text("role = 'owner'"),
            sqlite_where=text("role = 'owner'"),
        ),
        Index("idx_tenant_users_role", "role"),
        Index("idx_tenant_users_status", "status"),
    )
