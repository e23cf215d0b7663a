"""
Tenant Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the tenant domain.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, EmailStr, Field

from tenantkit.domain.entities import Membership, Tenant
from tenantkit.domain.validation import PersonName, Slug, TenantName


# ============================================================================
# Command DTOs
# ============================================================================


class CreateTenantCommand(BaseModel):
    """
    Create tenant command - a new tenant plus its owner membership

    The owner identity comes from the verified caller, never from payload.
    """

    slug: Slug
    name: TenantName
    settings: Dict[str, Any] = Field(default_factory=dict)
    owner_email: EmailStr
    owner_first_name: Optional[PersonName] = None
    owner_last_name: Optional[PersonName] = None


class UpdateTenantCommand(BaseModel):
    """Partial tenant update; unset fields are left untouched"""

    slug: Optional[Slug] = None
    name: Optional[TenantName] = None
    settings: Optional[Dict[str, Any]] = None


# ============================================================================
# Response DTOs
# ============================================================================


class TenantResponse(BaseModel):
    id: str
    slug: str
    name: str
    status: str
    settings: Dict[str, Any]
    created_at: str
    updated_at: str

    @classmethod
    def from_entity(cls, tenant: Tenant) -> "TenantResponse":
        return cls(
            id=str(tenant.id),
            slug=tenant.slug,
            name=tenant.name,
            status=tenant.status.value,
            settings=tenant.settings or {},
            created_at=tenant.created_at.isoformat(),
            updated_at=tenant.updated_at.isoformat(),
        )


class OwnerInfo(BaseModel):
    """Owner membership created together with the tenant"""

    id: str
    external_id: str
    email: str
    role: str
    status: str

    @classmethod
    def from_entity(cls, membership: Membership) -> "OwnerInfo":
        return cls(
            id=str(membership.id),
            external_id=membership.external_id,
            email=membership.email,
            role=membership.role.value,
            status=membership.status.value,
        )


class CreateTenantResponse(BaseModel):
    tenant: TenantResponse
    owner: OwnerInfo


class TenantStatsResponse(BaseModel):
    total_users: int
    admin_users: int
    pending_invitations: int


class DeleteTenantResponse(BaseModel):
    status: str
