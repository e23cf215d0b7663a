"""
Tenant Management Use Cases

Tenant lifecycle: creation with owner, updates, status and deletion.
"""

from .activate_tenant_use_case import ActivateTenantUseCase
from .create_tenant_use_case import CreateTenantUseCase
from .delete_tenant_use_case import DeleteTenantUseCase
from .dtos import (
    CreateTenantCommand,
    CreateTenantResponse,
    DeleteTenantResponse,
    OwnerInfo,
    TenantResponse,
    TenantStatsResponse,
    UpdateTenantCommand,
)
from .get_tenant_stats_use_case import GetTenantStatsUseCase
from .suspend_tenant_use_case import SuspendTenantUseCase
from .update_tenant_use_case import UpdateTenantUseCase

__all__ = [
    "CreateTenantUseCase",
    "UpdateTenantUseCase",
    "SuspendTenantUseCase",
    "ActivateTenantUseCase",
    "DeleteTenantUseCase",
    "GetTenantStatsUseCase",
    "CreateTenantCommand",
    "UpdateTenantCommand",
    "CreateTenantResponse",
    "DeleteTenantResponse",
    "OwnerInfo",
    "TenantResponse",
    "TenantStatsResponse",
]
