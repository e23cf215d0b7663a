"""
Tenant Context Use Cases

Request-to-tenant binding.
"""

from .resolve_tenant_context_use_case import (
    ResolveTenantContextUseCase,
    ResolveTenantUseCase,
)

__all__ = [
    "ResolveTenantUseCase",
    "ResolveTenantContextUseCase",
]
