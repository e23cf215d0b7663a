from typing import Optional
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest

from tenantkit.app.services.tenant_context import TenantContext
from tenantkit.app.services.tenant_scope import TenantScope
from tenantkit.domain.entities import (
    Membership,
    MembershipRole,
    MembershipStatus,
    Tenant,
    TenantStatus,
)
from tenantkit.domain.permissions import effective_permissions


def _returns_argument():
    return AsyncMock(side_effect=lambda entity: entity)


def _scope_manager(tenant_id: UUID):
    manager = MagicMock()
    manager.__aenter__ = AsyncMock(return_value=TenantScope(tenant_id=tenant_id))
    manager.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    return manager


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories and a working tenant_scope()"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.tenant_scope = MagicMock(side_effect=_scope_manager)

    uow.tenants = MagicMock()
    uow.tenants.get_by_id = AsyncMock(return_value=None)
    uow.tenants.get_by_slug = AsyncMock(return_value=None)
    uow.tenants.lock = AsyncMock()
    uow.tenants.create = _returns_argument()
    uow.tenants.update = _returns_argument()
    uow.tenants.delete = AsyncMock()

    uow.memberships = MagicMock()
    uow.memberships.get_by_id = AsyncMock(return_value=None)
    uow.memberships.get_by_external_id = AsyncMock(return_value=None)
    uow.memberships.get_by_email = AsyncMock(return_value=None)
    uow.memberships.get_owner = AsyncMock(return_value=None)
    uow.memberships.list = AsyncMock(return_value=[])
    uow.memberships.count = AsyncMock(return_value=0)
    uow.memberships.create = _returns_argument()
    uow.memberships.update = _returns_argument()
    uow.memberships.delete = AsyncMock()

    uow.invitations = MagicMock()
    uow.invitations.get_by_id = AsyncMock(return_value=None)
    uow.invitations.get_by_token = AsyncMock(return_value=None)
    uow.invitations.get_pending_by_email = AsyncMock(return_value=None)
    uow.invitations.list = AsyncMock(return_value=[])
    uow.invitations.count_pending = AsyncMock(return_value=0)
    uow.invitations.list_overdue = AsyncMock(return_value=[])
    uow.invitations.create = _returns_argument()
    uow.invitations.update = _returns_argument()

    uow.audit_logs = MagicMock()
    uow.audit_logs.create = _returns_argument()
    uow.audit_logs.get_paginated = AsyncMock(return_value=([], None))

    uow.settings = MagicMock()
    uow.settings.get = AsyncMock(return_value=None)
    uow.settings.list = AsyncMock(return_value=[])
    uow.settings.create = _returns_argument()
    uow.settings.update = _returns_argument()
    uow.settings.delete = AsyncMock()

    return uow


@pytest.fixture
def tenant():
    return Tenant(id=uuid4(), slug="acme", name="Acme Corp", status=TenantStatus.active, settings={})


@pytest.fixture
def make_membership(tenant):
    def factory(
        role: MembershipRole = MembershipRole.member,
        status: MembershipStatus = MembershipStatus.active,
        email: Optional[str] = None,
    ) -> Membership:
        membership_id = uuid4()
        return Membership(
            id=membership_id,
            tenant_id=tenant.id,
            external_id=f"user-{membership_id.hex[:8]}",
            email=email or f"{membership_id.hex[:8]}@acme.com",
            role=role,
            status=status,
        )

    return factory


@pytest.fixture
def make_context(tenant, make_membership):
    """Build a TenantContext for a caller holding `role` in the tenant"""

    def factory(
        role: MembershipRole = MembershipRole.owner,
        status: MembershipStatus = MembershipStatus.active,
        membership: Optional[Membership] = None,
    ) -> TenantContext:
        membership = membership or make_membership(role=role, status=status)
        return TenantContext(
            tenant=tenant,
            membership=membership,
            permissions=effective_permissions(membership.role, membership.status),
            ip_address="10.0.0.1",
            user_agent="pytest",
        )

    return factory
