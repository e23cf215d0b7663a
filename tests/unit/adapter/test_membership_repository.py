from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from tenantkit.adapter.repositories.membership_repository import MembershipRepository
from tenantkit.app.services.tenant_scope import TenantScope
from tenantkit.domain.entities import Membership
from tenantkit.domain.errors import MembershipConflict


def make_repository(flush_error=None):
    session = MagicMock()
    session.flush = AsyncMock(side_effect=flush_error)
    session.refresh = AsyncMock()
    return session, MembershipRepository(session, TenantScope(tenant_id=uuid4()))


@pytest.mark.asyncio
async def test_create_stamps_tenant_from_scope():
    session, repository = make_repository()
    membership = Membership(tenant_id=uuid4(), external_id="carol", email="carol@acme.com")

    created = await repository.create(membership)

    assert created.tenant_id == repository.tenant_id
    session.add.assert_called_once_with(membership)


@pytest.mark.asyncio
async def test_unique_index_violation_becomes_membership_conflict():
    error = IntegrityError("INSERT INTO tenant_users", {}, Exception("duplicate key"))
    _, repository = make_repository(flush_error=error)
    membership = Membership(tenant_id=uuid4(), external_id="alice", email="alice@globex.com")

    with pytest.raises(MembershipConflict) as raised:
        await repository.create(membership)

    assert raised.value.external_id == "alice"
    assert raised.value.__cause__ is error
