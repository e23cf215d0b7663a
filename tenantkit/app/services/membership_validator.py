"""
Membership & Permission Validator

Confirms that a caller belongs to a tenant and computes what the caller
may do there.
"""

from typing import Tuple

from tenantkit.app.services.caller_identity import CallerIdentity
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.entities import Membership, Tenant
from tenantkit.domain.errors import MEMBERSHIP_NOT_FOUND
from tenantkit.domain.permissions import PermissionSet, effective_permissions
from tenantkit.libs.result import Error, Result, Return


class MembershipValidator:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def validate(
        self, tenant: Tenant, caller: CallerIdentity
    ) -> Result[Tuple[Membership, PermissionSet]]:
        """
        Look up the caller's membership in `tenant`.

        Must run inside a scope for `tenant`. Memberships that are not
        active resolve with an empty permission set.

        Returns:
            Result with (membership, permissions), or MEMBERSHIP_NOT_FOUND
        """
        membership = await self.uow.memberships.get_by_external_id(caller.external_id)
        if membership is None:
            return Return.err(
                Error(MEMBERSHIP_NOT_FOUND, f"User not found in tenant: {tenant.slug}")
            )

        return Return.ok((membership, effective_permissions(membership.role, membership.status)))
