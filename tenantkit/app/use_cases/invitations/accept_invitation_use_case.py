"""
Accept Invitation Use Case

Turns a pending invitation into a membership for the accepting caller.
"""

import logging
from typing import Optional
from uuid import UUID

from tenantkit.app.services.audit_trail import audit_entry
from tenantkit.app.services.caller_identity import CallerIdentity
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.base import utcnow
from tenantkit.domain.entities import (
    InvitationStatus,
    Membership,
    MembershipRole,
    MembershipStatus,
)
from tenantkit.domain.errors import BUSINESS_RULE_VIOLATION, MembershipConflict
from tenantkit.libs.result import Error, Result, Return

from ..memberships.dtos import MembershipResponse
from .dtos import AcceptInvitationCommand, AcceptInvitationResponse, InvitationResponse

logger = logging.getLogger(__name__)


class AcceptInvitationUseCase:
    """
    Use case for accepting an invitation.

    State machine: pending --accept--> accepted,
    pending --expire (now >= expires_at)--> expired.

    Business Rules:
    - Fails if the invitation is absent or not pending (so a second
      acceptance always fails)
    - An overdue invitation is marked expired and that change is committed
      before the call fails
    - Fails if the caller is already a member here or in another tenant,
      or the invited email is already used here
    - role=owner fails while the tenant has an owner
    - Membership creation and the accepted transition share a transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        tenant_id: UUID,
        invitation_id: UUID,
        caller: CallerIdentity,
        command: Optional[AcceptInvitationCommand] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[AcceptInvitationResponse]:
        command = command or AcceptInvitationCommand()

        async with self.uow:
            try:
                async with self.uow.tenant_scope(tenant_id):
                    await self.uow.tenants.lock(tenant_id)
                    now = utcnow()

                    invitation = await self.uow.invitations.get_by_id(invitation_id)
                    if invitation is None or not invitation.is_pending():
                        return Return.err(
                            Error(BUSINESS_RULE_VIOLATION, "Invalid or expired invitation")
                        )

                    if invitation.is_overdue(now):
                        invitation.status = InvitationStatus.expired
                        await self.uow.invitations.update(invitation)
                        await self.uow.commit()
                        logger.info("Invitation %s expired on acceptance", invitation.id)
                        return Return.err(Error(BUSINESS_RULE_VIOLATION, "Invitation has expired"))

                    if await self.uow.memberships.get_by_external_id(caller.external_id):
                        return Return.err(
                            Error(BUSINESS_RULE_VIOLATION, "User is already a member of this tenant")
                        )

                    if await self.uow.memberships.get_by_email(invitation.email):
                        return Return.err(
                            Error(BUSINESS_RULE_VIOLATION, "Email is already used in this tenant")
                        )

                    if invitation.role == MembershipRole.owner:
                        if await self.uow.memberships.get_owner():
                            return Return.err(
                                Error(BUSINESS_RULE_VIOLATION, "Tenant already has an owner")
                            )

                    membership = Membership(
                        external_id=caller.external_id,
                        email=invitation.email,
                        first_name=command.first_name,
                        last_name=command.last_name,
                        role=invitation.role,
                        status=MembershipStatus.active,
                    )
                    membership = await self.uow.memberships.create(membership)

                    invitation.status = InvitationStatus.accepted
                    invitation.accepted_at = now
                    invitation = await self.uow.invitations.update(invitation)

                    entry = audit_entry(
                        action="invitation_accepted",
                        resource_type="invitation",
                        resource_id=invitation.id,
                        details={"membership_id": str(membership.id), "role": MembershipRole(invitation.role).value},
                        ip_address=ip_address,
                        user_agent=user_agent,
                    )
                    entry.user_id = membership.id
                    await self.uow.audit_logs.create(entry)

                    await self.uow.commit()

                    return Return.ok(
                        AcceptInvitationResponse(
                            invitation=InvitationResponse.from_entity(invitation),
                            membership=MembershipResponse.from_entity(membership),
                        )
                    )
            except MembershipConflict:
                return Return.err(
                    Error(BUSINESS_RULE_VIOLATION, "User already holds a membership in a tenant")
                )
