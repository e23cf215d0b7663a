from uuid import UUID

from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.errors import INVITATION_NOT_FOUND
from tenantkit.libs.result import Error, Result, Return

from .dtos import InvitationResponse


class GetInvitationByTokenUseCase:
    """Look up an invitation of a tenant by its token, whatever its status."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, tenant_id: UUID, token: str) -> Result[InvitationResponse]:
        async with self.uow:
            async with self.uow.tenant_scope(tenant_id):
                invitation = await self.uow.invitations.get_by_token(token)

            if invitation is None:
                return Return.err(Error(INVITATION_NOT_FOUND, "Invitation not found"))

            return Return.ok(InvitationResponse.from_entity(invitation))
