from abc import ABC, abstractmethod
from typing import AsyncContextManager
from uuid import UUID

from tenantkit.app.repositories.audit_log_repository import IAuditLogRepository
from tenantkit.app.repositories.invitation_repository import IInvitationRepository
from tenantkit.app.repositories.membership_repository import IMembershipRepository
from tenantkit.app.repositories.tenant_repository import ITenantRepository
from tenantkit.app.repositories.tenant_setting_repository import ITenantSettingRepository
from tenantkit.app.services.tenant_scope import TenantScope


class UnitOfWork(ABC):
    """Abstract UnitOfWork - repository access, transaction management and
    tenant scoping.

    `tenants` is available as soon as the unit of work is entered. The
    tenant-scoped repositories (memberships, invitations, audit_logs,
    settings) are only available inside `tenant_scope()`; touching them
    outside raises TenantContextMissing.
    """

    tenants: ITenantRepository
    memberships: IMembershipRepository
    invitations: IInvitationRepository
    audit_logs: IAuditLogRepository
    settings: ITenantSettingRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass

    @abstractmethod
    def tenant_scope(self, tenant_id: UUID) -> AsyncContextManager[TenantScope]:
        """Bind the session to one tenant for the duration of the block.

        The scope is set before the block runs and cleared on every exit
        path. An exception inside the block rolls the transaction back.
        """
        pass
