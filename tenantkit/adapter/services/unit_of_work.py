import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
from uuid import UUID

from sqlmodel.ext.asyncio.session import AsyncSession

from tenantkit.adapter.database.rls import scope_statement, supports_row_level_security
from tenantkit.adapter.repositories.audit_log_repository import AuditLogRepository
from tenantkit.adapter.repositories.invitation_repository import InvitationRepository
from tenantkit.adapter.repositories.membership_repository import MembershipRepository
from tenantkit.adapter.repositories.tenant_repository import TenantRepository
from tenantkit.adapter.repositories.tenant_setting_repository import TenantSettingRepository
from tenantkit.app.services.tenant_scope import TenantScope
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.errors import TenantContextMissing, TenantScopeError

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern with tenant scoping.

    On PostgreSQL the scope is the transaction-local setting
    app.current_tenant_id read by the RLS policies. Scoped repositories
    filter on the scope's tenant_id on every dialect.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self._scope: Optional[TenantScope] = None
        self._memberships: Optional[MembershipRepository] = None
        self._invitations: Optional[InvitationRepository] = None
        self._audit_logs: Optional[AuditLogRepository] = None
        self._settings: Optional[TenantSettingRepository] = None

    async def __aenter__(self):
        self.tenants = TenantRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Detach first so entities handed to callers keep their loaded state
        self.session.expunge_all()
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()

    @property
    def scope(self) -> Optional[TenantScope]:
        return self._scope

    @property
    def memberships(self) -> MembershipRepository:
        return self._require(self._memberships, "memberships")

    @property
    def invitations(self) -> InvitationRepository:
        return self._require(self._invitations, "invitations")

    @property
    def audit_logs(self) -> AuditLogRepository:
        return self._require(self._audit_logs, "audit_logs")

    @property
    def settings(self) -> TenantSettingRepository:
        return self._require(self._settings, "settings")

    @asynccontextmanager
    async def tenant_scope(self, tenant_id: UUID) -> AsyncIterator[TenantScope]:
        if self._scope is not None:
            raise TenantScopeError(
                f"Tenant scope for {self._scope.tenant_id} is already active"
            )

        scope = TenantScope(tenant_id=tenant_id)
        await self._set_scope_variable(str(tenant_id))
        self._bind(scope)
        logger.debug("Tenant scope entered: %s", tenant_id)
        try:
            yield scope
        except BaseException:
            # Rolling back discards the transaction-local setting as well
            await self.session.rollback()
            raise
        else:
            await self._set_scope_variable("")
        finally:
            self._unbind()
            logger.debug("Tenant scope exited: %s", tenant_id)

    def _bind(self, scope: TenantScope) -> None:
        self._scope = scope
        self._memberships = MembershipRepository(self.session, scope)
        self._invitations = InvitationRepository(self.session, scope)
        self._audit_logs = AuditLogRepository(self.session, scope)
        self._settings = TenantSettingRepository(self.session, scope)

    def _unbind(self) -> None:
        self._scope = None
        self._memberships = None
        self._invitations = None
        self._audit_logs = None
        self._settings = None

    def _require(self, repository, name: str):
        if repository is None:
            logger.critical("Tenant-scoped repository '%s' used without a scope", name)
            raise TenantContextMissing(name)
        return repository

    async def _set_scope_variable(self, value: str) -> None:
        if not supports_row_level_security(self.session.get_bind().dialect.name):
            return
        await self.session.execute(scope_statement(), {"tenant_id": value})
