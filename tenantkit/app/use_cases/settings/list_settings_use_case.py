from tenantkit.app.services.tenant_context import TenantContext, require_permission
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.permissions import Permission
from tenantkit.libs.result import Result, Return

from .dtos import SettingListResponse, SettingResponse


class ListSettingsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: TenantContext) -> Result[SettingListResponse]:
        permitted = require_permission(ctx, Permission.settings_read)
        if permitted.is_err():
            return permitted

        async with self.uow:
            async with self.uow.tenant_scope(ctx.tenant_id):
                settings = await self.uow.settings.list()

            return Return.ok(
                SettingListResponse(settings=[SettingResponse.from_entity(s) for s in settings])
            )
