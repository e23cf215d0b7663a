from tenantkit.app.services.audit_trail import audit_entry
from tenantkit.app.services.tenant_context import TenantContext, require_permission
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.errors import SETTING_NOT_FOUND
from tenantkit.domain.permissions import Permission
from tenantkit.libs.result import Error, Result, Return

from .dtos import DeleteSettingResponse


class DeleteSettingUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, ctx: TenantContext, key: str) -> Result[DeleteSettingResponse]:
        permitted = require_permission(ctx, Permission.settings_update)
        if permitted.is_err():
            return permitted

        async with self.uow:
            async with self.uow.tenant_scope(ctx.tenant_id):
                setting = await self.uow.settings.get(key)
                if setting is None:
                    return Return.err(Error(SETTING_NOT_FOUND, f"Setting not found: {key}"))

                await self.uow.settings.delete(setting)
                await self.uow.audit_logs.create(
                    audit_entry(
                        action="setting_deleted",
                        resource_type="setting",
                        resource_id=key,
                        ctx=ctx,
                    )
                )

                await self.uow.commit()

                return Return.ok(DeleteSettingResponse(status="deleted"))
