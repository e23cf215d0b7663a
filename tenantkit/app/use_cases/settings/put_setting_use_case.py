"""
Put Setting Use Case

Upsert of one tenant setting on (tenant, key).
"""

from tenantkit.app.services.audit_trail import audit_entry
from tenantkit.app.services.tenant_context import TenantContext, require_permission
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.domain.entities import TenantSetting
from tenantkit.domain.permissions import Permission
from tenantkit.libs.result import Result, Return

from .dtos import PutSettingCommand, SettingResponse


class PutSettingUseCase:
    """
    Create or replace a setting value (settings:update).

    The tenant row lock serializes concurrent upserts of one key; the
    unique (tenant_id, key) index backs it.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, ctx: TenantContext, key: str, command: PutSettingCommand
    ) -> Result[SettingResponse]:
        permitted = require_permission(ctx, Permission.settings_update)
        if permitted.is_err():
            return permitted

        async with self.uow:
            async with self.uow.tenant_scope(ctx.tenant_id):
                await self.uow.tenants.lock(ctx.tenant_id)

                setting = await self.uow.settings.get(key)
                created = setting is None
                if created:
                    setting = await self.uow.settings.create(
                        TenantSetting(key=key, value=command.value)
                    )
                else:
                    setting.value = command.value
                    setting = await self.uow.settings.update(setting)

                await self.uow.audit_logs.create(
                    audit_entry(
                        action="setting_created" if created else "setting_updated",
                        resource_type="setting",
                        resource_id=key,
                        ctx=ctx,
                    )
                )

                await self.uow.commit()

                return Return.ok(SettingResponse.from_entity(setting))
