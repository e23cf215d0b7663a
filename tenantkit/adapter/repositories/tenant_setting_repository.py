from typing import List, Optional

from sqlmodel import select

from tenantkit.adapter.repositories.base import TenantScopedRepository
from tenantkit.app.repositories.tenant_setting_repository import ITenantSettingRepository
from tenantkit.domain.entities import TenantSetting


class TenantSettingRepository(TenantScopedRepository, ITenantSettingRepository):
    """TenantSetting repository implementation using SQLModel"""

    async def get(self, key: str) -> Optional[TenantSetting]:
        stmt = select(TenantSetting).where(
            TenantSetting.tenant_id == self.tenant_id, TenantSetting.key == key
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list(self) -> List[TenantSetting]:
        stmt = (
            select(TenantSetting)
            .where(TenantSetting.tenant_id == self.tenant_id)
            .order_by(TenantSetting.key)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, setting: TenantSetting) -> TenantSetting:
        setting.tenant_id = self.tenant_id
        return await self._save(setting)

    async def update(self, setting: TenantSetting) -> TenantSetting:
        return await self._save(setting)

    async def delete(self, setting: TenantSetting) -> None:
        await self.session.delete(setting)
        await self.session.flush()
