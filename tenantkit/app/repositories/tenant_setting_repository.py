from abc import ABC, abstractmethod
from typing import List, Optional

from tenantkit.domain.entities import TenantSetting


class ITenantSettingRepository(ABC):
    """TenantSetting repository interface - tenant scoped"""

    @abstractmethod
    async def get(self, key: str) -> Optional[TenantSetting]:
        pass

    @abstractmethod
    async def list(self) -> List[TenantSetting]:
        pass

    @abstractmethod
    async def create(self, setting: TenantSetting) -> TenantSetting:
        pass

    @abstractmethod
    async def update(self, setting: TenantSetting) -> TenantSetting:
        pass

    @abstractmethod
    async def delete(self, setting: TenantSetting) -> None:
        pass
