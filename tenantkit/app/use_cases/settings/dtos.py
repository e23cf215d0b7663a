from typing import Any, List, Optional

from pydantic import BaseModel

from tenantkit.domain.entities import TenantSetting


class PutSettingCommand(BaseModel):
    value: Optional[Any] = None


class SettingResponse(BaseModel):
    key: str
    value: Optional[Any] = None
    updated_at: str

    @classmethod
    def from_entity(cls, setting: TenantSetting) -> "SettingResponse":
        return cls(key=setting.key, value=setting.value, updated_at=setting.updated_at.isoformat())


class SettingListResponse(BaseModel):
    settings: List[SettingResponse]


class DeleteSettingResponse(BaseModel):
    status: str
