"""
Tenant Settings Use Cases
"""

from .delete_setting_use_case import DeleteSettingUseCase
from .dtos import (
    DeleteSettingResponse,
    PutSettingCommand,
    SettingListResponse,
    SettingResponse,
)
from .get_setting_use_case import GetSettingUseCase
from .list_settings_use_case import ListSettingsUseCase
from .put_setting_use_case import PutSettingUseCase

__all__ = [
    "ListSettingsUseCase",
    "GetSettingUseCase",
    "PutSettingUseCase",
    "DeleteSettingUseCase",
    "PutSettingCommand",
    "SettingResponse",
    "SettingListResponse",
    "DeleteSettingResponse",
]
