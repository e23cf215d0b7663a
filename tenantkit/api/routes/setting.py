from typing import Annotated

from fastapi import APIRouter, Depends, Path

from tenantkit.api.error import raise_for_error
from tenantkit.app.services.tenant_context import TenantContext
from tenantkit.app.services.unit_of_work import UnitOfWork
from tenantkit.app.use_cases.settings import (
    DeleteSettingResponse,
    DeleteSettingUseCase,
    GetSettingUseCase,
    ListSettingsUseCase,
    PutSettingCommand,
    PutSettingUseCase,
    SettingListResponse,
    SettingResponse,
)
from tenantkit.depends import get_tenant_context, get_unit_of_work

router = APIRouter(prefix="/settings", tags=["Settings"])

SettingKey = Annotated[str, Path(min_length=1, max_length=100, pattern=r"^[A-Za-z0-9_.:-]+$")]


@router.get("", response_model=SettingListResponse)
async def list_settings(
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListSettingsUseCase(uow).execute(ctx)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{key}", response_model=SettingResponse)
async def get_setting(
    key: SettingKey,
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetSettingUseCase(uow).execute(ctx, key)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put("/{key}", response_model=SettingResponse)
async def put_setting(
    request: PutSettingCommand,
    key: SettingKey,
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await PutSettingUseCase(uow).execute(ctx, key, request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{key}", response_model=DeleteSettingResponse)
async def delete_setting(
    key: SettingKey,
    ctx: TenantContext = Depends(get_tenant_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await DeleteSettingUseCase(uow).execute(ctx, key)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
