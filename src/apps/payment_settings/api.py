from fastapi import APIRouter, Query, status

from .dependencies import SettingsSvcDep
from .schemas import ProviderSettingsIn, ProviderSettingsOut

router = APIRouter()


@router.get("/settings", response_model=ProviderSettingsOut)
async def get_settings(
    service: SettingsSvcDep,
    store_id: int = Query(0, ge=0, description="ID магазина, 0 - общие настройки"),
):
    """
    Получить настройки Uniteller для магазина (без пароля).
    Для конкретного магазина дополнительно возвращаются флаги переопределения.
    """
    return await service.describe(store_id)


@router.post(
    "/settings",
    response_model=ProviderSettingsOut,
    status_code=status.HTTP_201_CREATED,
)
async def save_settings(
    payload: ProviderSettingsIn,
    service: SettingsSvcDep,
    store_id: int = Query(0, ge=0, description="ID магазина, 0 - общие настройки"),
):
    """
    Сохранить настройки Uniteller.
    """
    return await service.save(payload, store_id)
