"""Dependency Injection для настроек платёжного модуля."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.database import get_session

from .domain.entities import ProviderSettings
from .services.settings_service import SettingsService
from .uow.unit_of_work import UnitOfWork


async def get_uow(session: AsyncSession = Depends(get_session)) -> UnitOfWork:
    return UnitOfWork(session)


async def get_settings_service(
    uow: UnitOfWork = Depends(get_uow),
) -> SettingsService:
    return SettingsService(uow=uow)


async def get_provider_settings(
    service: SettingsService = Depends(get_settings_service),
) -> ProviderSettings:
    """Разрешить настройки Uniteller для текущего магазина один раз на запрос."""
    return await service.load(settings.store_scope)


SettingsSvcDep = Annotated[SettingsService, Depends(get_settings_service)]
ProviderSettingsDep = Annotated[ProviderSettings, Depends(get_provider_settings)]
