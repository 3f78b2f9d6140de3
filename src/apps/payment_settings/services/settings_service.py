"""Сервис чтения и сохранения настроек Uniteller с переопределением по магазинам."""

import logging
from typing import Dict, Optional

from src.core.config import Settings, settings

from ..domain.entities import ProviderSettings
from ..domain.value_objects import GLOBAL_STORE_ID, SETTING_KEYS
from ..schemas import ProviderSettingsIn, ProviderSettingsOut
from ..uow.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SettingsService:
    """
    Сервис настроек платёжного модуля.

    Значение поля для магазина разрешается так: значение магазина,
    затем общее значение (store_id=0), затем значение из конфигурации.
    """

    def __init__(self, uow: UnitOfWork, defaults: Optional[Settings] = None) -> None:
        self._uow = uow
        self._defaults = defaults or settings

    def _default_values(self) -> Dict[str, object]:
        return {
            "shop_idp": self._defaults.uniteller_shop_idp,
            "login": self._defaults.uniteller_login,
            "password": self._defaults.uniteller_password,
            "additional_fee": self._defaults.uniteller_additional_fee,
            "additional_fee_percentage": self._defaults.uniteller_additional_fee_percentage,
        }

    async def load(self, store_id: int = GLOBAL_STORE_ID) -> ProviderSettings:
        """
        Загрузить настройки для магазина.

        Args:
            store_id: ID магазина (0 - общие настройки)

        Returns:
            Разрешённые настройки
        """
        values = self._default_values()

        shared = await self._uow.settings.get_values(GLOBAL_STORE_ID)
        own = {}
        if store_id > GLOBAL_STORE_ID:
            own = await self._uow.settings.get_values(store_id)

        for key in SETTING_KEYS:
            raw = own.get(key.name, shared.get(key.name))
            if raw is not None:
                values[key.field] = key.from_storage(raw)

        return ProviderSettings(**values)

    async def get_overrides(self, store_id: int) -> Dict[str, bool]:
        """Какие поля переопределены для магазина."""
        stored = await self._uow.settings.get_values(store_id)
        return {key.field: key.name in stored for key in SETTING_KEYS}

    async def describe(self, store_id: int = GLOBAL_STORE_ID) -> ProviderSettingsOut:
        """Настройки для отображения (без пароля)."""
        loaded = await self.load(store_id)
        overrides = None
        if store_id > GLOBAL_STORE_ID:
            overrides = await self.get_overrides(store_id)

        return ProviderSettingsOut(
            store_id=store_id,
            shop_idp=loaded.shop_idp,
            login=loaded.login,
            has_password=bool(loaded.password),
            additional_fee=loaded.additional_fee,
            additional_fee_percentage=loaded.additional_fee_percentage,
            overrides=overrides,
        )

    async def save(
        self,
        payload: ProviderSettingsIn,
        store_id: int = GLOBAL_STORE_ID,
    ) -> ProviderSettingsOut:
        """
        Сохранить настройки.

        Для конкретного магазина поле без флага переопределения удаляется
        из настроек магазина и дальше берётся из общих.
        """
        async with self._uow:
            for key in SETTING_KEYS:
                value = getattr(payload, key.field)

                if store_id == GLOBAL_STORE_ID or payload.override_for(key.field):
                    if value is None:
                        # пароль не передан: сохранённое значение не меняем
                        continue
                    await self._uow.settings.set_value(
                        key.name, key.to_storage(value), store_id
                    )
                else:
                    await self._uow.settings.delete_value(key.name, store_id)

            await self._uow.commit()

        logger.info(
            "Сохранены настройки Uniteller: store_id=%s, shop_idp=%s",
            store_id,
            payload.shop_idp,
        )
        return await self.describe(store_id)
