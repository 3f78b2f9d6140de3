"""Репозиторий значений настроек."""

from typing import Dict

from sqlalchemy.exc import SQLAlchemyError

from src.core.repository import SQLAlchemyRepository

from ..exceptions import SettingsRepositoryError
from ..models import Setting


class SettingRepository(SQLAlchemyRepository[Setting]):
    """Чтение и запись настроек в разрезе магазина."""

    model = Setting

    async def get_values(self, store_id: int) -> Dict[str, str]:
        """
        Все значения настроек, сохранённые именно для этого магазина.

        Args:
            store_id: ID магазина (0 - общие значения)

        Returns:
            Словарь ключ настройки -> строковое значение
        """
        try:
            models = await self.find(store_id=store_id)
        except SQLAlchemyError as exc:
            raise SettingsRepositoryError(
                "Ошибка чтения настроек",
                details={"store_id": store_id, "error": str(exc)},
            ) from exc
        return {model.name: model.value for model in models}

    async def set_value(self, name: str, value: str, store_id: int) -> Setting:
        """Создать или обновить значение настройки."""
        try:
            model = await self.get_one(name=name, store_id=store_id)
            if model is None:
                return await self.create(name=name, value=value, store_id=store_id)
            return await self.update(model.id, value=value)
        except SQLAlchemyError as exc:
            raise SettingsRepositoryError(
                "Ошибка сохранения настройки",
                details={"name": name, "store_id": store_id, "error": str(exc)},
            ) from exc

    async def delete_value(self, name: str, store_id: int) -> bool:
        """Удалить значение настройки для магазина."""
        try:
            deleted = await self.hard_delete(name=name, store_id=store_id)
        except SQLAlchemyError as exc:
            raise SettingsRepositoryError(
                "Ошибка удаления настройки",
                details={"name": name, "store_id": store_id, "error": str(exc)},
            ) from exc
        return deleted > 0
