"""Value Objects для хранения настроек."""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict

SETTINGS_PREFIX = "unitellerpaymentsettings"

# Поле ProviderSettings -> суффикс ключа в таблице настроек
SETTING_FIELDS: Dict[str, str] = {
    "shop_idp": "shopidp",
    "login": "login",
    "password": "password",
    "additional_fee": "additionalfee",
    "additional_fee_percentage": "additionalfeepercentage",
}

GLOBAL_STORE_ID = 0

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettingKey:
    """Ключ настройки (Value Object)."""

    field: str

    @property
    def name(self) -> str:
        return f"{SETTINGS_PREFIX}.{SETTING_FIELDS[self.field]}"

    def to_storage(self, value: Any) -> str:
        """Преобразовать значение поля в строку для БД."""
        if isinstance(value, bool):
            return "True" if value else "False"
        if value is None:
            return ""
        return str(value)

    def from_storage(self, raw: str) -> Any:
        """Восстановить значение поля из строки БД."""
        if self.field == "additional_fee_percentage":
            return raw.strip().lower() == "true"
        if self.field == "additional_fee":
            try:
                return Decimal(raw)
            except InvalidOperation:
                logger.warning(
                    "Некорректное значение настройки %s: %r, используется 0",
                    self.name,
                    raw,
                )
                return Decimal("0")
        return raw


SETTING_KEYS = [SettingKey(field) for field in SETTING_FIELDS]
