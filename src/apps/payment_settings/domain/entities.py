"""Доменные сущности настроек Uniteller."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ProviderSettings:
    """
    Настройки подключения к Uniteller, уже разрешённые для магазина.

    Создаётся один раз на запрос и дальше передаётся в операции
    только для чтения.
    """

    shop_idp: str = ""
    login: str = ""
    password: str = ""
    additional_fee: Decimal = Decimal("0")
    additional_fee_percentage: bool = False

    def is_configured(self) -> bool:
        """Заданы ли идентификатор точки и пароль."""
        return bool(self.shop_idp) and bool(self.password)
