"""Интерфейсы внешних сервисов платформы магазина."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from .entities import OrderEntity


class OrderGateway(ABC):
    """Доступ к заказам платформы: поиск, заметки и переходы статуса оплаты."""

    @abstractmethod
    async def get_by_guid(self, order_guid: UUID) -> Optional[OrderEntity]:
        raise NotImplementedError

    @abstractmethod
    async def add_note(
        self,
        order: OrderEntity,
        note: str,
        display_to_customer: bool = False,
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    async def can_cancel(self, order: OrderEntity) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def cancel(
        self,
        order: OrderEntity,
        from_payment_notice: bool = True,
    ) -> OrderEntity:
        raise NotImplementedError

    @abstractmethod
    async def can_mark_authorized(self, order: OrderEntity) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def mark_authorized(self, order: OrderEntity) -> OrderEntity:
        raise NotImplementedError

    @abstractmethod
    async def can_mark_paid(self, order: OrderEntity) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def mark_paid(self, order: OrderEntity) -> OrderEntity:
        raise NotImplementedError


class CurrencyGateway(ABC):
    """Справочник валют платформы."""

    @abstractmethod
    async def get_currency_code(self, currency_id: int) -> str:
        raise NotImplementedError
