"""Применение статусов Uniteller к заказу."""

import logging

from ..domain.entities import OrderEntity, PaymentStatus
from ..domain.ports import OrderGateway
from ..domain.value_objects import (
    STATUS_AUTHORIZED,
    STATUS_CANCELED,
    STATUS_PAID,
    StatusUpdate,
)
from ..exceptions import UnsupportedStatusError

logger = logging.getLogger(__name__)


class OrderStatusUpdater:
    """
    Переводит статус Uniteller в запрос перехода статуса оплаты заказа.

    Переход запрашивается только если платформа считает его допустимым;
    статус сравнивается без учёта регистра.
    """

    def __init__(self, orders: OrderGateway) -> None:
        self._orders = orders

    async def apply(self, order: OrderEntity, status: str) -> StatusUpdate:
        """
        Применить статус к заказу.

        Args:
            order: Заказ
            status: Статус из уведомления или ответа Uniteller

        Returns:
            Заказ после перехода и текст для ответа Uniteller

        Raises:
            UnsupportedStatusError: Если статус неизвестен
        """
        status = (status or "").upper()

        if status == STATUS_CANCELED:
            if order.payment_status in (
                PaymentStatus.paid,
                PaymentStatus.authorized,
            ) and await self._orders.can_cancel(order):
                order = await self._orders.cancel(order, from_payment_notice=True)
            return StatusUpdate(order=order, message="Your order has been canceled")

        if status == STATUS_AUTHORIZED:
            if await self._orders.can_mark_authorized(order):
                order = await self._orders.mark_authorized(order)
            return StatusUpdate(order=order, message="Your order has been authorized")

        if status == STATUS_PAID:
            if await self._orders.can_mark_paid(order):
                order = await self._orders.mark_paid(order)
            return StatusUpdate(order=order, message="Your order has been paid")

        logger.warning("Заказ %s: неподдерживаемый статус Uniteller '%s'", order.id, status)
        raise UnsupportedStatusError(
            "Unsupported status",
            details={"order_id": order.id, "status": status},
        )
