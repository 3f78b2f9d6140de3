"""Обработка уведомлений Uniteller и сверка статуса при возврате покупателя."""

import logging
from typing import Callable, Optional

from ..domain.entities import InboundCallback, OrderEntity, PaymentStatus
from ..domain.ports import OrderGateway
from ..domain.value_objects import CallbackResult, parse_order_guid
from ..exceptions import (
    InvalidOrderReferenceError,
    ProviderUnavailableError,
    SignatureMismatchError,
    UnsupportedStatusError,
)
from .payment_processor import UnitellerPaymentProcessor
from .signature import verify_callback_signature
from .status_updater import OrderStatusUpdater

logger = logging.getLogger(__name__)


class CallbackService:
    """
    Сервис уведомлений Uniteller.

    Координирует проверку подписи, заметки к заказу и переходы
    статуса оплаты через OrderGateway.
    """

    def __init__(
        self,
        orders: OrderGateway,
        processor_factory: Callable[[], UnitellerPaymentProcessor],
    ) -> None:
        """
        Args:
            orders: Заказы платформы
            processor_factory: Создаёт платёжный метод; вызывается только там,
                где он действительно нужен
        """
        self._orders = orders
        self._processor_factory = processor_factory
        self._updater = OrderStatusUpdater(orders)

    async def confirm_pay(self, callback: InboundCallback) -> CallbackResult:
        """
        Обработать уведомление об оплате.

        Заметка с полученными данными добавляется к заказу до проверки
        подписи, поэтому остаётся и для отклонённых уведомлений.

        Raises:
            InvalidOrderReferenceError: Номер заказа не GUID или заказ не найден
            SignatureMismatchError: Подпись не совпала
            UnsupportedStatusError: Неизвестный статус
        """
        processor = self._processor_factory()

        order_guid = parse_order_guid(callback.order_id)

        order = await self._orders.get_by_guid(order_guid)
        if order is None:
            raise InvalidOrderReferenceError(
                "Order cannot be loaded",
                details={"order_id": callback.order_id},
            )

        await self._orders.add_note(order, callback.to_note(), display_to_customer=False)

        if not verify_callback_signature(
            callback.order_id,
            callback.status,
            processor.settings.password,
            callback.signature,
        ):
            raise SignatureMismatchError(
                "Invalid order data",
                details={"order_id": callback.order_id, "status": callback.status},
            )

        update = await self._updater.apply(order, callback.status)
        logger.info(
            "Уведомление Uniteller обработано: заказ %s, статус %s",
            order.id,
            callback.status,
        )
        return CallbackResult(success=True, message=update.message)

    async def reconcile(self, raw_order_id: str) -> Optional[OrderEntity]:
        """
        Сверить статус оплаты с Uniteller при возврате покупателя.

        Returns:
            Заказ после применения статусов или None, если заказ не найден
        """
        try:
            order_guid = parse_order_guid(raw_order_id)
        except InvalidOrderReferenceError:
            logger.warning("Возврат покупателя с некорректным Order_ID: %r", raw_order_id)
            return None

        order = await self._orders.get_by_guid(order_guid)
        if order is None:
            return None

        if order.payment_status == PaymentStatus.paid:
            return order

        processor = self._processor_factory()
        try:
            statuses = await processor.get_payment_status(str(order.order_guid))
        except ProviderUnavailableError as exc:
            logger.error(
                "Не удалось получить статус заказа %s из Uniteller: %s, details=%s",
                order.id,
                exc.message,
                exc.details,
            )
            return order

        for status in statuses:
            try:
                order = (await self._updater.apply(order, status)).order
            except UnsupportedStatusError:
                continue

        return order
