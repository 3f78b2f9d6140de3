"""Платёжный метод Uniteller."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from src.apps.payment_settings.domain.entities import ProviderSettings

from ..domain.entities import (
    OperationResult,
    OrderEntity,
    OutboundPaymentRequest,
    PaymentStatus,
    RemotePostForm,
)
from ..domain.ports import CurrencyGateway
from ..domain.value_objects import (
    CANCEL_ORDER_PATH,
    SUCCESS_PATH,
    format_amount,
    normalize_site_url,
)
from ..exceptions import UnitellerModuleError
from .signature import build_payment_signature
from .uniteller_client import UnitellerClient

logger = logging.getLogger(__name__)

REPOST_DELAY = timedelta(seconds=5)


class PaymentMethod(ABC):
    """Платёжный метод с перенаправлением на сайт платёжной системы."""

    supports_capture = False
    supports_partial_refund = False
    supports_refund = False
    supports_void = False
    supports_recurring = False
    method_type = "redirection"

    @abstractmethod
    def process_payment(self) -> OperationResult:
        raise NotImplementedError

    @abstractmethod
    async def post_process_payment(
        self, order: OrderEntity, store_url: str
    ) -> RemotePostForm:
        raise NotImplementedError

    @abstractmethod
    async def get_payment_status(self, order_id: str) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    def get_additional_handling_fee(self, subtotal: Decimal) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def can_repost_process_payment(
        self, order: OrderEntity, now: Optional[datetime] = None
    ) -> bool:
        raise NotImplementedError


class UnitellerPaymentProcessor(PaymentMethod):
    """Оплата через платёжную страницу Uniteller."""

    description = "For payment you will be redirected to the website uniteller.ru."

    def __init__(
        self,
        provider_settings: ProviderSettings,
        client: UnitellerClient,
        currencies: CurrencyGateway,
        pay_url: str,
        currency_id: int,
    ) -> None:
        if not provider_settings.is_configured():
            raise UnitellerModuleError("Uniteller module cannot be loaded")

        self.settings = provider_settings
        self._client = client
        self._currencies = currencies
        self._pay_url = pay_url
        self._currency_id = currency_id

    def process_payment(self) -> OperationResult:
        """Оплата происходит на стороне Uniteller, заказ ждёт уведомления."""
        return OperationResult(new_payment_status=PaymentStatus.pending)

    def build_payment_request(
        self,
        order: OrderEntity,
        currency: str,
        store_url: str,
    ) -> OutboundPaymentRequest:
        """
        Подготовить подписанные данные формы оплаты.

        Args:
            order: Заказ
            currency: Код валюты магазина
            store_url: Адрес магазина для ссылок возврата

        Returns:
            Данные формы с подписью
        """
        order_id = str(order.order_guid)
        amount = format_amount(order.order_total)
        customer_id = str(order.customer_id)
        site_url = normalize_site_url(store_url)

        signature = build_payment_signature(
            shop_idp=self.settings.shop_idp,
            order_idp=order_id,
            subtotal=amount,
            customer_idp=customer_id,
            password=self.settings.password,
        )

        return OutboundPaymentRequest(
            shop_id=self.settings.shop_idp,
            order_id=order_id,
            amount=amount,
            currency=currency,
            customer_id=customer_id,
            return_url_success=f"{site_url}{SUCCESS_PATH}",
            return_url_failure=f"{site_url}{CANCEL_ORDER_PATH}",
            signature=signature,
        )

    async def post_process_payment(
        self, order: OrderEntity, store_url: str
    ) -> RemotePostForm:
        currency = await self._currencies.get_currency_code(self._currency_id)
        request = self.build_payment_request(order, currency, store_url)

        logger.info(
            "Перенаправление на Uniteller: заказ %s, сумма %s %s",
            request.order_id,
            request.amount,
            request.currency,
        )
        return RemotePostForm(url=self._pay_url, fields=request.to_form_fields())

    async def get_payment_status(self, order_id: str) -> List[str]:
        """Статусы оплаты заказа по данным Uniteller."""
        return await self._client.get_payment_statuses(
            order_id=order_id,
            shop_idp=self.settings.shop_idp,
            login=self.settings.login,
            password=self.settings.password,
        )

    def get_additional_handling_fee(self, subtotal: Decimal) -> Decimal:
        fee = self.settings.additional_fee
        if fee <= 0:
            return Decimal("0")
        if self.settings.additional_fee_percentage:
            return (Decimal(subtotal) * fee / Decimal(100)).quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP
            )
        return fee

    def can_repost_process_payment(
        self, order: OrderEntity, now: Optional[datetime] = None
    ) -> bool:
        # повторная оплата доступна не раньше чем через 5 секунд после создания заказа
        if order.created_on_utc is None:
            return True
        now = now or datetime.now(timezone.utc)
        created = order.created_on_utc
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return now - created >= REPOST_DELAY

    def capture(self) -> OperationResult:
        return OperationResult.failed("Capture method not supported")

    def refund(self) -> OperationResult:
        return OperationResult.failed("Refund method not supported")

    def void(self) -> OperationResult:
        return OperationResult.failed("Void method not supported")

    def process_recurring_payment(self) -> OperationResult:
        return OperationResult.failed("Recurring payment not supported")

    def cancel_recurring_payment(self) -> OperationResult:
        return OperationResult.failed("Recurring payment not supported")
