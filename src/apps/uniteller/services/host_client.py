"""Клиент для работы с API платформы магазина (заказы и валюты)."""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

import httpx
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..domain.entities import OrderEntity
from ..domain.ports import CurrencyGateway, OrderGateway
from ..exceptions import HostAPIError, HostTemporaryError
from ..schemas import HostAllowedTransitions, HostCurrency, HostOrder

logger = logging.getLogger(__name__)


class HostPlatformClient(OrderGateway, CurrencyGateway):
    """
    Клиент REST API платформы магазина.

    Платёжный модуль не меняет поля заказа сам, а запрашивает
    у платформы именованные переходы статуса оплаты.
    Повторяются только GET-запросы при недоступности платформы;
    заметки и переходы отправляются один раз.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Инициализировать клиент платформы.

        Args:
            base_url: Базовый URL API платформы
            token: Bearer-токен
            timeout: Таймаут запросов в секундах
            transport: Транспорт httpx (для тестов)
        """
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport

    def _get_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Выполнить один запрос к API платформы.

        Returns:
            Тело ответа или None, если объект не найден (404)

        Raises:
            HostTemporaryError: Сетевая ошибка, таймаут или ответ 5xx
            HostAPIError: Ответ 4xx или некорректное тело
        """
        url = f"{self._base_url}{path}"
        try:
            async with httpx.AsyncClient(
                headers=self._get_headers(),
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                logger.debug("%s %s", method, url)

                resp = await client.request(method, url, json=json)
                if resp.status_code == 404:
                    return None
                resp.raise_for_status()
                return resp.json() if resp.content else {}
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            error_class = HostTemporaryError if status_code >= 500 else HostAPIError
            raise error_class(
                "Order service returned an error",
                details={"status_code": status_code, "method": method, "url": url},
            ) from exc
        except httpx.HTTPError as exc:
            raise HostTemporaryError(
                "Order service is unavailable",
                details={"method": method, "url": url, "error": str(exc)},
            ) from exc
        except ValueError as exc:
            raise HostAPIError(
                "Order service returned an invalid response",
                details={"method": method, "url": url, "error": str(exc)},
            ) from exc

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(HostTemporaryError),
        reraise=True,
    )
    async def _get(self, path: str) -> Optional[Dict[str, Any]]:
        """GET с повторами: чтение можно безопасно повторить."""
        return await self._send("GET", path)

    async def _post(
        self,
        path: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """POST без повторов: заметки и переходы статуса не идемпотентны."""
        return await self._send("POST", path, json=json)

    async def get_by_guid(self, order_guid: UUID) -> Optional[OrderEntity]:
        data = await self._get(f"/orders/{order_guid}")
        if data is None:
            logger.info("Заказ %s не найден на платформе", order_guid)
            return None
        return self._to_entity(data)

    async def add_note(
        self,
        order: OrderEntity,
        note: str,
        display_to_customer: bool = False,
    ) -> None:
        await self._post(
            f"/orders/{order.id}/notes",
            json={"note": note, "displayToCustomer": display_to_customer},
        )

    async def _allowed_transitions(self, order: OrderEntity) -> HostAllowedTransitions:
        data = await self._get(f"/orders/{order.id}/allowed-transitions")
        return HostAllowedTransitions.model_validate(data or {})

    async def can_cancel(self, order: OrderEntity) -> bool:
        return (await self._allowed_transitions(order)).cancel

    async def can_mark_authorized(self, order: OrderEntity) -> bool:
        return (await self._allowed_transitions(order)).markAuthorized

    async def can_mark_paid(self, order: OrderEntity) -> bool:
        return (await self._allowed_transitions(order)).markPaid

    async def cancel(
        self,
        order: OrderEntity,
        from_payment_notice: bool = True,
    ) -> OrderEntity:
        return await self._transition(
            order, "cancel", {"fromPaymentNotice": from_payment_notice}
        )

    async def mark_authorized(self, order: OrderEntity) -> OrderEntity:
        return await self._transition(order, "mark-authorized")

    async def mark_paid(self, order: OrderEntity) -> OrderEntity:
        return await self._transition(order, "mark-paid")

    async def _transition(
        self,
        order: OrderEntity,
        action: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> OrderEntity:
        data = await self._post(f"/orders/{order.id}/{action}", json=payload or {})
        if not data:
            raise HostAPIError(
                "Order cannot be updated",
                details={"order_id": order.id, "action": action},
            )
        updated = self._to_entity(data)
        logger.info(
            "Заказ %s: %s, статус оплаты %s -> %s",
            order.id,
            action,
            order.payment_status.value,
            updated.payment_status.value,
        )
        return updated

    async def get_currency_code(self, currency_id: int) -> str:
        data = await self._get(f"/currencies/{currency_id}")
        if data is None:
            raise HostAPIError(
                "Primary store currency cannot be loaded",
                details={"currency_id": currency_id},
            )
        try:
            return HostCurrency.model_validate(data).currencyCode
        except ValidationError as exc:
            raise HostAPIError(
                "Order service returned an unexpected currency",
                details={"currency_id": currency_id, "error": str(exc)},
            ) from exc

    @staticmethod
    def _to_entity(data: dict) -> OrderEntity:
        """Преобразовать данные API в доменную сущность."""
        try:
            order = HostOrder.model_validate(data)
        except ValidationError as exc:
            raise HostAPIError(
                "Order service returned an unexpected order",
                details={"error": str(exc)},
            ) from exc
        return OrderEntity(
            id=order.id,
            order_guid=order.orderGuid,
            customer_id=order.customerId,
            order_total=order.orderTotal,
            payment_status=order.paymentStatus,
            created_on_utc=order.createdOnUtc,
        )
