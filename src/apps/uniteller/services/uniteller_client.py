"""Клиент для запроса статуса оплаты в Uniteller."""

import logging
from typing import List, Optional
from xml.etree import ElementTree

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..domain.value_objects import RESULTS_FORMAT_XML
from ..exceptions import ProviderTemporaryError, ProviderUnavailableError

logger = logging.getLogger(__name__)


class UnitellerClient:
    """
    Клиент запроса результатов оплаты Uniteller (сервер-сервер).

    Запрос повторяется при таймауте, сетевой ошибке и ответе 5xx;
    после исчерпания попыток выбрасывается ProviderTemporaryError
    (подкласс ProviderUnavailableError). Ответ 4xx не повторяется.
    """

    def __init__(
        self,
        results_url: str,
        timeout: float = 10.0,
        retry_attempts: int = 3,
        retry_wait_max: float = 4.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._results_url = results_url
        self._timeout = timeout
        self._retry_attempts = max(1, retry_attempts)
        self._retry_wait_max = retry_wait_max
        self._transport = transport

    async def get_payment_statuses(
        self,
        order_id: str,
        shop_idp: str,
        login: str,
        password: str,
    ) -> List[str]:
        """
        Получить статусы оплаты заказа.

        Args:
            order_id: GUID заказа, переданный в Order_IDP
            shop_idp: Идентификатор точки Uniteller
            login: Логин
            password: Пароль

        Returns:
            Статусы в верхнем регистре в порядке ответа Uniteller
        """
        data = {
            "Shop_ID": shop_idp,
            "Login": login,
            "Password": password,
            "Format": RESULTS_FORMAT_XML,
            "ShopOrderNumber": order_id,
            "S_FIELDS": "Status",
        }

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._retry_attempts),
            wait=wait_exponential(multiplier=1, min=0, max=self._retry_wait_max),
            retry=retry_if_exception_type(ProviderTemporaryError),
            reraise=True,
        ):
            with attempt:
                body = await self._post(data)

        statuses = self.parse_statuses(body)
        logger.info("Статусы Uniteller для заказа %s: %s", order_id, statuses)
        return statuses

    async def _post(self, data: dict) -> bytes:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                logger.debug("Запрос статуса оплаты: %s", data["ShopOrderNumber"])

                resp = await client.post(self._results_url, data=data)
                resp.raise_for_status()
                return resp.content
        except httpx.TimeoutException as exc:
            logger.warning("Таймаут запроса к Uniteller: %s", exc)
            raise ProviderTemporaryError(
                "Uniteller did not respond in time",
                details={"url": self._results_url, "error": str(exc)},
            ) from exc
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.warning("Uniteller вернул HTTP %s", status_code)
            error_class = (
                ProviderTemporaryError if status_code >= 500 else ProviderUnavailableError
            )
            raise error_class(
                "Uniteller returned an error",
                details={"status_code": status_code, "error": str(exc)},
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Ошибка соединения с Uniteller: %s", exc)
            raise ProviderTemporaryError(
                "Uniteller is unavailable",
                details={"url": self._results_url, "error": str(exc)},
            ) from exc

    @staticmethod
    def parse_statuses(body: bytes) -> List[str]:
        """
        Разобрать XML-ответ Uniteller.

        Ответ без XML (например, сообщение об ошибке авторизации)
        считается ответом без статусов.
        """
        if b"?xml" not in body:
            return []

        try:
            root = ElementTree.fromstring(body)
        except ElementTree.ParseError as exc:
            raise ProviderUnavailableError(
                "Uniteller returned malformed XML",
                details={"error": str(exc)},
            ) from exc

        order = root.find("orders/order")
        if order is None:
            return []

        return [(status.text or "").strip().upper() for status in order.findall("status")]
