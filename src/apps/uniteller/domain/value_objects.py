"""Value Objects протокола Uniteller."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from ..exceptions import InvalidOrderReferenceError
from .entities import OrderEntity

STATUS_CANCELED = "CANCELED"
STATUS_AUTHORIZED = "AUTHORIZED"
STATUS_PAID = "PAID"

RESULTS_FORMAT_XML = "4"

SUCCESS_PATH = "Plugins/Uniteller/Success"
CANCEL_ORDER_PATH = "Plugins/Uniteller/CancelOrder"


def parse_order_guid(raw: str) -> UUID:
    """
    Разобрать номер заказа из запроса Uniteller.

    Raises:
        InvalidOrderReferenceError: Если строка не является GUID
    """
    try:
        return UUID((raw or "").strip())
    except ValueError as exc:
        raise InvalidOrderReferenceError(
            "Order cannot be loaded",
            details={"order_id": raw},
        ) from exc


def format_amount(value: Decimal) -> str:
    """Сумма с двумя знаками после точки, как её подписывает Uniteller."""
    quantized = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{quantized:f}"


def normalize_site_url(store_url: str) -> str:
    """Uniteller не принимает localhost в адресах возврата."""
    site_url = store_url.replace("localhost", "127.0.0.1")
    if not site_url.endswith("/"):
        site_url += "/"
    return site_url


@dataclass(frozen=True)
class CallbackResult:
    """Ответ на уведомление: строка SUCCESS/FAIL и описание."""

    success: bool
    message: str

    @property
    def banner(self) -> str:
        return "SUCCESS" if self.success else "FAIL"

    def to_text(self, merchant_system_name: str) -> str:
        return f"{self.banner}\r\n{merchant_system_name}. {self.message}"


@dataclass(frozen=True)
class StatusUpdate:
    """Результат применения статуса Uniteller к заказу."""

    order: OrderEntity
    message: str
