"""Доменные сущности платёжного модуля Uniteller."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional
from uuid import UUID


class PaymentStatus(str, Enum):
    pending = "Pending"
    authorized = "Authorized"
    paid = "Paid"
    partially_refunded = "PartiallyRefunded"
    refunded = "Refunded"
    voided = "Voided"


@dataclass
class OrderEntity:
    """Заказ платформы магазина (внешняя сущность, меняется только через OrderGateway)."""

    id: int
    order_guid: UUID
    customer_id: int
    order_total: Decimal
    payment_status: PaymentStatus
    created_on_utc: Optional[datetime] = None


@dataclass(frozen=True)
class OutboundPaymentRequest:
    """Подписанные данные для формы оплаты на сайте Uniteller."""

    shop_id: str
    order_id: str
    amount: str
    currency: str
    customer_id: str
    return_url_success: str
    return_url_failure: str
    signature: str

    def to_form_fields(self) -> Dict[str, str]:
        return {
            "Shop_IDP": self.shop_id,
            "Order_IDP": self.order_id,
            "Currency": self.currency,
            "Subtotal_P": self.amount,
            "Customer_IDP": self.customer_id,
            "Signature": self.signature,
            "URL_RETURN_NO": self.return_url_failure,
            "URL_RETURN_OK": self.return_url_success,
        }


@dataclass(frozen=True)
class RemotePostForm:
    """Автоматически отправляемая HTML-форма перенаправления."""

    url: str
    fields: Dict[str, str]
    form_name: str = "PayPoint"
    method: str = "post"


@dataclass(frozen=True)
class InboundCallback:
    """Уведомление Uniteller об изменении статуса оплаты."""

    order_id: str
    status: str
    signature: str

    def to_note(self) -> str:
        """Текст служебной заметки к заказу."""
        return (
            "Uniteller:\n"
            f"Order_ID: {self.order_id}\n"
            f"Signature: {self.signature}\n"
            f"Status: {self.status}\n"
        )


@dataclass
class OperationResult:
    """Результат операции платёжного метода."""

    errors: List[str] = field(default_factory=list)
    new_payment_status: Optional[PaymentStatus] = None

    @property
    def success(self) -> bool:
        return not self.errors

    @classmethod
    def failed(cls, error: str) -> "OperationResult":
        return cls(errors=[error])
