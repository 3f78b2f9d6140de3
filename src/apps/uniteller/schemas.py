"""Pydantic схемы платёжного модуля Uniteller."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from .domain.entities import PaymentStatus


class HostOrder(BaseModel):
    """Заказ в ответе API платформы магазина."""

    model_config = ConfigDict(extra="allow")

    id: int
    orderGuid: UUID
    customerId: int
    orderTotal: Decimal
    paymentStatus: PaymentStatus
    createdOnUtc: Optional[datetime] = None


class HostAllowedTransitions(BaseModel):
    """Разрешённые переходы статуса оплаты заказа."""

    model_config = ConfigDict(extra="allow")

    cancel: bool = False
    markAuthorized: bool = False
    markPaid: bool = False


class HostCurrency(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    currencyCode: str


class AdditionalFeeResponse(BaseModel):
    subtotal: Decimal
    fee: Decimal
