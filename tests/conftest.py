from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from uuid import UUID

import pytest

from src.apps.payment_settings.domain.entities import ProviderSettings
from src.apps.uniteller.domain.entities import OrderEntity, PaymentStatus
from src.apps.uniteller.domain.ports import CurrencyGateway, OrderGateway
from src.apps.uniteller.services.payment_processor import UnitellerPaymentProcessor
from src.apps.uniteller.services.uniteller_client import UnitellerClient

ORDER_GUID = UUID("3f2504e0-4f89-11d3-9a0c-0305e82c3301")
PASSWORD = "Pa55word"


class FakeOrderGateway(OrderGateway):
    """Заказы платформы в памяти с правилами переходов как в магазине."""

    def __init__(self, *orders: OrderEntity) -> None:
        self.orders: Dict[UUID, OrderEntity] = {o.order_guid: o for o in orders}
        self.notes: List[Tuple[int, str, bool]] = []
        self.transitions: List[Tuple[int, str]] = []
        self.lookups: List[UUID] = []
        self.cancelled: set = set()

    async def get_by_guid(self, order_guid: UUID) -> Optional[OrderEntity]:
        self.lookups.append(order_guid)
        return self.orders.get(order_guid)

    async def add_note(self, order, note, display_to_customer=False) -> None:
        self.notes.append((order.id, note, display_to_customer))

    async def can_cancel(self, order) -> bool:
        return order.id not in self.cancelled

    async def cancel(self, order, from_payment_notice=True) -> OrderEntity:
        self.cancelled.add(order.id)
        self.transitions.append((order.id, "cancel"))
        return self._store(replace(order, payment_status=PaymentStatus.voided))

    async def can_mark_authorized(self, order) -> bool:
        return order.payment_status == PaymentStatus.pending

    async def mark_authorized(self, order) -> OrderEntity:
        self.transitions.append((order.id, "mark_authorized"))
        return self._store(replace(order, payment_status=PaymentStatus.authorized))

    async def can_mark_paid(self, order) -> bool:
        return order.payment_status not in (
            PaymentStatus.paid,
            PaymentStatus.refunded,
            PaymentStatus.voided,
        ) and order.id not in self.cancelled

    async def mark_paid(self, order) -> OrderEntity:
        self.transitions.append((order.id, "mark_paid"))
        return self._store(replace(order, payment_status=PaymentStatus.paid))

    def _store(self, order: OrderEntity) -> OrderEntity:
        self.orders[order.order_guid] = order
        return order


class FakeCurrencyGateway(CurrencyGateway):
    async def get_currency_code(self, currency_id: int) -> str:
        return "RUB"


def make_order(
    payment_status: PaymentStatus = PaymentStatus.pending,
    order_total: Decimal = Decimal("1500.5"),
) -> OrderEntity:
    return OrderEntity(
        id=42,
        order_guid=ORDER_GUID,
        customer_id=7,
        order_total=order_total,
        payment_status=payment_status,
        created_on_utc=datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def provider_settings():
    return ProviderSettings(
        shop_idp="00004321",
        login="5678",
        password=PASSWORD,
        additional_fee=Decimal("0"),
        additional_fee_percentage=False,
    )


@pytest.fixture
def order():
    return make_order()


@pytest.fixture
def orders(order):
    return FakeOrderGateway(order)


@pytest.fixture
def uniteller_client():
    return UnitellerClient(
        results_url="https://wpay.uniteller.ru/results/",
        retry_attempts=2,
        retry_wait_max=0,
    )


@pytest.fixture
def processor(provider_settings, uniteller_client):
    return UnitellerPaymentProcessor(
        provider_settings=provider_settings,
        client=uniteller_client,
        currencies=FakeCurrencyGateway(),
        pay_url="https://wpay.uniteller.ru/pay/",
        currency_id=1,
    )
