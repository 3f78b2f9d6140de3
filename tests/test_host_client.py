"""
Tests for HostPlatformClient

Covers:
- Order lookup by GUID (found / 404)
- Named payment status transitions
- Currency code lookup
"""
import json

import httpx
import pytest
from tenacity import wait_none

from conftest import ORDER_GUID, make_order
from src.apps.uniteller.domain.entities import PaymentStatus
from src.apps.uniteller.exceptions import HostAPIError, HostTemporaryError
from src.apps.uniteller.services.host_client import HostPlatformClient

BASE_URL = "http://shop.test/api"

ORDER_JSON = {
    "id": 42,
    "orderGuid": str(ORDER_GUID),
    "customerId": 7,
    "orderTotal": "1500.50",
    "paymentStatus": "Pending",
    "createdOnUtc": "2024-05-01T12:00:00Z",
}


def make_client(handler) -> HostPlatformClient:
    return HostPlatformClient(
        base_url=BASE_URL + "/",
        token="token-1",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_get_by_guid():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=ORDER_JSON)

    order = await make_client(handler).get_by_guid(ORDER_GUID)

    assert seen["url"] == f"{BASE_URL}/orders/{ORDER_GUID}"
    assert seen["auth"] == "Bearer token-1"
    assert order.id == 42
    assert order.order_guid == ORDER_GUID
    assert order.payment_status == PaymentStatus.pending
    assert str(order.order_total) == "1500.50"


@pytest.mark.asyncio
async def test_get_by_guid_not_found():
    def handler(request):
        return httpx.Response(404)

    assert await make_client(handler).get_by_guid(ORDER_GUID) is None


@pytest.mark.asyncio
async def test_add_note_is_hidden_from_customer():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(204)

    await make_client(handler).add_note(make_order(), "Uniteller:\n")

    assert seen["url"] == f"{BASE_URL}/orders/42/notes"
    assert seen["body"] == {"note": "Uniteller:\n", "displayToCustomer": False}


@pytest.mark.asyncio
async def test_allowed_transitions():
    def handler(request):
        return httpx.Response(
            200, json={"cancel": False, "markAuthorized": True, "markPaid": True}
        )

    client = make_client(handler)
    order = make_order()

    assert await client.can_cancel(order) is False
    assert await client.can_mark_authorized(order) is True
    assert await client.can_mark_paid(order) is True


@pytest.mark.asyncio
async def test_cancel_sends_payment_notice_flag():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={**ORDER_JSON, "paymentStatus": "Voided"})

    order = await make_client(handler).cancel(make_order(PaymentStatus.paid))

    assert seen["url"] == f"{BASE_URL}/orders/42/cancel"
    assert seen["body"] == {"fromPaymentNotice": True}
    assert order.payment_status == PaymentStatus.voided


@pytest.mark.asyncio
async def test_mark_paid_returns_refreshed_order():
    def handler(request):
        assert request.url.path == "/api/orders/42/mark-paid"
        return httpx.Response(200, json={**ORDER_JSON, "paymentStatus": "Paid"})

    order = await make_client(handler).mark_paid(make_order())

    assert order.payment_status == PaymentStatus.paid


@pytest.mark.asyncio
async def test_get_currency_code():
    def handler(request):
        assert request.url.path == "/api/currencies/1"
        return httpx.Response(200, json={"id": 1, "currencyCode": "RUB"})

    assert await make_client(handler).get_currency_code(1) == "RUB"


@pytest.mark.asyncio
async def test_unexpected_order_payload():
    def handler(request):
        return httpx.Response(200, json={"id": 42})

    with pytest.raises(HostAPIError):
        await make_client(handler).get_by_guid(ORDER_GUID)


class TestRetries:
    @pytest.fixture(autouse=True)
    def no_wait(self, monkeypatch):
        monkeypatch.setattr(HostPlatformClient._get.retry, "wait", wait_none())

    @pytest.mark.asyncio
    async def test_get_retried_on_server_error(self):
        responses = [httpx.Response(503), httpx.Response(502), httpx.Response(200, json=ORDER_JSON)]
        calls = []

        def handler(request):
            calls.append(request.url.path)
            return responses.pop(0)

        order = await make_client(handler).get_by_guid(ORDER_GUID)

        assert order.id == 42
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_get_not_retried_on_client_error(self):
        calls = []

        def handler(request):
            calls.append(request.url.path)
            return httpx.Response(400)

        with pytest.raises(HostAPIError) as exc_info:
            await make_client(handler).get_currency_code(1)

        assert not isinstance(exc_info.value, HostTemporaryError)
        assert exc_info.value.details["status_code"] == 400
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_note_sent_once_after_timeout(self):
        calls = []

        def handler(request):
            calls.append(request.url.path)
            if len(calls) == 1:
                raise httpx.ReadTimeout("timed out", request=request)
            return httpx.Response(200)

        with pytest.raises(HostTemporaryError):
            await make_client(handler).add_note(make_order(), "Uniteller:\n")

        assert calls == ["/api/orders/42/notes"]

    @pytest.mark.asyncio
    async def test_transition_conflict_sent_once(self):
        calls = []

        def handler(request):
            calls.append(request.url.path)
            return httpx.Response(409)

        with pytest.raises(HostAPIError) as exc_info:
            await make_client(handler).mark_paid(make_order())

        assert exc_info.value.details["status_code"] == 409
        assert calls == ["/api/orders/42/mark-paid"]

    @pytest.mark.asyncio
    async def test_transition_server_error_sent_once(self):
        calls = []

        def handler(request):
            calls.append(request.url.path)
            return httpx.Response(500)

        with pytest.raises(HostTemporaryError):
            await make_client(handler).cancel(make_order(PaymentStatus.paid))

        assert calls == ["/api/orders/42/cancel"]
