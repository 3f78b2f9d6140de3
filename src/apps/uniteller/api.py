"""Эндпоинты платёжного модуля Uniteller."""

import logging
from decimal import Decimal
from pathlib import Path

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from src.core.config import settings

from .dependencies import CallbackSvcDep, OrderGatewayDep, ProcessorDep
from .domain.entities import InboundCallback
from .domain.value_objects import parse_order_guid
from .exceptions import HostAPIError, InvalidOrderReferenceError
from .schemas import AdditionalFeeResponse

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))

router = APIRouter()
api_router = APIRouter()

ORDER_ID_KEY = "Order_ID"
SIGNATURE_KEY = "Signature"
STATUS_KEY = "Status"


def _home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=302)


def _store_url(request: Request) -> str:
    return settings.store_url or str(request.base_url)


@router.api_route("/ConfirmPay", methods=["GET", "POST"], response_class=PlainTextResponse)
async def confirm_pay(request: Request, service: CallbackSvcDep):
    """
    Уведомление Uniteller об изменении статуса оплаты.

    Поля берутся из формы, а при их отсутствии из строки запроса.
    Ответ: SUCCESS/FAIL и описание второй строкой.
    """
    form = await request.form()

    def get_value(key: str) -> str:
        if key in form:
            return str(form[key])
        return request.query_params.get(key, "")

    callback = InboundCallback(
        order_id=get_value(ORDER_ID_KEY),
        status=get_value(STATUS_KEY),
        signature=get_value(SIGNATURE_KEY),
    )
    logger.info(
        "Получено уведомление Uniteller: Order_ID=%s, Status=%s",
        callback.order_id,
        callback.status,
    )

    result = await service.confirm_pay(callback)
    return PlainTextResponse(result.to_text(settings.merchant_system_name))


@router.get("/Success")
async def success(
    service: CallbackSvcDep,
    order_id: str = Query("", alias=ORDER_ID_KEY),
):
    """Возврат покупателя после оплаты: сверяем статус с Uniteller."""
    try:
        order = await service.reconcile(order_id)
    except HostAPIError as exc:
        logger.error("Сверка заказа %s не выполнена: %s", order_id, exc.message)
        return _home()

    if order is None:
        return _home()

    return RedirectResponse(
        url=settings.checkout_completed_path.format(order_id=order.id),
        status_code=302,
    )


@router.get("/CancelOrder")
async def cancel_order(
    orders: OrderGatewayDep,
    order_id: str = Query("", alias=ORDER_ID_KEY),
):
    """Возврат покупателя после отказа от оплаты. Статус заказа не меняется."""
    try:
        order = await orders.get_by_guid(parse_order_guid(order_id))
    except (InvalidOrderReferenceError, HostAPIError) as exc:
        logger.warning("Отмена оплаты для Order_ID=%r: %s", order_id, exc.message)
        return _home()

    if order is None:
        return _home()

    return RedirectResponse(
        url=settings.order_details_path.format(order_id=order.id),
        status_code=302,
    )


@router.get("/Pay", response_class=HTMLResponse)
async def pay(
    request: Request,
    orders: OrderGatewayDep,
    processor: ProcessorDep,
    order_id: str = Query("", alias=ORDER_ID_KEY),
):
    """Форма перенаправления покупателя на платёжную страницу Uniteller."""
    try:
        order = await orders.get_by_guid(parse_order_guid(order_id))
        if order is None:
            return _home()
        form = await processor.post_process_payment(order, _store_url(request))
    except (InvalidOrderReferenceError, HostAPIError) as exc:
        logger.warning("Оплата для Order_ID=%r недоступна: %s", order_id, exc.message)
        return _home()

    return templates.TemplateResponse(request, "remote_post.html", {"form": form})


@api_router.get("/additional-fee", response_model=AdditionalFeeResponse)
async def additional_fee(
    processor: ProcessorDep,
    subtotal: Decimal = Query(..., ge=0, description="Сумма корзины"),
):
    """Дополнительная комиссия за оплату через Uniteller."""
    return AdditionalFeeResponse(
        subtotal=subtotal,
        fee=processor.get_additional_handling_fee(subtotal),
    )
