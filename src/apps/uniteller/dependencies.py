"""Dependency Injection для платёжного модуля Uniteller."""

from functools import partial
from typing import Annotated, Callable

from fastapi import Depends

from src.apps.payment_settings.dependencies import ProviderSettingsDep
from src.core.config import settings

from .domain.ports import CurrencyGateway, OrderGateway
from .services.callback_service import CallbackService
from .services.host_client import HostPlatformClient
from .services.payment_processor import UnitellerPaymentProcessor
from .services.uniteller_client import UnitellerClient


def get_host_client() -> HostPlatformClient:
    return HostPlatformClient(
        base_url=settings.host_api_url,
        token=settings.host_api_token,
        timeout=settings.host_timeout,
    )


async def get_order_gateway(
    client: HostPlatformClient = Depends(get_host_client),
) -> OrderGateway:
    return client


async def get_currency_gateway(
    client: HostPlatformClient = Depends(get_host_client),
) -> CurrencyGateway:
    return client


def get_uniteller_client() -> UnitellerClient:
    return UnitellerClient(
        results_url=settings.uniteller_results_url,
        timeout=settings.uniteller_timeout,
        retry_attempts=settings.uniteller_retry_attempts,
        retry_wait_max=settings.uniteller_retry_wait_max,
    )


async def get_processor_factory(
    provider_settings: ProviderSettingsDep,
    client: UnitellerClient = Depends(get_uniteller_client),
    currencies: CurrencyGateway = Depends(get_currency_gateway),
) -> Callable[[], UnitellerPaymentProcessor]:
    """
    Фабрика платёжного метода с настройками текущего магазина.

    Метод создаётся при вызове, поэтому ошибка ненастроенного модуля
    возникает только там, где он действительно нужен.
    """
    return partial(
        UnitellerPaymentProcessor,
        provider_settings=provider_settings,
        client=client,
        currencies=currencies,
        pay_url=settings.uniteller_pay_url,
        currency_id=settings.primary_store_currency_id,
    )


async def get_payment_processor(
    factory: Callable[[], UnitellerPaymentProcessor] = Depends(get_processor_factory),
) -> UnitellerPaymentProcessor:
    return factory()


async def get_callback_service(
    orders: OrderGateway = Depends(get_order_gateway),
    processor_factory: Callable[[], UnitellerPaymentProcessor] = Depends(
        get_processor_factory
    ),
) -> CallbackService:
    return CallbackService(orders=orders, processor_factory=processor_factory)


OrderGatewayDep = Annotated[OrderGateway, Depends(get_order_gateway)]
ProcessorDep = Annotated[UnitellerPaymentProcessor, Depends(get_payment_processor)]
CallbackSvcDep = Annotated[CallbackService, Depends(get_callback_service)]
