"""Обработчики исключений протокола Uniteller.

Uniteller ожидает HTTP 200 и текстовый ответ из двух строк, поэтому
все ошибки протокола превращаются в ответ FAIL.
"""

import logging

from fastapi import Request
from fastapi.responses import PlainTextResponse

from src.core.config import settings

from .domain.value_objects import CallbackResult
from .exceptions import (
    HostAPIError,
    InvalidOrderReferenceError,
    ProviderUnavailableError,
    SignatureMismatchError,
    UnitellerBaseException,
    UnsupportedStatusError,
)

logger = logging.getLogger(__name__)


def fail_response(message: str) -> PlainTextResponse:
    logger.error("Uniteller. %s", message)
    result = CallbackResult(success=False, message=message)
    return PlainTextResponse(result.to_text(settings.merchant_system_name))


async def invalid_order_reference_handler(
    request: Request,
    exc: InvalidOrderReferenceError,
) -> PlainTextResponse:
    logger.warning("InvalidOrderReferenceError: details=%s", exc.details)
    return fail_response(exc.message)


async def signature_mismatch_handler(
    request: Request,
    exc: SignatureMismatchError,
) -> PlainTextResponse:
    logger.warning("SignatureMismatchError: details=%s", exc.details)
    return fail_response(exc.message)


async def unsupported_status_handler(
    request: Request,
    exc: UnsupportedStatusError,
) -> PlainTextResponse:
    logger.warning("UnsupportedStatusError: details=%s", exc.details)
    return fail_response(exc.message)


async def provider_unavailable_handler(
    request: Request,
    exc: ProviderUnavailableError,
) -> PlainTextResponse:
    logger.error("ProviderUnavailableError: details=%s", exc.details)
    return fail_response(exc.message)


async def host_api_error_handler(
    request: Request,
    exc: HostAPIError,
) -> PlainTextResponse:
    logger.error("HostAPIError: details=%s", exc.details)
    return fail_response(exc.message)


async def uniteller_base_exception_handler(
    request: Request,
    exc: UnitellerBaseException,
) -> PlainTextResponse:
    logger.error(
        "UnitellerBaseException: %s, details=%s",
        exc.message,
        exc.details,
    )
    return fail_response(exc.message)


EXCEPTION_HANDLERS = {
    InvalidOrderReferenceError: invalid_order_reference_handler,
    SignatureMismatchError: signature_mismatch_handler,
    UnsupportedStatusError: unsupported_status_handler,
    ProviderUnavailableError: provider_unavailable_handler,
    HostAPIError: host_api_error_handler,
    UnitellerBaseException: uniteller_base_exception_handler,
}
