"""Обработчики исключений для payment_settings."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from .exceptions import SettingsBaseException, SettingsRepositoryError

logger = logging.getLogger(__name__)


async def settings_repository_error_handler(
    request: Request,
    exc: SettingsRepositoryError,
) -> JSONResponse:
    logger.error("SettingsRepositoryError: %s, details=%s", exc.message, exc.details)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": f"Ошибка работы с БД: {exc.message}",
            "error_type": "SettingsRepositoryError",
            "details": exc.details,
        },
    )


async def settings_base_exception_handler(
    request: Request,
    exc: SettingsBaseException,
) -> JSONResponse:
    logger.error(
        "SettingsBaseException: %s, details=%s",
        exc.message,
        exc.details,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": exc.message,
            "error_type": exc.__class__.__name__,
            "details": exc.details,
        },
    )


EXCEPTION_HANDLERS = {
    SettingsRepositoryError: settings_repository_error_handler,
    SettingsBaseException: settings_base_exception_handler,
}
