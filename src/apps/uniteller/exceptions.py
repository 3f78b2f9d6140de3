"""Исключения платёжного модуля Uniteller."""


class UnitellerBaseException(Exception):
    """Базовое исключение протокола Uniteller."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidOrderReferenceError(UnitellerBaseException):
    """Номер заказа не разобран как GUID или заказ не найден."""


class SignatureMismatchError(UnitellerBaseException):
    """Подпись уведомления не совпала с вычисленной."""


class UnsupportedStatusError(UnitellerBaseException):
    """Статус оплаты не входит в известный набор."""


class ProviderUnavailableError(UnitellerBaseException):
    """Uniteller недоступен или вернул некорректный ответ."""


class ProviderTemporaryError(ProviderUnavailableError):
    """Таймаут, сетевая ошибка или 5xx от Uniteller: запрос можно повторить."""


class HostAPIError(UnitellerBaseException):
    """Ошибка при обращении к API платформы магазина."""


class HostTemporaryError(HostAPIError):
    """Платформа недоступна или ответила 5xx: чтение можно повторить."""


class UnitellerModuleError(Exception):
    """
    Платёжный модуль не может быть создан (не настроены ShopIdp/пароль).

    Не относится к протоколу Uniteller и не перехватывается обработчиками.
    """
