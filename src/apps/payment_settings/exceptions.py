"""Исключения хранилища настроек платёжного модуля."""


class SettingsBaseException(Exception):
    """Базовое исключение для настроек."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class SettingsRepositoryError(SettingsBaseException):
    """Ошибка при работе с таблицей настроек."""
