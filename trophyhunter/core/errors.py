# trophyhunter/core/errors.py
"""
Ошибки доменного слоя.

Все они «мягкие»: ядро бросает их ДО любой мутации состояния,
роутеры превращают их в HTTPException с текстом ``message``.
"""

from __future__ import annotations


class TrackerError(Exception):
    """Базовая ошибка трекера. ``message`` показывается пользователю как есть."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MalformedInputError(TrackerError):
    """Вставленный JSON / импорт не похож на список ачивок."""


class CorruptDataError(TrackerError):
    """Компактный код не удалось раскодировать."""


class ExternalFetchError(TrackerError):
    """Внешний источник не вернул ачивки (зеркала недоступны, профиль закрыт, пусто)."""


class ValidationError(TrackerError):
    """Неверные аргументы операции (дубликат игры, пустое поле, неизвестный id)."""


class ConfirmationError(TrackerError):
    """Токен подтверждения неизвестен, истёк или устарел."""


__all__: list[str] = [
    "TrackerError",
    "MalformedInputError",
    "CorruptDataError",
    "ExternalFetchError",
    "ValidationError",
    "ConfirmationError",
]
