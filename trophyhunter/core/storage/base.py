# trophyhunter/core/storage/base.py
"""
Abstract key-value persistence used by the achievement store.

Семантика: last-write-wins, без транзакций и версий схемы;
версию формата несёт только компактный код.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

# Логические ключи хранилища
ACHIEVEMENTS_KEY = "achievements"
CURRENT_GAME_KEY = "currentGame"
AI_PROVIDER_KEY = "aiProvider"
GUIDE_LANGUAGE_KEY = "guideLanguage"


class BaseStorageProvider(ABC):
    """Строковое key-value хранилище (СИНХРОННОЕ)."""

    # Имя провайдера ('memory', 'sql')
    name: str

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Вернуть значение или None, если ключа нет."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Записать значение (перезаписывает существующее)."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Удалить ключ; отсутствие ключа ошибкой не считается."""
        ...


__all__ = [
    "BaseStorageProvider",
    "ACHIEVEMENTS_KEY",
    "CURRENT_GAME_KEY",
    "AI_PROVIDER_KEY",
    "GUIDE_LANGUAGE_KEY",
]
