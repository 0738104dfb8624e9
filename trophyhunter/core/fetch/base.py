# trophyhunter/core/fetch/base.py

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from trophyhunter.core.achievements.schemas import Achievement


class BaseAchievementFetcher(ABC):
    """Абстрактный источник реальных ачивок игры (АСИНХРОННЫЙ)."""

    # Имя провайдера (например, 'stub')
    name: str

    @abstractmethod
    async def fetch_achievements(self, app_id: str, game_name: str) -> List[Achievement]:
        """
        Вернуть упорядоченный непустой список ачивок игры.

        Args:
            app_id (str): Числовой App ID игры.
            game_name (str): Отображаемое имя, записывается в поле ``game``.

        Returns:
            List[Achievement]: ids вида ``<app_id>_<index>``.

        Raises:
            ExternalFetchError: все зеркала недоступны, профиль закрыт или пусто.
        """
        ...


__all__ = ["BaseAchievementFetcher"]
