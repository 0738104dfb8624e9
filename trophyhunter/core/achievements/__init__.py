# trophyhunter/core/achievements/__init__.py

"""
Achievements package.

Экспортируем только схему, чтобы внешние модули могли писать
`from trophyhunter.core.achievements import Achievement`;
сервис импортируется по полному пути `trophyhunter.core.achievements.service`
(он сам зависит от core.fetch, который импортирует схему отсюда).
"""

from .schemas import ALL_GAMES, UNKNOWN_GAME, Achievement, GameStats, Priority, Rarity  # noqa: F401

__all__: list[str] = ["ALL_GAMES", "UNKNOWN_GAME", "Achievement", "GameStats", "Priority", "Rarity"]
