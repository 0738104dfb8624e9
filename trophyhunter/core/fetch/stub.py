# trophyhunter/core/fetch/stub.py

from __future__ import annotations

import logging
from typing import List

from trophyhunter.core.achievements.schemas import Achievement, rarity_for_percentage
from .base import BaseAchievementFetcher

log = logging.getLogger(__name__)

# name, description template, priority, favorite, globalPercentage
_SAMPLE_ACHIEVEMENTS = [
    ("First Steps", "Start playing {game}", "medium", False, 95.0),
    ("Getting Started", "Complete the tutorial or first level", "medium", False, 75.0),
    ("Dedicated Player", "Play for 10 hours", "low", False, 45.0),
    ("Master", "Complete all main objectives", "high", True, 15.0),
    ("Perfectionist", "Achieve 100% completion", "high", True, 5.0),
]


class StubAchievementFetcher(BaseAchievementFetcher):
    """Возвращает пять типовых ачивок без сети – удобен в unit-тестах и офлайн."""
    name = "stub"

    async def fetch_achievements(self, app_id: str, game_name: str) -> List[Achievement]:
        log.debug("StubAchievementFetcher: fetch_achievements called for %s", app_id)
        return [
            Achievement(
                id=f"{app_id}_{index}",
                game=game_name,
                name=name,
                description=description.format(game=game_name),
                priority=priority,
                favorite=favorite,
                global_percentage=percentage,
                rarity=rarity_for_percentage(percentage),
            )
            for index, (name, description, priority, favorite, percentage) in enumerate(_SAMPLE_ACHIEVEMENTS)
        ]
