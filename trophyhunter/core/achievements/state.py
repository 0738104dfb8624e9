# trophyhunter/core/achievements/state.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from trophyhunter.config import settings
from .schemas import ALL_GAMES, Achievement
from .store import AchievementStore

log = logging.getLogger(__name__)


@dataclass
class AppState:
    """
    Всё изменяемое состояние трекера. Передаётся сервисам явно,
    глобальных переменных нет.
    """
    achievements: List[Achievement] = field(default_factory=list)
    current_game: str = ALL_GAMES
    ai_provider: str = settings.DEFAULT_AI_PROVIDER
    guide_language: str = settings.DEFAULT_GUIDE_LANGUAGE

    @property
    def is_all_games(self) -> bool:
        return self.current_game == ALL_GAMES

    @property
    def scoped(self) -> List[Achievement]:
        """Ачивки выбранной игры (или все при 'all'); те же объекты, не копии."""
        if self.is_all_games:
            return list(self.achievements)
        return [a for a in self.achievements if a.game == self.current_game]

    @property
    def scope_label(self) -> str:
        return "all games" if self.is_all_games else self.current_game

    @classmethod
    def load(cls, store: AchievementStore) -> "AppState":
        achievements = store.load()
        ai_provider, guide_language = store.load_preferences(
            settings.DEFAULT_AI_PROVIDER, settings.DEFAULT_GUIDE_LANGUAGE
        )
        state = cls(
            achievements=achievements,
            current_game=store.load_selected_game(achievements),
            ai_provider=ai_provider,
            guide_language=guide_language,
        )
        log.info("[State] Started. Tracking %d achievements, scope=%s", len(achievements), state.current_game)
        return state
