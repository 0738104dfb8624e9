# trophyhunter/core/achievements/service.py

from __future__ import annotations

import logging
from typing import List, Optional

from trophyhunter.core.errors import ExternalFetchError, ValidationError
from trophyhunter.core.fetch import BaseAchievementFetcher
from .demo import demo_achievements
from .query import StatusFilter, filter_achievements, game_stats
from .report import progress_report
from .schemas import ALL_GAMES, Achievement, GameStats
from .state import AppState
from .store import AchievementStore, find_by_id

log = logging.getLogger(__name__)


class AchievementsService:
    """
    Сервис для операций над списком ачивок.
    Каждая мутация заканчивается сохранением через ``AchievementStore``.
    """

    def __init__(
        self,
        state: AppState,
        store: AchievementStore,
        fetcher: Optional[BaseAchievementFetcher] = None,
    ) -> None:
        """
        Args:
            state (AppState): Общее состояние трекера.
            store (AchievementStore): Единственная точка сохранения.
            fetcher (BaseAchievementFetcher | None): Источник ачивок для add_game.
        """
        self.state = state
        self.store = store
        self.fetcher = fetcher

    def _persist(self) -> None:
        self.state.achievements = self.store.save(self.state.achievements)

    # ------------------------------------------------------------------ #
    #                              queries                               #
    # ------------------------------------------------------------------ #

    def list_achievements(
        self,
        game: Optional[str] = None,
        search: str = "",
        status: Optional[StatusFilter | str] = None,
    ) -> List[Achievement]:
        """Фильтр по игре (по умолчанию выбранной), поиску и статусу."""
        scope = game or self.state.current_game
        result = filter_achievements(self.state.achievements, scope, search, status)
        log.debug("List: scope=%s search=%r status=%s -> %d", scope, search, status, len(result))
        return result

    def game_stats(self) -> List[GameStats]:
        return game_stats(self.state.achievements)

    def report(self) -> str:
        return progress_report(self.state.achievements)

    # ------------------------------------------------------------------ #
    #                             mutations                              #
    # ------------------------------------------------------------------ #

    def toggle(self, achievement_id: str) -> Achievement:
        achievement = find_by_id(self.state.achievements, achievement_id)
        if achievement is None:
            raise ValidationError(f"Achievement '{achievement_id}' not found.")
        achievement.achieved = not achievement.achieved
        achievement.progress = 100 if achievement.achieved else 0
        self._persist()
        log.info("%s marked as %s", achievement.name, "completed" if achievement.achieved else "incomplete")
        return achievement

    def select_game(self, game: str) -> str:
        if game != ALL_GAMES and not any(a.game == game for a in self.state.achievements):
            raise ValidationError(f'Game "{game}" is not tracked.')
        self.state.current_game = game
        self.store.save_selected_game(game)
        log.info("Selected game scope: %s", game)
        return game

    def delete_game(self, game: str) -> int:
        """Удалить все ачивки игры; выбор сбрасывается на 'all'. Возвращает число удалённых."""
        if game == ALL_GAMES:
            raise ValidationError("Select a specific game to delete.")
        remaining = [a for a in self.state.achievements if a.game != game]
        deleted = len(self.state.achievements) - len(remaining)
        if not deleted:
            raise ValidationError(f'Game "{game}" is not tracked.')
        self.state.achievements = remaining
        self.state.current_game = ALL_GAMES
        self.store.save_selected_game(ALL_GAMES)
        self._persist()
        log.info('Deleted "%s" and %d achievements.', game, deleted)
        return deleted

    def clear(self) -> None:
        self.state.achievements = []
        self.state.current_game = ALL_GAMES
        self.store.clear()
        log.info("All data cleared")

    def seed_demo(self) -> List[Achievement]:
        self.state.achievements = demo_achievements()
        self.state.current_game = ALL_GAMES
        self.store.save_selected_game(ALL_GAMES)
        self._persist()
        log.info("Sample data loaded: %d achievements", len(self.state.achievements))
        return self.state.achievements

    async def add_game(self, app_id: str, game_name: str) -> List[Achievement]:
        """
        Добавить игру с реальными ачивками из внешнего источника.

        Args:
            app_id (str): Числовой App ID.
            game_name (str): Имя игры.

        Returns:
            List[Achievement]: Добавленные ачивки.

        Raises:
            ValidationError: пустые/нечисловые поля или игра уже есть.
            ExternalFetchError: источник ничего не вернул.
        """
        app_id = (app_id or "").strip()
        game_name = (game_name or "").strip()

        if not app_id:
            raise ValidationError("Please enter a Steam App ID")
        if not app_id.isdigit():
            raise ValidationError("App ID must be a number")
        if not game_name:
            raise ValidationError("Please enter the game name")
        if any(a.game == game_name for a in self.state.achievements):
            raise ValidationError(f'Game "{game_name}" is already added!')
        tracked = next((a for a in self.state.achievements if a.id.startswith(f"{app_id}_")), None)
        if tracked is not None:
            raise ValidationError(f'App ID {app_id} is already tracked as "{tracked.game}"')
        if self.fetcher is None:
            raise ExternalFetchError("No achievement source configured")

        log.info("Fetching achievements for app %s (%s)...", app_id, game_name)
        fetched = await self.fetcher.fetch_achievements(app_id, game_name)
        if not fetched:
            raise ExternalFetchError("No achievements found")

        self.state.achievements = [*self.state.achievements, *fetched]
        self._persist()
        log.info("Added %s with %d achievements", game_name, len(fetched))
        return fetched
