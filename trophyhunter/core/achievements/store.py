# trophyhunter/core/achievements/store.py

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from trophyhunter.core.storage import (
    ACHIEVEMENTS_KEY,
    AI_PROVIDER_KEY,
    CURRENT_GAME_KEY,
    GUIDE_LANGUAGE_KEY,
    BaseStorageProvider,
)
from .schemas import ALL_GAMES, Achievement

log = logging.getLogger(__name__)


def deduplicate(achievements: Iterable[Achievement]) -> List[Achievement]:
    """
    Убрать записи с пустым id и повторы id.
    Побеждает первое вхождение, порядок остальных сохраняется.
    """
    seen: set[str] = set()
    unique: List[Achievement] = []
    for ach in achievements:
        if not ach.id or ach.id in seen:
            continue
        seen.add(ach.id)
        unique.append(ach)
    return unique


def _parse_records(raw: Any) -> List[Achievement]:
    parsed: List[Achievement] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            log.warning("Store: skipping non-object record #%d", index)
            continue
        try:
            parsed.append(Achievement.model_validate(item))
        except PydanticValidationError:
            log.warning("Store: skipping invalid record #%d", index)
    return parsed


class AchievementStore:
    """
    Единственная точка сохранения/загрузки состояния трекера.
    Остальные компоненты работают со списком, который отдаёт store,
    и сами в хранилище не пишут.
    """

    def __init__(self, storage: BaseStorageProvider) -> None:
        self.storage = storage

    # ------------------------------------------------------------------ #
    #                          achievements list                         #
    # ------------------------------------------------------------------ #

    def load(self) -> List[Achievement]:
        """
        Прочитать список ачивок. Никогда не бросает: битый JSON или
        не-массив дают пустой список.
        """
        saved = self.storage.get(ACHIEVEMENTS_KEY)
        if not saved:
            log.debug("Store: nothing saved yet")
            return []
        try:
            raw = json.loads(saved)
        except (TypeError, ValueError):
            log.exception("Store: parse error, resetting cache")
            return []
        if not isinstance(raw, list):
            log.warning("Store: data format invalid (%s), resetting cache", type(raw).__name__)
            return []
        achievements = deduplicate(_parse_records(raw))
        log.info("Store: loaded %d records", len(achievements))
        return achievements

    def save(self, achievements: Iterable[Achievement]) -> List[Achievement]:
        """
        Дедуплицировать и сохранить. Возвращает список, который реально
        записан; вызывающий должен заменить им своё состояние.
        """
        unique = deduplicate(achievements)
        payload = json.dumps([a.to_record() for a in unique], ensure_ascii=False)
        self.storage.set(ACHIEVEMENTS_KEY, payload)
        log.info("Store: saved %d records", len(unique))
        return unique

    def clear(self) -> None:
        self.storage.delete(ACHIEVEMENTS_KEY)
        self.storage.delete(CURRENT_GAME_KEY)
        log.info("Store: cleared")

    # ------------------------------------------------------------------ #
    #                        scope & preferences                         #
    # ------------------------------------------------------------------ #

    def load_selected_game(self, achievements: List[Achievement]) -> str:
        """Сохранённая выбранная игра, если у неё ещё есть ачивки, иначе 'all'."""
        saved_game = self.storage.get(CURRENT_GAME_KEY)
        if saved_game and any(a.game == saved_game for a in achievements):
            return saved_game
        return ALL_GAMES

    def save_selected_game(self, game: str) -> None:
        if game:
            self.storage.set(CURRENT_GAME_KEY, game)

    def load_preference(self, key: str, default: str) -> str:
        return self.storage.get(key) or default

    def save_preferences(self, ai_provider: str, guide_language: str) -> None:
        self.storage.set(AI_PROVIDER_KEY, ai_provider)
        self.storage.set(GUIDE_LANGUAGE_KEY, guide_language)

    def load_preferences(self, default_provider: str, default_language: str) -> tuple[str, str]:
        return (
            self.load_preference(AI_PROVIDER_KEY, default_provider),
            self.load_preference(GUIDE_LANGUAGE_KEY, default_language),
        )


def find_by_id(achievements: List[Achievement], achievement_id: str) -> Optional[Achievement]:
    return next((a for a in achievements if a.id == achievement_id), None)
