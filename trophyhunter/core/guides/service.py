# trophyhunter/core/guides/service.py

from __future__ import annotations

import logging
from dataclasses import dataclass

from trophyhunter.core.achievements.state import AppState
from trophyhunter.core.achievements.store import AchievementStore, find_by_id
from trophyhunter.core.errors import ValidationError
from .prompts import PROVIDER_URLS, bulk_prompt, launch_url, single_prompt

log = logging.getLogger(__name__)


@dataclass
class GuidePrompt:
    prompt: str
    provider: str
    url: str


class GuidesService:
    """Настройки AI-гайдов и сборка промптов под выбранного провайдера."""

    def __init__(self, state: AppState, store: AchievementStore) -> None:
        self.state = state
        self.store = store

    def update_preferences(self, ai_provider: str, guide_language: str) -> None:
        provider = ai_provider.lower()
        if provider not in PROVIDER_URLS:
            raise ValidationError(f"Unknown AI provider: {ai_provider}")
        if not guide_language.strip():
            raise ValidationError("Guide language must not be empty")
        self.state.ai_provider = provider
        self.state.guide_language = guide_language.strip()
        self.store.save_preferences(self.state.ai_provider, self.state.guide_language)
        log.info("Preferences saved: provider=%s language=%s", provider, self.state.guide_language)

    def _wrap(self, prompt: str) -> GuidePrompt:
        return GuidePrompt(prompt=prompt, provider=self.state.ai_provider, url=launch_url(self.state.ai_provider, prompt))

    def for_achievement(self, achievement_id: str) -> GuidePrompt:
        achievement = find_by_id(self.state.achievements, achievement_id)
        if achievement is None:
            raise ValidationError(f"Achievement '{achievement_id}' not found.")
        return self._wrap(single_prompt(achievement, self.state.guide_language))

    def for_current_game(self) -> GuidePrompt:
        """Один промпт на все незавершённые ачивки выбранной игры."""
        if self.state.is_all_games:
            raise ValidationError("Select a specific game first.")
        incomplete = [a for a in self.state.scoped if not a.achieved]
        return self._wrap(bulk_prompt(self.state.current_game, incomplete, self.state.guide_language))
