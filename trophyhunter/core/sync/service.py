# trophyhunter/core/sync/service.py

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from trophyhunter.core.achievements.schemas import ALL_GAMES, Achievement
from trophyhunter.core.achievements.state import AppState
from trophyhunter.core.achievements.store import AchievementStore
from trophyhunter.core.codec import decode_records, encode
from trophyhunter.core.errors import ConfirmationError, ValidationError
from .confirmations import ConfirmationRegistry, PendingConfirmation
from .matcher import apply_text_sync
from .merger import extract_records, merge_records, validate_records

log = logging.getLogger(__name__)


@dataclass
class SyncOutcome:
    """Итог sync/import для показа пользователю."""
    kind: str              # 'text' | 'json' | 'import'
    changed: bool
    message: str
    synced: int = 0
    progress_updated: int = 0
    total: int = 0


def parse_json_records(text: str) -> Optional[List[Any]]:
    """
    Если текст похож на JSON и содержит массив ачивок, вернуть его.
    Любая ошибка разбора означает «это обычный текст».
    """
    stripped = text.strip()
    if not (stripped.startswith("[") or stripped.startswith("{")):
        return None
    try:
        payload = json.loads(stripped)
    except ValueError:
        log.debug("[Sync] Not JSON, falling back to text parsing")
        return None
    return extract_records(payload)


class SyncService:
    """
    Массовое обновление прогресса: вставленный текст, JSON или компактный код.

    Операции с перезаписью идут в два шага: ``propose_*`` проверяет вход и
    возвращает PendingConfirmation, ``confirm`` выполняет мутацию.
    """

    def __init__(
        self,
        state: AppState,
        store: AchievementStore,
        confirmations: Optional[ConfirmationRegistry] = None,
    ) -> None:
        self.state = state
        self.store = store
        self.confirmations = confirmations or ConfirmationRegistry()

    # ------------------------------------------------------------------ #
    #                                sync                                #
    # ------------------------------------------------------------------ #

    def sync(self, text: str, overwrite: bool = False) -> SyncOutcome:
        """
        Выполнить синхронизацию сразу (без шага подтверждения).

        Raises:
            ValidationError: пустой текст или в выбранной области нет ачивок.
            MalformedInputError: JSON-массив неверной формы.
        """
        if not text or not text.strip():
            raise ValidationError("Please paste some text first.")
        records = parse_json_records(text)
        if records is not None:
            return self._json_sync(records, overwrite)
        return self._text_sync(text, overwrite)

    def _json_sync(self, records: List[Any], overwrite: bool) -> SyncOutcome:
        incoming = validate_records(records)
        merged = merge_records(self.state.achievements, incoming, self.state.current_game, overwrite)
        self.state.achievements = self.store.save(merged)
        message = "Data overwritten for current view!" if overwrite else "Progress updated from JSON!"
        log.info("[Sync] JSON sync applied (%d records, overwrite=%s)", len(incoming), overwrite)
        return SyncOutcome(kind="json", changed=True, message=message, total=len(incoming))

    def _targets(self) -> List[Achievement]:
        targets = self.state.scoped
        if not targets:
            raise ValidationError(
                "No achievements found." if self.state.is_all_games
                else "No achievements found for the current game."
            )
        return targets

    def _text_sync(self, text: str, overwrite: bool) -> SyncOutcome:
        targets = self._targets()
        summary = apply_text_sync(targets, text, overwrite=overwrite, scope=self.state.scope_label)
        if summary.changed:
            self.state.achievements = self.store.save(self.state.achievements)
        else:
            log.info("[Sync] No updates detected, nothing persisted")
        return SyncOutcome(
            kind="text",
            changed=summary.changed,
            message=summary.message,
            synced=summary.synced,
            progress_updated=summary.progress_updated,
            total=len(targets),
        )

    def propose_sync(self, text: str) -> PendingConfirmation:
        """Проверить вход для overwrite-синхронизации и запросить подтверждение."""
        if not text or not text.strip():
            raise ValidationError("Please paste some text first.")
        records = parse_json_records(text)
        if records is not None:
            validate_records(records)
        else:
            self._targets()
        scope = "ALL games" if self.state.is_all_games else f'"{self.state.current_game}"'
        message = (
            f"This will OVERWRITE your current progress for {scope}. "
            'All achievements not found as "Unlocked" in your paste will be reset. Are you sure?'
        )
        return self.confirmations.propose("sync", self.state.current_game, message, text)

    # ------------------------------------------------------------------ #
    #                           export / import                          #
    # ------------------------------------------------------------------ #

    def export_code(self) -> str:
        return encode(self.state.achievements)

    def propose_import(self, code: str) -> PendingConfirmation:
        """
        Раскодировать и проверить импорт ДО подтверждения.

        Raises:
            ValidationError: пустой ввод.
            CorruptDataError: битый код.
            MalformedInputError: у первой записи нет name.
        """
        if not code or not code.strip():
            raise ValidationError("Please paste data code first")
        incoming = validate_records(decode_records(code))
        return self.confirmations.propose(
            "import",
            self.state.current_game,
            "This will OVERWRITE your current progress. Are you sure?",
            incoming,
        )

    def import_code(self, code: str) -> SyncOutcome:
        """Импорт без отдельного шага подтверждения (для скриптов и тестов)."""
        pending = self.propose_import(code)
        return self.confirm(pending.token)

    def _apply_import(self, incoming: List[Achievement]) -> SyncOutcome:
        self.state.achievements = self.store.save(merge_records([], incoming, ALL_GAMES, overwrite=True))
        if not self.state.is_all_games and not any(a.game == self.state.current_game for a in self.state.achievements):
            self.state.current_game = ALL_GAMES
            self.store.save_selected_game(ALL_GAMES)
        count = len(self.state.achievements)
        log.info("[Import] Imported %d achievements", count)
        return SyncOutcome(kind="import", changed=True, message=f"Imported {count} achievements!", total=count)

    # ------------------------------------------------------------------ #
    #                              confirm                               #
    # ------------------------------------------------------------------ #

    def confirm(self, token: str) -> SyncOutcome:
        pending = self.confirmations.take(token, self.state.current_game)
        log.info("Confirmation %s accepted (%s)", token, pending.action)
        if pending.action == "sync":
            return self.sync(pending.payload, overwrite=True)
        if pending.action == "import":
            return self._apply_import(pending.payload)
        raise ConfirmationError(f"Unsupported action: {pending.action}") # pragma: no cover
