# trophyhunter/core/sync/matcher.py
"""
Heuristic text sync.

Сверяет прогресс с текстом, скопированным со страницы статистики
(без API): ищет имя ачивки, берёт окно текста после него и ищет там
признак разблокировки («Unlocked Mar 1, 2021») или счётчик «5 / 20».

Метод заведомо best-effort: если формат текста другой, обновления
просто не найдутся. Уверенности у совпадения нет.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from trophyhunter.config import settings
from trophyhunter.core.achievements.schemas import Achievement

log = logging.getLogger(__name__)

MONTHS = (
    "jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec|"
    "january|february|march|april|may|june|july|august|september|october|november|december"
)
COMPLETION_RE = re.compile(
    rf"(unlocked|earned)\s+(\d+|{MONTHS})\s+(\d+|{MONTHS})", re.IGNORECASE
)
PROGRESS_RE = re.compile(r"(\d+)\s*/\s*(\d+)")
# Подсказка вида "once unlocked you gain ...": это условие, а не факт
CONDITIONAL_HINT = "once unlocked"
# Счётчик без слова Unlocked никогда не даёт 100%
MAX_COUNTER_PROGRESS = 99


@dataclass(frozen=True)
class MatchResult:
    """Что нашлось в тексте для одной ачивки."""
    found: bool
    completed: bool = False
    progress: Optional[int] = None


@dataclass
class SyncSummary:
    synced: int = 0
    progress_updated: int = 0
    overwrite: bool = False
    scope: str = "all games"

    @property
    def changed(self) -> bool:
        """Нужно ли сохранять: были обновления или явный сброс overwrite."""
        return self.synced > 0 or self.progress_updated > 0 or self.overwrite

    @property
    def message(self) -> str:
        if self.overwrite:
            return f"Fresh sync complete for {self.scope}!"
        if self.synced > 0 and self.progress_updated > 0:
            return f"Synced {self.synced} completed and updated progress for {self.progress_updated} achievements!"
        if self.synced > 0:
            return f"Synced {self.synced} new achievements!"
        if self.progress_updated > 0:
            return f"Updated progress for {self.progress_updated} achievements!"
        return 'No updates detected. Make sure you copied the "Unlocked" status or progress counters.'


def find_excerpt(text: str, name: str, window: Optional[int] = None) -> Optional[str]:
    """
    Окно текста начиная с первого вхождения имени (регистр не важен).
    None, если имени в тексте нет. Пустое имя не ищется.
    """
    needle = name.lower()
    if not needle:
        return None
    haystack = text.lower()
    index = haystack.find(needle)
    if index == -1:
        return None
    size = window if window is not None else settings.SYNC_EXCERPT_WINDOW
    return haystack[index:index + size]


def is_completed(excerpt: str) -> bool:
    return bool(COMPLETION_RE.search(excerpt)) and CONDITIONAL_HINT not in excerpt.lower()


def counter_progress(excerpt: str) -> Optional[int]:
    """
    Процент по первому счётчику «текущее / цель» в окне, не больше 99.
    None, если счётчика нет или цель равна нулю.
    """
    match = PROGRESS_RE.search(excerpt)
    if not match:
        return None
    current, target = int(match.group(1)), int(match.group(2))
    if target <= 0:
        return None
    # Math.round-семантика: половина округляется вверх
    return min(MAX_COUNTER_PROGRESS, int(math.floor(current * 100 / target + 0.5)))


def match_achievement(text: str, name: str, window: Optional[int] = None) -> MatchResult:
    """Чистая функция (текст, имя) → результат сопоставления."""
    excerpt = find_excerpt(text, name, window)
    if excerpt is None:
        return MatchResult(found=False)
    if is_completed(excerpt):
        return MatchResult(found=True, completed=True, progress=100)
    return MatchResult(found=True, progress=counter_progress(excerpt))


def apply_text_sync(
    targets: Sequence[Achievement],
    text: str,
    overwrite: bool = False,
    scope: str = "all games",
    window: Optional[int] = None,
) -> SyncSummary:
    """
    Применить совпадения к ``targets`` НА МЕСТЕ.

    merge только повышает прогресс/статус; overwrite сначала сбрасывает
    achieved/progress у всех целей, потом применяет совпадения заново.
    """
    summary = SyncSummary(overwrite=overwrite, scope=scope)

    if overwrite:
        for ach in targets:
            ach.achieved = False
            ach.progress = 0

    for ach in targets:
        result = match_achievement(text, ach.name, window)
        if not result.found:
            continue
        if result.completed:
            if not ach.achieved:
                ach.achieved = True
                ach.progress = 100
                summary.synced += 1
        elif not ach.achieved and result.progress is not None and result.progress > ach.progress:
            ach.progress = result.progress
            summary.progress_updated += 1

    log.info(
        "Text sync (%s, overwrite=%s): %d completed, %d progress updates over %d targets",
        scope, overwrite, summary.synced, summary.progress_updated, len(targets),
    )
    return summary
