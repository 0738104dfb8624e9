# trophyhunter/core/achievements/query.py

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Sequence

from .schemas import ALL_GAMES, Achievement, GameStats, Priority, TROPHY_ICON


class StatusFilter(str, Enum):
    NONE = "none"
    PRIORITY = "priority"
    FAVORITE = "favorite"
    INCOMPLETE = "incomplete"
    COMPLETED = "completed"


_PRIORITY_LEVELS = (Priority.HIGH, Priority.MEDIUM)


def _matches_status(ach: Achievement, status: StatusFilter) -> bool:
    if status is StatusFilter.PRIORITY:
        return ach.priority in _PRIORITY_LEVELS
    if status is StatusFilter.FAVORITE:
        return ach.favorite
    if status is StatusFilter.INCOMPLETE:
        return not ach.achieved
    if status is StatusFilter.COMPLETED:
        return ach.achieved
    return True


def filter_achievements(
    achievements: Sequence[Achievement],
    game: str = ALL_GAMES,
    search: str = "",
    status: Optional[StatusFilter | str] = None,
) -> List[Achievement]:
    """
    Отфильтровать список, сохраняя исходный порядок.

    Порядок применения: игра → поиск по name/description → статус.
    Все фильтры объединяются по AND.

    Args:
        achievements: Полный список.
        game: 'all' или точное имя игры.
        search: Подстрока поиска (регистр не важен).
        status: StatusFilter или его строковое значение; None/'': без фильтра.

    Returns:
        List[Achievement]: Подпоследовательность исходного списка.
    """
    status_filter = StatusFilter(status) if status else StatusFilter.NONE
    filtered = list(achievements)

    if game != ALL_GAMES:
        filtered = [a for a in filtered if a.game == game]

    query = search.lower()
    if query:
        filtered = [
            a for a in filtered
            if query in a.name.lower() or query in a.description.lower()
        ]

    if status_filter is not StatusFilter.NONE:
        filtered = [a for a in filtered if _matches_status(a, status_filter)]

    return filtered


def game_stats(achievements: Sequence[Achievement]) -> List[GameStats]:
    """Счётчики по играм, отсортированные по имени; игры без имени идут в 'Unknown Game'."""
    stats: Dict[str, GameStats] = {}
    for ach in achievements:
        name = ach.display_game
        entry = stats.get(name)
        if entry is None:
            entry = stats[name] = GameStats(game=name, icon=ach.game_icon or TROPHY_ICON)
        entry.total += 1
        if ach.achieved:
            entry.completed += 1
    return [stats[name] for name in sorted(stats)]
