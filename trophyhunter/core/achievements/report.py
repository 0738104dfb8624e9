# trophyhunter/core/achievements/report.py

from __future__ import annotations

import math
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from .schemas import Achievement, Priority

_PRIORITY_MARKS = {Priority.HIGH: "\U0001F525", Priority.MEDIUM: "⚡", Priority.LOW: "\U0001F4DD"}
_DONE = "✅"
_PENDING = "⏳"
_STAR = "⭐"


def _percent(value: float) -> str:
    """12.5 → "12.5", 78.0 → "78", без усечения значащих цифр."""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def progress_report(achievements: Sequence[Achievement], generated_at: Optional[datetime] = None) -> str:
    """Текстовый отчёт для буфера обмена: игры в порядке первого появления."""
    by_game: Dict[str, List[Achievement]] = {}
    for ach in achievements:
        by_game.setdefault(ach.display_game, []).append(ach)

    lines = ["\U0001F3C6 STEAM TROPHY HUNTER - PROGRESS REPORT", "=" * 50, ""]
    for game, items in by_game.items():
        completed = sum(1 for a in items if a.achieved)
        # половина округляется вверх, как в счётчиках синхронизации
        percentage = int(math.floor(completed * 100 / len(items) + 0.5))
        lines.append(f"\U0001F3AE {game}")
        lines.append(f"   Progress: {completed}/{len(items)} ({percentage}%)")
        lines.append("   Achievements:")
        for ach in items:
            status = _DONE if ach.achieved else _PENDING
            favorite = _STAR if ach.favorite else ""
            lines.append(
                f"   {status} {ach.name} {_PRIORITY_MARKS[ach.priority]}{favorite} ({_percent(ach.global_percentage)}%)"
            )
        lines.append("")

    stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    lines.append(f"Generated: {stamp}")
    lines.append("Created with Steam Trophy Hunter")
    return "\n".join(lines)
