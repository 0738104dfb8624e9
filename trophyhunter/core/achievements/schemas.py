# trophyhunter/core/achievements/schemas.py
"""
Каноническая схема ачивки.

Записи приходят из разных источников (демо-данные, fetch, вставленный JSON,
компактный код), поэтому все значения по умолчанию и приведение типов
собраны в одной модели и применяются на каждой границе ввода.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

ALL_GAMES = "all"
UNKNOWN_GAME = "Unknown Game"
TROPHY_ICON = "\U0001F3C6"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Rarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"


_PRIORITIES = frozenset(p.value for p in Priority)
_RARITIES = frozenset(r.value for r in Rarity)


def rarity_for_percentage(global_percentage: float) -> Rarity:
    """Редкость по доле игроков, открывших ачивку."""
    if global_percentage < 5:
        return Rarity.EPIC
    if global_percentage < 15:
        return Rarity.RARE
    if global_percentage < 40:
        return Rarity.UNCOMMON
    return Rarity.COMMON


class Achievement(BaseModel):
    """
    Одна ачивка. Имена полей в JSON совпадают с форматом хранения
    (``globalPercentage``, ``gameIcon``), атрибуты в Python в snake_case.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field("", description="Stable unique id, '<appId>_<index>' for fetched records")
    game: str = Field("", description="Owning game's display name")
    name: str = ""
    description: str = ""
    icon: str = TROPHY_ICON
    achieved: bool = False
    progress: int = Field(0, description="0..100")
    priority: Priority = Priority.MEDIUM
    favorite: bool = False
    global_percentage: float = Field(0.0, alias="globalPercentage")
    rarity: Rarity = Rarity.COMMON
    game_icon: str = Field(TROPHY_ICON, alias="gameIcon")

    # --- Приведение типов на входе ---

    @field_validator("id", "game", "name", "description", "icon", "game_icon", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("achieved", "favorite", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes")
        return bool(value)

    @field_validator("progress", mode="before")
    @classmethod
    def _clamp_progress(cls, value: Any) -> int:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0
        if math.isnan(number):
            return 0
        return max(0, min(100, int(math.floor(number + 0.5))))

    @field_validator("global_percentage", mode="before")
    @classmethod
    def _coerce_percentage(cls, value: Any) -> float:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0
        return 0.0 if math.isnan(number) else number

    @field_validator("priority", mode="before")
    @classmethod
    def _known_priority(cls, value: Any) -> Any:
        if isinstance(value, Priority):
            return value
        if isinstance(value, str) and value in _PRIORITIES:
            return value
        return Priority.MEDIUM

    @field_validator("rarity", mode="before")
    @classmethod
    def _known_rarity(cls, value: Any) -> Any:
        if isinstance(value, Rarity):
            return value
        if isinstance(value, str) and value in _RARITIES:
            return value
        return Rarity.COMMON

    # --- Хелперы ---

    @property
    def display_game(self) -> str:
        return self.game or UNKNOWN_GAME

    def to_record(self) -> Dict[str, Any]:
        """Словарь в формате хранения (camelCase, enum → str)."""
        return self.model_dump(mode="json", by_alias=True)


class GameStats(BaseModel):
    """Агрегат по одной игре; пересчитывается на каждый запрос, не хранится."""
    game: str
    total: int = 0
    completed: int = 0
    icon: str = TROPHY_ICON


__all__: list[str] = [
    "ALL_GAMES",
    "UNKNOWN_GAME",
    "TROPHY_ICON",
    "Priority",
    "Rarity",
    "rarity_for_percentage",
    "Achievement",
    "GameStats",
]
