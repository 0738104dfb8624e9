# trophyhunter/core/sync/merger.py

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from trophyhunter.core.achievements.schemas import ALL_GAMES, Achievement
from trophyhunter.core.errors import MalformedInputError

log = logging.getLogger(__name__)


def extract_records(payload: Any) -> Optional[List[Any]]:
    """Голый массив или объект с полем ``achievements``; иначе None."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("achievements"), list):
        return payload["achievements"]
    return None


def validate_records(records: Any) -> List[Achievement]:
    """
    Проверить форму входа и привести записи к схеме.

    Первая запись обязана иметь ``name``, иначе это не список ачивок.
    Записи без ``id`` получают сгенерированный, иначе сохранение
    (дедупликация по id) их бы выбросило.

    Raises:
        MalformedInputError: не массив, нет name у первой записи, запись не объект.
    """
    if not isinstance(records, list):
        raise MalformedInputError("Invalid format: Data must be an array of achievements.")
    if records and not (isinstance(records[0], dict) and records[0].get("name")):
        raise MalformedInputError("Invalid data: Achievements must have a name property.")

    parsed: List[Achievement] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise MalformedInputError(f"Invalid data: record #{index + 1} is not an object.")
        try:
            ach = Achievement.model_validate(record)
        except PydanticValidationError as exc:
            raise MalformedInputError(f"Invalid data: record #{index + 1} is malformed.") from exc
        parsed.append(ach)
    return parsed


def _with_generated_id(ach: Achievement) -> Achievement:
    if ach.id:
        return ach
    return ach.model_copy(update={"id": f"import_{uuid.uuid4().hex[:12]}"})


def _overlay(existing: Achievement, incoming: Achievement) -> Achievement:
    """Поля, реально пришедшие во входной записи, заменяют существующие."""
    update: Dict[str, Any] = {
        field: getattr(incoming, field) for field in incoming.model_fields_set
    }
    return existing.model_copy(update=update)


def _as_achievement(record: Achievement | Dict[str, Any]) -> Achievement:
    return record if isinstance(record, Achievement) else Achievement.model_validate(record)


def merge_records(
    current: Sequence[Achievement],
    incoming: Sequence[Achievement | Dict[str, Any]],
    scope: str = ALL_GAMES,
    overwrite: bool = False,
) -> List[Achievement]:
    """
    Свести входные записи с текущим списком и вернуть НОВЫЙ список.
    ``current`` не изменяется, так что вызывающий подменяет состояние
    целиком или не трогает его вовсе.

    Args:
        current: Текущие ачивки.
        incoming: Входные записи (модели или словари в формате хранения).
        scope: 'all' или имя игры, ограничивающее операцию.
        overwrite: True: заменить (весь список или записи игры), False: слить.

    Returns:
        List[Achievement]: Итоговый список (ещё не дедуплицированный).
    """
    incoming = [_as_achievement(r) for r in incoming]

    if scope == ALL_GAMES:
        if overwrite:
            merged = [_with_generated_id(a) for a in incoming]
            log.info("JSON sync: replaced whole store with %d records", len(merged))
            return merged

        merged = [a.model_copy() for a in current]
        matched = appended = 0
        for new in incoming:
            position = next((i for i, a in enumerate(merged) if new.id and a.id == new.id), None)
            if position is not None:
                merged[position] = _overlay(merged[position], new)
                matched += 1
            else:
                merged.append(_with_generated_id(new))
                appended += 1
        log.info("JSON sync (all games): %d overlaid, %d appended", matched, appended)
        return merged

    # --- Операция ограничена одной игрой ---
    if overwrite:
        merged = [a.model_copy() for a in current if a.game != scope]
        merged.extend(_with_generated_id(a.model_copy(update={"game": scope})) for a in incoming)
        log.info("JSON sync (%s): replaced game records with %d records", scope, len(incoming))
        return merged

    merged = [a.model_copy() for a in current]
    matched = appended = 0
    for new in incoming:
        position = next(
            (
                i for i, a in enumerate(merged)
                if (new.id and a.id == new.id) or (a.name == new.name and a.game == scope)
            ),
            None,
        )
        if position is not None:
            merged[position] = _overlay(merged[position], new)
            matched += 1
        else:
            merged.append(_with_generated_id(new.model_copy(update={"game": scope})))
            appended += 1
    log.info("JSON sync (%s): %d overlaid, %d appended", scope, matched, appended)
    return merged
