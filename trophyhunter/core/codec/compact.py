# trophyhunter/core/codec/compact.py
"""
Versioned positional codec.

Format: ``"STH1:" + base64(utf8(JSON(array-of-positional-arrays)))``.
Anything without the prefix is treated as a legacy bare JSON array of
achievement objects.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any, Dict, List, Sequence

from pydantic import ValidationError as PydanticValidationError

from trophyhunter.core.achievements.schemas import Achievement
from trophyhunter.core.errors import CorruptDataError

log = logging.getLogger(__name__)

CODE_PREFIX = "STH1:"

# Wire names, in tuple order
FIELD_ORDER = (
    "id", "game", "name", "description", "icon", "achieved",
    "progress", "priority", "favorite", "globalPercentage", "rarity", "gameIcon",
)
_FLAG_FIELDS = frozenset({"achieved", "favorite"})


def _pack(record: Dict[str, Any]) -> List[Any]:
    row: List[Any] = []
    for key in FIELD_ORDER:
        value = record.get(key)
        if key in _FLAG_FIELDS:
            row.append(1 if value else 0)
        else:
            row.append("" if value is None else value)
    return row


def _unpack(row: Any) -> Dict[str, Any]:
    if not isinstance(row, list):
        raise CorruptDataError("Invalid code format")
    # Короткие строки (старые версии кода): недостающие поля берут значения по умолчанию
    record: Dict[str, Any] = {key: False for key in _FLAG_FIELDS}
    for key, value in zip(FIELD_ORDER, row):
        record[key] = value == 1 if key in _FLAG_FIELDS else value
    return record


def encode(achievements: Sequence[Achievement]) -> str:
    """Закодировать весь список в копируемую строку."""
    compact = [_pack(a.to_record()) for a in achievements]
    payload = json.dumps(compact, ensure_ascii=False, separators=(",", ":"))
    code = CODE_PREFIX + base64.b64encode(payload.encode("utf-8")).decode("ascii")
    log.debug("Codec: encoded %d records into %d chars", len(compact), len(code))
    return code


def decode_records(code: str) -> List[Dict[str, Any]]:
    """
    Раскодировать строку в «сырые» словари (без применения схемы).

    Нужны вызывающему, чтобы проверить, какие поля реально пришли
    (например, ``name`` у первой записи при импорте).

    Raises:
        CorruptDataError: битый base64 / JSON / строки кортежей.
    """
    code = code.strip()
    if not code.startswith(CODE_PREFIX):
        try:
            legacy = json.loads(code)
        except ValueError as exc:
            raise CorruptDataError("Invalid or corrupted data code") from exc
        if not isinstance(legacy, list):
            return []
        if not all(isinstance(item, dict) for item in legacy):
            raise CorruptDataError("Invalid or corrupted data code")
        return legacy

    try:
        # коды, перенесённые мессенджером или почтой, бывают разбиты на строки
        token = "".join(code[len(CODE_PREFIX):].split())
        payload = base64.b64decode(token, validate=True).decode("utf-8")
        raw = json.loads(payload)
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        log.error("[Import] Decompression failed: %s", exc)
        raise CorruptDataError("Invalid code format") from exc

    if not isinstance(raw, list):
        return []
    return [_unpack(row) for row in raw]


def decode(code: str) -> List[Achievement]:
    """Раскодировать строку в список ачивок; decode(encode(L)) == L."""
    try:
        return [Achievement.model_validate(record) for record in decode_records(code)]
    except PydanticValidationError as exc:
        raise CorruptDataError("Invalid or corrupted data code") from exc
