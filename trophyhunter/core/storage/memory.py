# trophyhunter/core/storage/memory.py

from __future__ import annotations

import logging
from typing import Dict, Optional

from .base import BaseStorageProvider

log = logging.getLogger(__name__)


class MemoryStorageProvider(BaseStorageProvider):
    """
    Заглушка-хранилище; держит значения в оперативной памяти.
    Удобна в unit-тестах и для одноразовых сессий.
    """

    name: str = "memory"

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})
        log.info("Initialized MemoryStorageProvider (in-memory)")

    def get(self, key: str) -> Optional[str]:
        log.debug("Memory: get %s", key)
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        log.debug("Memory: set %s (%d chars)", key, len(value))
        self._values[key] = value

    def delete(self, key: str) -> None:
        log.debug("Memory: delete %s", key)
        self._values.pop(key, None)
