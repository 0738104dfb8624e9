# trophyhunter/core/storage/sql.py

from __future__ import annotations

import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from trophyhunter.db.base import create_db_and_tables, session_context
from .base import BaseStorageProvider
from .models import KeyValueEntry

log = logging.getLogger(__name__)


class SqlStorageProvider(BaseStorageProvider):
    """
    Key-value хранилище поверх таблицы ``kv_entries``.
    Каждая операция открывает отдельную короткую сессию с commit/rollback.
    """

    name: str = "sql"

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None) -> None:
        # session_factory позволяет тестам подставить свой движок;
        # со своим движком схему создаёт вызывающий
        self._session_factory = session_factory
        if session_factory is None:
            create_db_and_tables()
        log.info("Initialized SqlStorageProvider")

    def _session(self):
        return session_context(self._session_factory)

    def get(self, key: str) -> Optional[str]:
        with self._session() as session:
            entry = session.get(KeyValueEntry, key)
            log.debug("SQL: get %s -> %s", key, "hit" if entry else "miss")
            return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        with self._session() as session:
            entry = session.get(KeyValueEntry, key)
            if entry:
                entry.value = value
            else:
                session.add(KeyValueEntry(key=key, value=value))
            log.debug("SQL: set %s (%d chars)", key, len(value))

    def delete(self, key: str) -> None:
        with self._session() as session:
            entry = session.get(KeyValueEntry, key)
            if entry:
                session.delete(entry)
                log.debug("SQL: deleted %s", key)
            else:
                log.debug("SQL: delete %s skipped, no such key", key)
