# trophyhunter/core/storage/models.py

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from trophyhunter.db.base import Base


class KeyValueEntry(Base):
    """
    ORM модель одной записи key-value хранилища.

    ``value`` хранит строку как есть: JSON-список ачивок или
    простое значение (выбранная игра, настройки AI).
    """
    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(64), primary_key=True, comment="Logical storage key")
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self) -> str: # pragma: no cover
        return f"<KeyValueEntry key={self.key!r} size={len(self.value)}>"
