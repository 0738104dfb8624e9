"""
Storage subsystem package.

• ``BaseStorageProvider`` – абстрактный key-value интерфейс (см. base.py).
• ``get_storage_provider()`` – фабрика, возвращающая инстанс
  нужного провайдера по имени или из ``settings.STORAGE_PROVIDER``.

Ленивая загрузка (``importlib.import_module``) не тянет SQLAlchemy-модели,
пока реально используется только in-memory провайдер.
"""
from __future__ import annotations

import importlib
from typing import Callable, Dict, Type

from trophyhunter.config import settings
from .base import (  # noqa: F401 (экспорт в __all__)
    ACHIEVEMENTS_KEY,
    AI_PROVIDER_KEY,
    CURRENT_GAME_KEY,
    GUIDE_LANGUAGE_KEY,
    BaseStorageProvider,
)


def _lazy_import(module_suffix: str, class_name: str) -> Type[BaseStorageProvider]:
    """
    _lazy_import(".memory", "MemoryStorageProvider")  →  <class MemoryStorageProvider>
    """
    module = importlib.import_module(f"{__name__}{module_suffix}")
    return getattr(module, class_name)


# registry: name → loader of provider-class
_PROVIDER_LOADERS: Dict[str, Callable[[], Type[BaseStorageProvider]]] = {
    "memory": lambda: _lazy_import(".memory", "MemoryStorageProvider"),
    "sql": lambda: _lazy_import(".sql", "SqlStorageProvider"),
}


def get_storage_provider(name: str | None = None) -> BaseStorageProvider:
    """
    Вернуть НОВЫЙ экземпляр провайдера хранилища.

    • ``name`` – явное имя (case-insensitive).
    • Если не передано, берём из ``settings.STORAGE_PROVIDER``.
    """
    provider_key = (name or settings.STORAGE_PROVIDER).lower()
    try:
        loader = _PROVIDER_LOADERS[provider_key]
    except KeyError as exc:
        raise ValueError(f"Unknown storage provider: {provider_key}") from exc
    return loader()()


__all__: list[str] = [
    "BaseStorageProvider",
    "get_storage_provider",
    "ACHIEVEMENTS_KEY",
    "CURRENT_GAME_KEY",
    "AI_PROVIDER_KEY",
    "GUIDE_LANGUAGE_KEY",
]
