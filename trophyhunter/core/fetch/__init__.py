# trophyhunter/core/fetch/__init__.py

from __future__ import annotations

import importlib
import logging
from typing import Callable, Dict, Type

from trophyhunter.config import settings
from .base import BaseAchievementFetcher

log = logging.getLogger(__name__)


def _lazy_import(module_suffix: str, class_name: str) -> Type[BaseAchievementFetcher]:
    module_name = f"{__name__}{module_suffix}"
    try:
        module = importlib.import_module(module_name)
        fetcher_class = getattr(module, class_name)
        if not issubclass(fetcher_class, BaseAchievementFetcher):
            raise TypeError(f"Class {class_name} is not a subclass of BaseAchievementFetcher") # pragma: no cover
        log.debug("Successfully lazy-imported %s from %s", class_name, module_name)
        return fetcher_class
    except (ModuleNotFoundError, AttributeError) as e:
        log.error("Failed to lazy-import fetcher '%s%s': %s", module_suffix, class_name, e)
        raise ImportError(f"Could not import fetcher {class_name} from {module_name}") from e


# --- Реестр доступных провайдеров ---
_FETCHER_LOADERS: Dict[str, Callable[[], Type[BaseAchievementFetcher]]] = {
    "stub": lambda: _lazy_import(".stub", "StubAchievementFetcher"),
}

# --- Публичная Фабрика ---
_fetcher_instance: BaseAchievementFetcher | None = None


def get_achievement_fetcher() -> BaseAchievementFetcher:
    """Фабрика для получения ЕДИНСТВЕННОГО экземпляра fetch-провайдера."""
    global _fetcher_instance
    if _fetcher_instance is None:
        provider_key = settings.FETCH_PROVIDER.lower()
        log.info("Attempting to initialize fetch provider: %s", provider_key)
        loader = _FETCHER_LOADERS.get(provider_key)
        if not loader:
            raise ValueError(f"Unknown fetch provider: {settings.FETCH_PROVIDER}")
        _fetcher_instance = loader()()
        log.info("Successfully initialized fetch provider instance: %s", _fetcher_instance.name)
    return _fetcher_instance


__all__ = [
    "BaseAchievementFetcher",
    "get_achievement_fetcher",
]
