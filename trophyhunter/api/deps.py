# trophyhunter/api/deps.py
"""
FastAPI-зависимости: одно состояние трекера на процесс.

Трекер однопользовательский и синхронный, состояние грузится из
хранилища при первом запросе и дальше живёт в памяти процесса.

Зависимости и роутеры объявлены ``async def``: FastAPI выполняет их в
event loop, а не в пуле потоков, поэтому ленивая инициализация и
мутации состояния (ядро синхронное) идут строго по одной.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status

from trophyhunter.core.achievements.service import AchievementsService
from trophyhunter.core.achievements.state import AppState
from trophyhunter.core.achievements.store import AchievementStore
from trophyhunter.core.errors import ExternalFetchError, TrackerError
from trophyhunter.core.fetch import BaseAchievementFetcher, get_achievement_fetcher
from trophyhunter.core.guides import GuidesService
from trophyhunter.core.storage import BaseStorageProvider, get_storage_provider
from trophyhunter.core.sync import SyncService
from trophyhunter.core.sync.confirmations import ConfirmationRegistry

log = logging.getLogger(__name__)

_store: Optional[AchievementStore] = None
_state: Optional[AppState] = None
_confirmations: Optional[ConfirmationRegistry] = None


def reset(storage: Optional[BaseStorageProvider] = None) -> None:
    """Сбросить кэш процесса (тесты подставляют своё хранилище)."""
    global _store, _state, _confirmations
    _store = AchievementStore(storage) if storage is not None else None
    _state = None
    _confirmations = None


async def get_store() -> AchievementStore:
    global _store
    if _store is None:
        _store = AchievementStore(get_storage_provider())
        log.info("Achievement store bound to '%s' storage", _store.storage.name)
    return _store


async def get_app_state(store: AchievementStore = Depends(get_store)) -> AppState:
    global _state
    if _state is None:
        _state = AppState.load(store)
    return _state


async def get_confirmations() -> ConfirmationRegistry:
    global _confirmations
    if _confirmations is None:
        _confirmations = ConfirmationRegistry()
    return _confirmations


async def get_fetcher() -> BaseAchievementFetcher:
    return get_achievement_fetcher()


async def get_achievements_service(
    state: AppState = Depends(get_app_state),
    store: AchievementStore = Depends(get_store),
    fetcher: BaseAchievementFetcher = Depends(get_fetcher),
) -> AchievementsService:
    return AchievementsService(state, store, fetcher)


async def get_sync_service(
    state: AppState = Depends(get_app_state),
    store: AchievementStore = Depends(get_store),
    confirmations: ConfirmationRegistry = Depends(get_confirmations),
) -> SyncService:
    return SyncService(state, store, confirmations)


async def get_guides_service(
    state: AppState = Depends(get_app_state),
    store: AchievementStore = Depends(get_store),
) -> GuidesService:
    return GuidesService(state, store)


def http_error(exc: TrackerError) -> HTTPException:
    """Доменная ошибка → HTTPException с текстом для пользователя."""
    code = status.HTTP_502_BAD_GATEWAY if isinstance(exc, ExternalFetchError) else status.HTTP_400_BAD_REQUEST
    log.info("Request rejected (%s): %s", type(exc).__name__, exc.message)
    return HTTPException(status_code=code, detail={"error": type(exc).__name__, "message": exc.message})
