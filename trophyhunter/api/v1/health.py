from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from trophyhunter.api.deps import get_store
from trophyhunter.core.achievements.store import AchievementStore
from trophyhunter.core.fetch import get_achievement_fetcher

router = APIRouter(prefix="/v1", tags=["Health"])
log = logging.getLogger(__name__)

_PROBE_KEY = "healthz"


@router.get("/healthz")
async def healthz(store: AchievementStore = Depends(get_store)):
    out: dict[str, str] = {}

    # Storage: запись → чтение → удаление служебного ключа
    storage = store.storage
    try:
        storage.set(_PROBE_KEY, "ok")
        probe = storage.get(_PROBE_KEY)
        storage.delete(_PROBE_KEY)
    except SQLAlchemyError as exc:
        log.exception("Storage health check failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="storage error") from exc
    if probe != "ok":
        log.error("Storage health check read back %r", probe)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="storage error")
    out["storage"] = storage.name

    # Fetch provider
    try:
        out["fetch"] = get_achievement_fetcher().name
    except (ValueError, ImportError) as exc:
        log.exception("Fetch provider health check failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="fetch error") from exc

    return out
