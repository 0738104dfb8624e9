# /trophyhunter/api/v1/achievements_api.py

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from trophyhunter.api.deps import get_achievements_service, http_error
from trophyhunter.core.achievements.query import StatusFilter
from trophyhunter.core.achievements.schemas import Achievement, GameStats
from trophyhunter.core.achievements.service import AchievementsService
from trophyhunter.core.errors import TrackerError

router = APIRouter(prefix="/v1", tags=["Achievements"])
log = logging.getLogger(__name__)


# --- Pydantic Модели Запроса/Ответа ---
class GamesOut(BaseModel):
    current_game: str
    total: int = Field(..., description="Achievements across all games")
    games: List[GameStats]


class SelectGameIn(BaseModel):
    game: str = Field(..., min_length=1, description="'all' or a tracked game name")


class AddGameIn(BaseModel):
    app_id: str = Field(..., description="Numeric Steam App ID")
    game_name: str = Field(..., description="Display name of the game")


class DeletedOut(BaseModel):
    game: str
    deleted: int


# --- Ачивки ---
@router.get(
    "/achievements",
    response_model=List[Achievement],
    summary="List achievements",
    description="Filtered by game (defaults to the selected one), search text and status.",
)
async def list_achievements(
    game: Optional[str] = Query(None),
    search: str = Query(""),
    status_filter: Optional[StatusFilter] = Query(None, alias="status"),
    svc: AchievementsService = Depends(get_achievements_service),
) -> List[Achievement]:
    return svc.list_achievements(game=game, search=search, status=status_filter)


@router.post("/achievements/{achievement_id}/toggle", response_model=Achievement)
async def toggle_achievement(achievement_id: str, svc: AchievementsService = Depends(get_achievements_service)) -> Achievement:
    try:
        return svc.toggle(achievement_id)
    except TrackerError as e:
        raise http_error(e) from e


@router.post("/achievements/demo", response_model=List[Achievement], summary="Load sample data")
async def load_demo(svc: AchievementsService = Depends(get_achievements_service)) -> List[Achievement]:
    return svc.seed_demo()


@router.delete("/achievements", status_code=status.HTTP_204_NO_CONTENT, summary="Clear all data")
async def clear_achievements(svc: AchievementsService = Depends(get_achievements_service)) -> None:
    svc.clear()


@router.get("/achievements/report", response_class=PlainTextResponse, summary="Progress report")
async def progress_report(svc: AchievementsService = Depends(get_achievements_service)) -> str:
    return svc.report()


# --- Игры ---
@router.get("/games", response_model=GamesOut)
async def list_games(svc: AchievementsService = Depends(get_achievements_service)) -> GamesOut:
    return GamesOut(
        current_game=svc.state.current_game,
        total=len(svc.state.achievements),
        games=svc.game_stats(),
    )


@router.put("/games/selected", response_model=GamesOut)
async def select_game(
    payload: SelectGameIn = Body(...),
    svc: AchievementsService = Depends(get_achievements_service),
) -> GamesOut:
    try:
        svc.select_game(payload.game)
    except TrackerError as e:
        raise http_error(e) from e
    return await list_games(svc)


@router.delete("/games/{game:path}", response_model=DeletedOut)
async def delete_game(game: str, svc: AchievementsService = Depends(get_achievements_service)) -> DeletedOut:
    try:
        return DeletedOut(game=game, deleted=svc.delete_game(game))
    except TrackerError as e:
        raise http_error(e) from e


@router.post(
    "/games",
    response_model=List[Achievement],
    status_code=status.HTTP_201_CREATED,
    summary="Add a game by App ID",
)
async def add_game(
    payload: AddGameIn = Body(...),
    svc: AchievementsService = Depends(get_achievements_service),
) -> List[Achievement]:
    log.info("API: adding game '%s' (app %s)", payload.game_name, payload.app_id)
    try:
        return await svc.add_game(payload.app_id, payload.game_name)
    except TrackerError as e:
        raise http_error(e) from e
    except Exception as e:
        log.exception("API: Error adding game '%s': %s", payload.game_name, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not add game.",
        ) from e
