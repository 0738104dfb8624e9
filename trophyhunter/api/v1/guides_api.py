# /trophyhunter/api/v1/guides_api.py

from __future__ import annotations

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, Field

from trophyhunter.api.deps import get_guides_service, http_error
from trophyhunter.core.errors import TrackerError
from trophyhunter.core.guides import GuidePrompt, GuidesService

router = APIRouter(prefix="/v1", tags=["Guides"])


class PreferencesModel(BaseModel):
    ai_provider: str = Field(..., description="claude | gemini | perplexity | chatgpt")
    guide_language: str = Field(..., description="Language the guide should be written in")


class GuideOut(BaseModel):
    prompt: str
    provider: str
    url: str

    @classmethod
    def from_prompt(cls, guide: GuidePrompt) -> "GuideOut":
        return cls(prompt=guide.prompt, provider=guide.provider, url=guide.url)


@router.get("/preferences", response_model=PreferencesModel)
async def get_preferences(svc: GuidesService = Depends(get_guides_service)) -> PreferencesModel:
    return PreferencesModel(ai_provider=svc.state.ai_provider, guide_language=svc.state.guide_language)


@router.put("/preferences", response_model=PreferencesModel)
async def update_preferences(
    payload: PreferencesModel = Body(...),
    svc: GuidesService = Depends(get_guides_service),
) -> PreferencesModel:
    try:
        svc.update_preferences(payload.ai_provider, payload.guide_language)
    except TrackerError as e:
        raise http_error(e) from e
    return await get_preferences(svc)


@router.get("/guides", response_model=GuideOut, summary="Guide prompt for the selected game")
async def guide_for_game(svc: GuidesService = Depends(get_guides_service)) -> GuideOut:
    try:
        return GuideOut.from_prompt(svc.for_current_game())
    except TrackerError as e:
        raise http_error(e) from e


@router.get("/guides/{achievement_id}", response_model=GuideOut)
async def guide_for_achievement(achievement_id: str, svc: GuidesService = Depends(get_guides_service)) -> GuideOut:
    try:
        return GuideOut.from_prompt(svc.for_achievement(achievement_id))
    except TrackerError as e:
        raise http_error(e) from e
