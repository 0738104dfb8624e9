# /trophyhunter/api/v1/sync_api.py

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from trophyhunter.api.deps import get_sync_service, http_error
from trophyhunter.core.errors import TrackerError
from trophyhunter.core.sync import SyncOutcome, SyncService
from trophyhunter.core.sync.confirmations import PendingConfirmation

router = APIRouter(prefix="/v1", tags=["Sync"])
log = logging.getLogger(__name__)


class SyncIn(BaseModel):
    text: str = Field(..., description="Pasted achievement page text or a JSON array")
    overwrite: bool = Field(False, description="Reset everything in the current view that is not confirmed unlocked")


class ImportIn(BaseModel):
    code: str = Field(..., description="STH1 data code or a legacy JSON array")


class SyncOutcomeOut(BaseModel):
    kind: str
    changed: bool
    message: str
    synced: int = 0
    progress_updated: int = 0
    total: int = 0

    @classmethod
    def from_outcome(cls, outcome: SyncOutcome) -> "SyncOutcomeOut":
        return cls(**vars(outcome))


class ConfirmationOut(BaseModel):
    token: str
    action: str
    scope: str
    message: str
    expires_at: datetime

    @classmethod
    def from_pending(cls, pending: PendingConfirmation) -> "ConfirmationOut":
        return cls(
            token=pending.token,
            action=pending.action,
            scope=pending.scope,
            message=pending.message,
            expires_at=pending.expires_at,
        )


class ExportOut(BaseModel):
    code: str
    count: int


def _pending_response(pending: PendingConfirmation) -> JSONResponse:
    body = ConfirmationOut.from_pending(pending).model_dump(mode="json")
    return JSONResponse(status_code=status.HTTP_202_ACCEPTED, content=body)


@router.post(
    "/sync",
    response_model=SyncOutcomeOut,
    responses={202: {"model": ConfirmationOut, "description": "Overwrite requested, confirmation required"}},
    summary="Sync progress from pasted text or JSON",
)
async def sync_progress(payload: SyncIn = Body(...), svc: SyncService = Depends(get_sync_service)):
    try:
        if payload.overwrite:
            return _pending_response(svc.propose_sync(payload.text))
        return SyncOutcomeOut.from_outcome(svc.sync(payload.text))
    except TrackerError as e:
        raise http_error(e) from e


@router.post("/confirmations/{token}", response_model=SyncOutcomeOut, summary="Confirm a pending overwrite")
async def confirm(token: str, svc: SyncService = Depends(get_sync_service)) -> SyncOutcomeOut:
    try:
        return SyncOutcomeOut.from_outcome(svc.confirm(token))
    except TrackerError as e:
        raise http_error(e) from e


# --- Экспорт / импорт ---
@router.get("/data/export", response_model=ExportOut)
async def export_data(svc: SyncService = Depends(get_sync_service)) -> ExportOut:
    code = svc.export_code()
    log.info("Exported %d achievements", len(svc.state.achievements))
    return ExportOut(code=code, count=len(svc.state.achievements))


@router.post(
    "/data/import",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=ConfirmationOut,
    summary="Validate a data code and request confirmation",
)
async def import_data(payload: ImportIn = Body(...), svc: SyncService = Depends(get_sync_service)) -> ConfirmationOut:
    try:
        return ConfirmationOut.from_pending(svc.propose_import(payload.code))
    except TrackerError as e:
        raise http_error(e) from e
