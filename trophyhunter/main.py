from __future__ import annotations
import logging

from fastapi import FastAPI, status

from trophyhunter import __version__
from trophyhunter.api.v1.achievements_api import router as achievements_router
from trophyhunter.api.v1.guides_api import router as guides_router
from trophyhunter.api.v1.health import router as health_router
from trophyhunter.api.v1.sync_api import router as sync_router
from trophyhunter.config import settings

logging.basicConfig(level=settings.LOG_LEVEL.upper())
log = logging.getLogger(__name__)
description = """
Track game achievement progress: filter by game and status, sync progress
from pasted achievement pages or JSON, share everything as a compact data code.
"""
tags_metadata = [
    {"name": "Achievements", "description": "Tracked achievements, games and reports."},
    {"name": "Sync", "description": "Bulk updates from pasted text, JSON and data codes."},
    {"name": "Guides", "description": "AI guide prompts and their preferences."},
    {"name": "Health", "description": "Liveness checks."},
]

app = FastAPI(
    title="Trophy Hunter API",
    description=description,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=tags_metadata,
)

app.include_router(achievements_router)
app.include_router(sync_router)
app.include_router(guides_router)
app.include_router(health_router)

log.info("\U0001F331 FastAPI application configured. Environment: %s", settings.ENVIRONMENT)


@app.on_event("startup")
async def startup_event() -> None:
    log.info("\U0001F680 FastAPI application startup complete (storage=%s).", settings.STORAGE_PROVIDER)


@app.on_event("shutdown")
async def shutdown_event() -> None:
    log.info("\U0001F44B FastAPI application shutdown.")


@app.get("/healthz", tags=["Health"], status_code=status.HTTP_200_OK)
async def health_check():
    """Basic health check endpoint."""
    return {"status": "ok", "environment": settings.ENVIRONMENT}
