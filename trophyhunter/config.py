# /trophyhunter/config.py

from __future__ import annotations

import logging
from typing import Optional

# --- Импорты Pydantic ---
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Единый конфиг проекта. Читает переменные окружения.
    Pydantic v2 + pydantic-settings.
    """
    model_config = SettingsConfigDict(
        case_sensitive=False, # Имена переменных окружения не чувствительны к регистру
        extra="ignore", # Игнорировать лишние переменные окружения
    )

    # --- Основные настройки ---
    ENVIRONMENT: str = Field("dev", description="Application environment (dev, test, prod)")
    LOG_LEVEL: str = Field("INFO", description="Root logging level")

    # --- Хранилище ---
    DATABASE_URL: str = Field("sqlite:///./trophyhunter.db", description="SQLAlchemy URL for the key-value table")
    STORAGE_PROVIDER: str = Field("sql", description="Persistence provider ('sql', 'memory')")

    # --- Внешний источник ачивок ---
    FETCH_PROVIDER: str = Field("stub", description="Achievement fetch provider ('stub')")

    # --- Синхронизация ---
    SYNC_EXCERPT_WINDOW: int = Field(300, description="Characters scanned after a matched achievement name")
    CONFIRMATION_TTL_SECONDS: int = Field(300, description="Lifetime of a pending overwrite confirmation")

    # --- AI-гайды ---
    DEFAULT_AI_PROVIDER: str = Field("gemini", description="AI chat used for guide prompts")
    DEFAULT_GUIDE_LANGUAGE: str = Field("Chinese", description="Language requested in guide prompts")
    # GUIDE_PROVIDERS пока фиксированы в core.guides

    SQL_ECHO: Optional[bool] = Field(None, description="Echo SQL (defaults to True in dev)")

    @model_validator(mode='after')
    def normalize(self) -> 'Settings':
        self.STORAGE_PROVIDER = self.STORAGE_PROVIDER.lower()
        self.FETCH_PROVIDER = self.FETCH_PROVIDER.lower()
        self.DEFAULT_AI_PROVIDER = self.DEFAULT_AI_PROVIDER.lower()
        if self.SQL_ECHO is None:
            log.debug("Setting SQL_ECHO default from ENVIRONMENT")
            self.SQL_ECHO = self.ENVIRONMENT == "dev"
        if self.SYNC_EXCERPT_WINDOW <= 0:
            raise ValueError("SYNC_EXCERPT_WINDOW must be positive")
        return self


# --- Создание единственного экземпляра настроек ---
try:
    settings = Settings()
    log.info("Settings loaded successfully for ENVIRONMENT=%s", settings.ENVIRONMENT)
    log.debug("Loaded settings: DB URL=%s..., storage=%s, fetch=%s",
             settings.DATABASE_URL[:25],
             settings.STORAGE_PROVIDER,
             settings.FETCH_PROVIDER)
except Exception as e:
    log.exception("Failed to instantiate Settings.")
    raise e
