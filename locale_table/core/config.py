"""
Application configuration for Locale Table Editor.

It defines strongly-typed settings using Pydantic v2 BaseSettings.
Defaults target local/dev usage; values can be overridden via environment
variables or a .env file at the project root.

The CATALOG_* values only seed the editor session at startup; the host can
point the session at another folder later through /api/session.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

StructureType = Literal["flat", "nested"]
CopyMode = Literal["plain", "template"]

DEFAULT_COPY_TEMPLATE = "t('{key}')"


def _default_templates() -> dict[str, str]:
    return {
        "react-i18next": "t('{key}')",
        "react-i18next-trans": "<Trans i18nKey=\"{key}\" />",
        "vue-i18n": "$t('{key}')",
        "angular-i18n": "{{ '{key}' | translate }}",
        "flutter-intl": "AppLocalizations.of(context)!.{key}",
    }


class Settings(BaseSettings):
    """Application settings loaded from environment variables (.env supported)."""

    # Load from .env at repo root; ignore unknown variables to keep flexibility
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # -------------------------------------------------------------------------
    # Core application info
    # -------------------------------------------------------------------------
    APP_NAME: str = "Locale Table Editor"
    APP_VERSION: str = "0.3.0"
    DEBUG: bool = False

    # -------------------------------------------------------------------------
    # Server configuration
    # -------------------------------------------------------------------------
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    RELOAD: bool = False

    # -------------------------------------------------------------------------
    # Catalogs
    # -------------------------------------------------------------------------
    # Initial catalog folder; None means the host picks one via /api/session.
    CATALOG_DIR: Path | None = None
    STRUCTURE: StructureType = "flat"
    # Nested mode only: file edited across all language folders.
    SELECTED_FILE: str | None = None
    JSON_INDENT: int = 2

    # -------------------------------------------------------------------------
    # Copy key snippets
    # -------------------------------------------------------------------------
    COPY_TEMPLATE: str = DEFAULT_COPY_TEMPLATE
    DEFAULT_COPY_MODE: CopyMode = "plain"
    COPY_TEMPLATES: dict[str, str] = _default_templates()

    # -------------------------------------------------------------------------
    # Security / API
    # -------------------------------------------------------------------------
    ENABLE_CORS: bool = True
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Path | None = None


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance (singleton-like)."""
    return Settings()
