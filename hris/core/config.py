"""
Centralised client settings loaded from environment / .env file.

Uses pydantic-settings so every value can be overridden via env vars
or the .env file at the project root.
"""

from __future__ import annotations

from typing import Annotated
from urllib.parse import urlparse

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

_LOCAL_HOSTS = {"localhost", "127.0.0.1", "::1"}


class Settings(BaseSettings):
    # ── Project ──────────────────────────────────────────────────────
    PROJECT_NAME: str = "HRIS Client"
    VERSION: str = "1.0.0"

    # ── Remote API ───────────────────────────────────────────────────
    API_URL: str = "http://localhost:8080/api/v1"
    UPLOADS_URL: str = "http://localhost:8080/uploads"
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    # ── Auth tokens ──────────────────────────────────────────────────
    TOKEN_EXPIRY_LEEWAY_SECONDS: int = 30
    TOKEN_FILE: str | None = None  # JSON file; unset keeps tokens in memory only

    # ── Screens ──────────────────────────────────────────────────────
    SEARCH_DEBOUNCE_MS: int = 300
    DEFAULT_PAGE_SIZE: int = 10
    GEOLOCATION_TIMEOUT_SECONDS: float = 10.0

    # ── Uploads ──────────────────────────────────────────────────────
    MAX_IMAGE_BYTES: int = 5 * 1024 * 1024
    MAX_ATTENDANCE_PHOTO_BYTES: int = 10 * 1024 * 1024
    ALLOWED_IMAGE_TYPES: Annotated[list[str], NoDecode] = ["image/jpeg", "image/jpg", "image/png"]
    ALLOWED_ATTACHMENT_TYPES: Annotated[list[str], NoDecode] = [
        "image/jpeg",
        "image/jpg",
        "image/png",
        "application/pdf",
    ]

    @field_validator("ALLOWED_IMAGE_TYPES", "ALLOWED_ATTACHMENT_TYPES", mode="before")
    @classmethod
    def _parse_mime_list(cls, v: object) -> list[str]:
        if isinstance(v, str):
            return [m.strip().lower() for m in v.split(",") if m.strip()]
        return v  # type: ignore[return-value]

    @field_validator("API_URL", "UPLOADS_URL")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # ── Logging ──────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }


settings = Settings()

_api = urlparse(settings.API_URL)
if _api.scheme == "http" and _api.hostname not in _LOCAL_HOSTS:
    import logging

    logging.getLogger("hris.core.config").warning(
        "API_URL %s uses plain HTTP; access tokens will travel unencrypted.",
        settings.API_URL,
    )
