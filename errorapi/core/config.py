"""
errorapi.core.config
─────────────────────
Typed configuration with env layering. Reads from .env → environment
variables. All fields are typed via Pydantic. Required adapter values are
checked by the adapters themselves so that a missing value surfaces as a
ConfigurationError at construction time.

Minimal stack: pydantic-settings + python-dotenv
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SENTRY_BASE_URL = "https://sentry.io"


class ErrorApiConfig(BaseSettings):
    """
    Typed errorapi configuration.
    All env vars are prefixed with ERRORAPI_.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Sentry ────────────────────────────────────────────────────────────────
    sentry_token: str | None = Field(default=None, alias="ERRORAPI_SENTRY_TOKEN")
    sentry_organisation: str | None = Field(
        default=None, alias="ERRORAPI_SENTRY_ORGANISATION"
    )
    sentry_team: str | None = Field(default=None, alias="ERRORAPI_SENTRY_TEAM")
    sentry_base_url: str = Field(default=SENTRY_BASE_URL, alias="ERRORAPI_SENTRY_BASE_URL")

    # ── HTTP ──────────────────────────────────────────────────────────────────
    http_timeout: float | None = Field(default=None, alias="ERRORAPI_HTTP_TIMEOUT")

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", alias="ERRORAPI_LOG_LEVEL")
    log_format: str = Field(default="json", alias="ERRORAPI_LOG_FORMAT")

    @field_validator("sentry_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = {"json", "console"}
        if v.lower() not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got {v!r}")
        return v.lower()


@lru_cache(maxsize=1)
def get_config() -> ErrorApiConfig:
    """
    Return the singleton config. Cached after first call.
    Call _reset_config() in tests to pick up new env vars.
    """
    return ErrorApiConfig()


def _reset_config() -> None:
    """For tests: clear the config cache."""
    get_config.cache_clear()
