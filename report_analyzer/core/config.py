"""
Application configuration models and helpers.

Centralizes settings management so the FastAPI app, the analysis workflow and
the command line tools share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()

DEFAULT_STATS_URL_TEMPLATE = (
    "https://s3.eu-west-1.amazonaws.com/stats.tweetbinder.com/{report_id}/stats.json"
)


class GeminiSettings(BaseSettings):
    """Configuration for Gemini model access."""

    model_config = SettingsConfigDict(extra="ignore")

    api_key: str = Field(..., validation_alias="GEMINI_API_KEY")
    analysis_model_name: str = Field(
        "gemini-1.5-flash",
        validation_alias="GEMINI_ANALYSIS_MODEL_NAME",
        description="Model tier used for the one-shot report analysis.",
    )
    chat_model_name: str = Field(
        "gemini-1.5-pro",
        validation_alias="GEMINI_CHAT_MODEL_NAME",
        description="More capable model tier used for follow-up questions.",
    )
    analysis_temperature: float = Field(0.7, validation_alias="ANALYSIS_TEMPERATURE")
    analysis_max_output_tokens: int = Field(
        1000, validation_alias="ANALYSIS_MAX_OUTPUT_TOKENS"
    )
    chat_temperature: float = Field(0.7, validation_alias="CHAT_TEMPERATURE")
    chat_max_output_tokens: int = Field(1000, validation_alias="CHAT_MAX_OUTPUT_TOKENS")
    analysis_system_prompt: Optional[str] = Field(
        None,
        validation_alias="ANALYSIS_SYSTEM_PROMPT",
        description="Optional replacement for the built-in analyst instructions.",
    )
    chat_system_prompt: Optional[str] = Field(
        None,
        validation_alias="CHAT_SYSTEM_PROMPT",
        description="Optional replacement for the built-in follow-up instructions.",
    )


class StorageSettings(BaseSettings):
    """Location of the public report statistics bucket."""

    model_config = SettingsConfigDict(extra="ignore")

    stats_url_template: str = Field(
        DEFAULT_STATS_URL_TEMPLATE,
        validation_alias="STATS_URL_TEMPLATE",
    )
    fetch_timeout_seconds: float = Field(10.0, validation_alias="STATS_FETCH_TIMEOUT")


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    session_ttl_seconds: int = Field(3600, validation_alias="SESSION_TTL_SECONDS")
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "DEFAULT_STATS_URL_TEMPLATE",
    "GeminiSettings",
    "StorageSettings",
    "get_settings",
]
