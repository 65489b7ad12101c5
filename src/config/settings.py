"""Environment configuration and validation.

Settings are loaded from environment variables (optionally via a local `.env` file). The message
and conversion tables are static data and are not configurable.
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.i18n.resources import DEFAULT_LANGUAGE, supported_languages


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_language: str = Field(default=DEFAULT_LANGUAGE, alias="DEFAULT_LANGUAGE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("default_language")
    @classmethod
    def validate_default_language(cls, value: str) -> str:
        """Validate that the fallback language has a message table.

        Locale fallback must always land on a language that can render every message.
        """

        language = value.strip().lower()
        if language not in supported_languages():
            raise ValueError(
                f"DEFAULT_LANGUAGE must be one of {sorted(supported_languages())}, got {value!r}"
            )
        return language

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL is not a valid logging level: {value!r}")
        return level


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
