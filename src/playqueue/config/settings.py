"""Application Settings and Configuration

Pydantic-based settings management. Settings are loaded from init arguments,
environment variables, a ``.env`` file and an optional ``conf.toml``, with
type validation and sensible defaults. All settings are frozen and immutable
after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from ..domain.shared.messages import ErrorMessages
from ..domain.shared.types import PortInt


class PlayQueueSettings(BaseModel):
    """Play queue persistence configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    path: str = Field(
        default="queue.json",
        validation_alias=AliasChoices("path", "file", "queue_path"),
    )
    persist: bool = True
    persist_on_replace: bool = False

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not v.strip():
            raise ValueError(ErrorMessages.EMPTY_QUEUE_PATH)
        return v


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    host: str = "127.0.0.1"
    port: PortInt = 8000
    prefix: str = Field(
        default="/playqueue",
        validation_alias=AliasChoices("prefix", "mount_path"),
    )

    @field_validator("prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """Ensure the prefix is empty or starts with a single slash and has no trailing one."""
        v = v.strip().strip("/")
        return f"/{v}" if v else ""


class PreprocessorSettings(BaseModel):
    """Built-in preprocessor configuration."""

    model_config = SettingsConfigDict(frozen=True)

    expand_playlists: bool = False
    fetch_timeout_s: float = Field(default=10.0, gt=0.0, le=120.0)


class Settings(BaseSettings):
    """Application settings container.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - PLAYQUEUE__PATH, PLAYQUEUE__PERSIST, PLAYQUEUE__PERSIST_ON_REPLACE
    - SERVER__HOST, SERVER__PORT, SERVER__PREFIX
    - PREPROCESSORS__EXPAND_PLAYLISTS, PREPROCESSORS__FETCH_TIMEOUT_S
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        toml_file="conf.toml",
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    playqueue: PlayQueueSettings = Field(default_factory=PlayQueueSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    preprocessors: PreprocessorSettings = Field(default_factory=PreprocessorSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=valid_levels))
        return v_upper

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # conf.toml sits below the environment so deployments can override it
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded from, in order of precedence:
    1. Environment variables
    2. .env file (if present)
    3. conf.toml (if present)
    4. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
