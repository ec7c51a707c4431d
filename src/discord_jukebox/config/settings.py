"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.constants import AudioConstants, LimitConstants, UIConstants
from ..domain.shared.messages import ErrorMessages
from ..domain.shared.validators import validate_discord_snowflake


class DiscordSettings(BaseSettings):
    """Discord bot configuration.

    Reads the flat ``DISCORD_TOKEN`` / ``PREFIX`` variables directly as well
    as the nested ``DISCORD__TOKEN`` form handled by ``Settings``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    token: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("discord_token", "bot_token")
    )
    command_prefix: str = Field(
        default="!",
        min_length=1,
        max_length=5,
        validation_alias=AliasChoices("command_prefix", "prefix"),
    )
    bot_status: str = Field(
        default="🎵 Music | /play",
        max_length=128,
    )
    test_guild_ids: tuple[int, ...] = Field(
        default_factory=tuple, validation_alias=AliasChoices("test_guild_ids", "test_guilds")
    )
    sync_on_startup: bool = True

    @field_validator("test_guild_ids", mode="before")
    @classmethod
    def validate_snowflake_ids(cls, v: tuple[int, ...] | list[int]) -> tuple[int, ...]:
        """Validate Discord snowflake IDs and convert lists to tuples."""
        # Convert list to tuple if needed (from JSON array in env vars)
        if isinstance(v, list):
            v = tuple(v)
        for snowflake in v:
            validate_discord_snowflake(snowflake)
        return v


class AudioSettings(BaseModel):
    """Audio playback configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    default_volume: int = Field(
        default=LimitConstants.DEFAULT_VOLUME,
        ge=LimitConstants.MIN_VOLUME,
        le=LimitConstants.MAX_VOLUME,
    )
    max_queue_size: int = Field(default=LimitConstants.MAX_QUEUE_SIZE, ge=1, le=1000)
    history_size: int = Field(default=LimitConstants.HISTORY_SIZE, ge=0, le=200)
    ffmpeg_options: dict[str, str] = Field(
        default_factory=lambda: {
            "before_options": AudioConstants.FFMPEG_BEFORE_OPTIONS_DEFAULT,
            "options": AudioConstants.FFMPEG_OPTIONS_DEFAULT,
        }
    )
    ytdlp_format: str = AudioConstants.YTDLP_FORMAT_DEFAULT
    player_client: tuple[str, ...] = Field(
        default=AudioConstants.YTDLP_PLAYER_CLIENTS,
        min_length=1,
        validation_alias=AliasChoices("player_client", "player_clients"),
    )

    # Lifecycle
    leave_on_stop: bool = True
    leave_on_empty: bool = True
    leave_on_finish: bool = False
    announce_repeats: bool = False


class UISettings(BaseModel):
    """Embed colors and message sizing."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    embed_color: int = Field(default=UIConstants.EMBED_COLOR, ge=0, le=0xFFFFFF)
    accent_color: int = Field(default=UIConstants.ACCENT_COLOR, ge=0, le=0xFFFFFF)
    error_message_limit: int = Field(default=LimitConstants.MESSAGE_SAFE_LENGTH, ge=100, le=2000)
    queue_page_size: int = Field(default=UIConstants.QUEUE_PAGE_SIZE, ge=1, le=25)


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - DISCORD_TOKEN, PREFIX, or DISCORD__TOKEN, DISCORD__COMMAND_PREFIX (nested)
    - AUDIO__DEFAULT_VOLUME, AUDIO__LEAVE_ON_STOP, ...
    - UI__EMBED_COLOR, UI__ERROR_MESSAGE_LIMIT, ...
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)
    ui: UISettings = Field(default_factory=UISettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=valid_levels))
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
