"""
Unit Tests for Application Settings Configuration

Tests for:
- Default values for optional fields
- Loading flat and nested settings from environment variables
- Custom validators (log level, snowflake IDs)
- Settings caching and clearing
"""

import pytest
from pydantic import ValidationError

from conftest import GUILD_ID
from discord_jukebox.config.settings import (
    AudioSettings,
    DiscordSettings,
    Settings,
    UISettings,
    clear_settings_cache,
    get_settings,
)

_ENV_VARS = (
    "DISCORD_TOKEN",
    "BOT_TOKEN",
    "PREFIX",
    "COMMAND_PREFIX",
    "TEST_GUILD_IDS",
    "ENVIRONMENT",
    "DEBUG",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's shell environment out of these tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestDefaults:
    def test_discord_defaults(self):
        discord = DiscordSettings()

        assert discord.token.get_secret_value() == ""
        assert discord.command_prefix == "!"
        assert discord.test_guild_ids == ()
        assert discord.sync_on_startup is True

    def test_audio_defaults(self):
        """Should stay in a channel after the queue finishes but leave on stop or when empty."""
        audio = AudioSettings()

        assert audio.default_volume == 100
        assert audio.max_queue_size == 200
        assert audio.history_size == 25
        assert audio.leave_on_stop is True
        assert audio.leave_on_empty is True
        assert audio.leave_on_finish is False
        assert audio.announce_repeats is False
        assert "-reconnect 1" in audio.ffmpeg_options["before_options"]

    def test_ui_defaults(self):
        ui = UISettings()

        assert ui.error_message_limit == 1800
        assert ui.queue_page_size == 10

    def test_settings_defaults(self):
        settings = Settings()

        assert settings.environment == "development"
        assert settings.log_level == "INFO"
        assert settings.debug is False


class TestEnvironment:
    def test_flat_discord_variables(self, monkeypatch):
        monkeypatch.setenv("DISCORD_TOKEN", "secret-token")
        monkeypatch.setenv("PREFIX", "?")

        settings = Settings()

        assert settings.discord.token.get_secret_value() == "secret-token"
        assert settings.discord.command_prefix == "?"

    def test_token_is_not_echoed(self, monkeypatch):
        monkeypatch.setenv("DISCORD_TOKEN", "secret-token")

        assert "secret-token" not in repr(DiscordSettings())

    def test_nested_audio_variables(self, monkeypatch):
        monkeypatch.setenv("AUDIO__DEFAULT_VOLUME", "40")
        monkeypatch.setenv("AUDIO__LEAVE_ON_FINISH", "true")
        monkeypatch.setenv("AUDIO__MAX_QUEUE_SIZE", "50")

        audio = Settings().audio

        assert audio.default_volume == 40
        assert audio.leave_on_finish is True
        assert audio.max_queue_size == 50

    def test_nested_ui_variables(self, monkeypatch):
        monkeypatch.setenv("UI__ERROR_MESSAGE_LIMIT", "500")

        assert Settings().ui.error_message_limit == 500

    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")

        assert Settings().log_level == "WARNING"


class TestValidation:
    def test_invalid_log_level(self):
        with pytest.raises(ValidationError, match="Invalid log level"):
            Settings(log_level="VERBOSE")

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(environment="staging")

    def test_test_guild_ids_become_tuple(self):
        discord = DiscordSettings(test_guild_ids=[GUILD_ID])

        assert discord.test_guild_ids == (GUILD_ID,)

    @pytest.mark.parametrize("guild_id", [0, -5, 2**64])
    def test_invalid_test_guild_ids(self, guild_id):
        with pytest.raises(ValidationError):
            DiscordSettings(test_guild_ids=[guild_id])

    @pytest.mark.parametrize("volume", [-1, 101])
    def test_volume_out_of_range(self, volume):
        with pytest.raises(ValidationError):
            AudioSettings(default_volume=volume)

    def test_prefix_length(self):
        with pytest.raises(ValidationError):
            DiscordSettings(command_prefix="toolong")

    def test_settings_are_frozen(self):
        audio = AudioSettings()

        with pytest.raises(ValidationError):
            audio.default_volume = 10


class TestCaching:
    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_clear_settings_cache(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        clear_settings_cache()
        second = get_settings()

        assert second is not first
        assert second.log_level == "DEBUG"
