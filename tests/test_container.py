"""
Unit Tests for Dependency Injection Container

Tests for:
- Lazy initialization and caching of components
- Bot instance management (set_bot, bot property, error when not set)
- Wiring between the controller, the voice adapter and the dispatcher
- Lifecycle methods (initialize, shutdown)
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from discord_jukebox.application.services.command_dispatcher import CommandDispatcher
from discord_jukebox.application.services.playback_controller import PlaybackController
from discord_jukebox.config.container import Container, create_container
from discord_jukebox.config.settings import AudioSettings, Settings
from discord_jukebox.domain.music.events import NowPlaying
from discord_jukebox.infrastructure.audio.ytdlp_resolver import YtDlpResolver
from discord_jukebox.infrastructure.discord.adapters.voice_adapter import DiscordVoiceAdapter
from discord_jukebox.infrastructure.memory.queue_registry import InMemoryQueueRegistry


@pytest.fixture
def settings():
    return Settings(audio=AudioSettings(default_volume=60, leave_on_finish=True))


@pytest.fixture
def mock_bot():
    bot = MagicMock()
    bot.user = MagicMock()
    bot.user.id = 123456789
    return bot


@pytest.fixture
def container(settings, mock_bot):
    container = create_container(settings)
    container.set_bot(mock_bot)
    return container


class TestBotManagement:
    def test_bot_required(self, settings):
        container = Container(settings=settings)

        with pytest.raises(RuntimeError, match="Bot not initialized"):
            _ = container.bot

    def test_set_bot(self, container, mock_bot):
        assert container.bot is mock_bot


class TestLazyComponents:
    @pytest.mark.parametrize(
        "name",
        [
            "event_bus",
            "queue_registry",
            "search_cache",
            "audio_resolver",
            "voice_adapter",
            "playback_controller",
            "search_service",
            "command_dispatcher",
            "get_queue_handler",
            "get_now_playing_handler",
            "reply_builder",
            "notification_renderer",
        ],
    )
    def test_components_are_cached(self, container, name):
        assert getattr(container, name) is getattr(container, name)

    def test_concrete_types(self, container):
        assert isinstance(container.queue_registry, InMemoryQueueRegistry)
        assert isinstance(container.audio_resolver, YtDlpResolver)
        assert isinstance(container.voice_adapter, DiscordVoiceAdapter)
        assert isinstance(container.playback_controller, PlaybackController)
        assert isinstance(container.command_dispatcher, CommandDispatcher)

    def test_policy_follows_audio_settings(self, container):
        policy = container.playback_controller.policy

        assert policy.default_volume == 60
        assert policy.leave_on_finish is True

    def test_controller_receives_track_end_callbacks(self, container):
        """Should hand the controller's completion handler to the voice adapter."""
        controller = container.playback_controller

        assert container.voice_adapter._on_track_end == controller.handle_track_finished

    def test_reply_builder_uses_prefix(self, container, settings):
        assert container.reply_builder._prefix == settings.discord.command_prefix


class TestLifecycle:
    def test_initialize_starts_notification_delivery(self, container):
        container.initialize()

        assert container.event_bus.handlers_for(NowPlaying)

    @pytest.mark.asyncio
    async def test_shutdown_detaches_everything(self, container):
        container.initialize()

        await container.shutdown()

        assert container.event_bus.handlers_for(NowPlaying) == []

    @pytest.mark.asyncio
    async def test_shutdown_stops_controller(self, container):
        container._playback_controller = MagicMock(shutdown=AsyncMock())

        await container.shutdown()

        container._playback_controller.shutdown.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_shutdown_before_use(self, settings):
        """Should not build components just to shut them down."""
        container = Container(settings=settings)

        await container.shutdown()

        assert container._playback_controller is None
        assert container._event_bus is None
