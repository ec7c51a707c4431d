"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the controller, its adapters and the Discord
presentation helpers. Components are created on-demand and cached for reuse
throughout the application.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import ErrorMessages

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.interfaces.audio_resolver import AudioResolver
    from ..application.interfaces.voice_adapter import VoiceAdapter
    from ..application.queries.get_current import GetNowPlayingHandler
    from ..application.queries.get_queue import GetQueueHandler
    from ..application.services.command_dispatcher import CommandDispatcher
    from ..application.services.playback_controller import PlaybackController
    from ..application.services.search_service import SearchService
    from ..domain.music.repository import QueueRegistry, SearchResultCache
    from ..domain.shared.events import EventBus
    from ..infrastructure.discord.services.notification_renderer import NotificationRenderer
    from ..infrastructure.discord.services.reply_builder import ReplyBuilder
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    This container manages all application dependencies and their lifecycle.
    Components are lazily initialized when first accessed.
    """

    settings: Settings
    _bot: Bot | None = None

    # Shared state
    _event_bus: EventBus | None = None
    _queue_registry: QueueRegistry | None = None
    _search_cache: SearchResultCache | None = None

    # Infrastructure adapters
    _audio_resolver: AudioResolver | None = None
    _voice_adapter: VoiceAdapter | None = None

    # Application services
    _playback_controller: PlaybackController | None = None
    _search_service: SearchService | None = None
    _command_dispatcher: CommandDispatcher | None = None

    # Query handlers
    _get_queue_handler: GetQueueHandler | None = None
    _get_now_playing_handler: GetNowPlayingHandler | None = None

    # Discord presentation
    _reply_builder: ReplyBuilder | None = None
    _notification_renderer: NotificationRenderer | None = None

    def set_bot(self, bot: Bot) -> None:
        """Set the Discord bot instance."""
        self._bot = bot

    @property
    def bot(self) -> Bot:
        """Get the Discord bot instance."""
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === Shared State ===

    @property
    def event_bus(self) -> EventBus:
        if self._event_bus is None:
            from ..domain.shared.events import EventBus

            self._event_bus = EventBus()
        return self._event_bus

    @property
    def queue_registry(self) -> QueueRegistry:
        if self._queue_registry is None:
            from ..infrastructure.memory.queue_registry import InMemoryQueueRegistry

            self._queue_registry = InMemoryQueueRegistry()
        return self._queue_registry

    @property
    def search_cache(self) -> SearchResultCache:
        if self._search_cache is None:
            from ..domain.shared.constants import LimitConstants
            from ..infrastructure.memory.search_cache import InMemorySearchResultCache

            self._search_cache = InMemorySearchResultCache(limit=LimitConstants.SEARCH_RESULT_LIMIT)
        return self._search_cache

    # === Infrastructure Adapters ===

    @property
    def audio_resolver(self) -> AudioResolver:
        """Get the audio resolver."""
        if self._audio_resolver is None:
            from ..infrastructure.audio.ytdlp_resolver import YtDlpResolver

            self._audio_resolver = YtDlpResolver(self.settings.audio)
        return self._audio_resolver

    @property
    def voice_adapter(self) -> VoiceAdapter:
        """Get the voice adapter."""
        if self._voice_adapter is None:
            from ..infrastructure.discord.adapters.voice_adapter import DiscordVoiceAdapter

            self._voice_adapter = DiscordVoiceAdapter(self.bot, self.settings.audio)
        return self._voice_adapter

    # === Application Services ===

    @property
    def playback_controller(self) -> PlaybackController:
        """Get the per-guild playback controller."""
        if self._playback_controller is None:
            from ..application.services.playback_controller import PlaybackController
            from ..application.services.playback_models import PlaybackPolicy

            self._playback_controller = PlaybackController(
                queue_registry=self.queue_registry,
                audio_resolver=self.audio_resolver,
                voice_adapter=self.voice_adapter,
                event_bus=self.event_bus,
                policy=PlaybackPolicy.from_settings(self.settings.audio),
            )
        return self._playback_controller

    @property
    def search_service(self) -> SearchService:
        if self._search_service is None:
            from ..application.services.search_service import SearchService

            self._search_service = SearchService(
                audio_resolver=self.audio_resolver,
                search_cache=self.search_cache,
            )
        return self._search_service

    @property
    def command_dispatcher(self) -> CommandDispatcher:
        """Get the dispatcher every input surface submits to."""
        if self._command_dispatcher is None:
            from ..application.services.command_dispatcher import CommandDispatcher

            self._command_dispatcher = CommandDispatcher(
                controller=self.playback_controller,
                search_service=self.search_service,
                search_cache=self.search_cache,
                queue_handler=self.get_queue_handler,
                now_playing_handler=self.get_now_playing_handler,
                event_bus=self.event_bus,
                error_message_limit=self.settings.ui.error_message_limit,
            )
        return self._command_dispatcher

    # === Query Handlers ===

    @property
    def get_queue_handler(self) -> GetQueueHandler:
        """Get the get queue query handler."""
        if self._get_queue_handler is None:
            from ..application.queries.get_queue import GetQueueHandler

            self._get_queue_handler = GetQueueHandler(queue_registry=self.queue_registry)
        return self._get_queue_handler

    @property
    def get_now_playing_handler(self) -> GetNowPlayingHandler:
        """Get the now-playing query handler."""
        if self._get_now_playing_handler is None:
            from ..application.queries.get_current import GetNowPlayingHandler

            self._get_now_playing_handler = GetNowPlayingHandler(queue_registry=self.queue_registry)
        return self._get_now_playing_handler

    # === Discord Presentation ===

    @property
    def reply_builder(self) -> ReplyBuilder:
        if self._reply_builder is None:
            from ..infrastructure.discord.services.reply_builder import ReplyBuilder

            self._reply_builder = ReplyBuilder(
                prefix=self.settings.discord.command_prefix,
                ui=self.settings.ui,
            )
        return self._reply_builder

    @property
    def notification_renderer(self) -> NotificationRenderer:
        if self._notification_renderer is None:
            from ..infrastructure.discord.services.notification_renderer import (
                NotificationRenderer,
            )

            self._notification_renderer = NotificationRenderer(
                bot=self.bot,
                event_bus=self.event_bus,
                prefix=self.settings.discord.command_prefix,
                ui=self.settings.ui,
            )
        return self._notification_renderer

    # === Lifecycle ===

    def initialize(self) -> None:
        """Wire the controller to the voice adapter and start notification delivery."""
        _ = self.playback_controller
        self.notification_renderer.start()

    async def shutdown(self) -> None:
        """Stop playback everywhere and detach subscribers."""
        if self._notification_renderer is not None:
            self._notification_renderer.stop()

        if self._playback_controller is not None:
            await self._playback_controller.shutdown()

        if self._event_bus is not None:
            self._event_bus.clear()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
