"""Posts controller notifications to the guild's text channel."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from discord_jukebox.domain.music.events import (
    Disconnected,
    EmptyChannel,
    Errored,
    Finished,
    Notification,
    NowPlaying,
    PlaylistAdded,
    TrackAdded,
)
from discord_jukebox.domain.shared.messages import DiscordUIMessages, LogTemplates
from discord_jukebox.utils.reply import summarize_error, truncate

from ..views.control_panel_view import ControlPanelView
from .embeds import build_now_playing_embed

if TYPE_CHECKING:
    from ....config.settings import UISettings
    from ....domain.shared.events import EventBus

logger = logging.getLogger(__name__)


class NotificationRenderer:
    """Renders every notification the same way, whichever surface caused it.

    Paused, Resumed, Stopped, Shuffled, VolumeChanged and LoopModeChanged are
    acknowledged by the command reply and are not posted again here.
    """

    def __init__(
        self,
        *,
        bot: discord.Client,
        event_bus: EventBus,
        prefix: str,
        ui: UISettings,
    ) -> None:
        self._bot = bot
        self._bus = event_bus
        self._prefix = prefix
        self._ui = ui
        self._started = False

    def start(self) -> None:
        if self._started:
            return
        self._bus.subscribe(Notification, self.on_notification)
        self._started = True

    def stop(self) -> None:
        if not self._started:
            return
        self._bus.unsubscribe(Notification, self.on_notification)
        self._started = False

    async def on_notification(self, notification: Notification) -> None:
        payload = self.render(notification)
        if payload is None:
            return

        channel_id = notification.text_channel_id
        channel = self._bot.get_channel(channel_id) if channel_id is not None else None
        if not isinstance(channel, discord.abc.Messageable):
            logger.debug(LogTemplates.NOTIFICATION_NO_CHANNEL, notification.event_type, notification.guild_id)
            return

        content, embed, view = payload
        try:
            if embed is not None and view is not None:
                await channel.send(content=content, embed=embed, view=view)
            elif embed is not None:
                await channel.send(content=content, embed=embed)
            else:
                await channel.send(content=content)
        except discord.HTTPException as e:
            logger.warning(LogTemplates.NOTIFICATION_SEND_FAILED, notification.event_type, channel_id, e)

    def render(
        self, notification: Notification
    ) -> tuple[str | None, discord.Embed | None, discord.ui.View | None] | None:
        match notification:
            case NowPlaying(track=track, remaining_count=remaining):
                embed = build_now_playing_embed(track, remaining, color=self._ui.embed_color)
                return None, embed, ControlPanelView()
            case TrackAdded(track=track, position=position):
                title = truncate(track.title, 200)
                return DiscordUIMessages.TRACK_ADDED.format(title=title, position=position), None, None
            case PlaylistAdded(name=name, count=count):
                text = DiscordUIMessages.PLAYLIST_ADDED.format(name=truncate(name, 200), count=count)
                return text, None, None
            case Finished():
                return DiscordUIMessages.QUEUE_FINISHED.format(prefix=self._prefix), None, None
            case Errored(message=message):
                short = summarize_error(message, self._ui.error_message_limit)
                return DiscordUIMessages.ERROR_OCCURRED.format(message=short), None, None
            case Disconnected():
                return DiscordUIMessages.DISCONNECTED, None, None
            case EmptyChannel():
                return DiscordUIMessages.CHANNEL_EMPTY, None, None
            case _:
                return None
