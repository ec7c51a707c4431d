"""Turn a ``CommandResult`` into the reply the invoking surface should show."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import discord

from discord_jukebox.application.commands.control_command import CommandResult, Operation
from discord_jukebox.domain.music.events import Paused, Resumed
from discord_jukebox.domain.shared.enums import InputSurface
from discord_jukebox.domain.shared.messages import DiscordUIMessages

from .embeds import (
    build_compact_queue_embed,
    build_help_embed,
    build_now_playing_embed,
    build_queue_embed,
    build_search_embed,
)

if TYPE_CHECKING:
    from ....config.settings import UISettings

_ACKNOWLEDGEMENTS: dict[Operation, str] = {
    Operation.SKIP: DiscordUIMessages.ACTION_SKIPPED,
    Operation.PREVIOUS: DiscordUIMessages.ACTION_PREVIOUS,
    Operation.STOP: DiscordUIMessages.ACTION_STOPPED,
    Operation.SHUFFLE: DiscordUIMessages.ACTION_SHUFFLED,
}


@dataclass(frozen=True, slots=True)
class Reply:
    content: str | None = None
    embed: discord.Embed | None = None

    @property
    def is_empty(self) -> bool:
        return self.content is None and self.embed is None


class ReplyBuilder:
    """Renders command outcomes with the configured prefix and colors."""

    def __init__(self, *, prefix: str, ui: UISettings) -> None:
        self._prefix = prefix
        self._ui = ui

    def build(
        self,
        result: CommandResult,
        *,
        surface: InputSurface = InputSurface.TEXT,
        query: str = "",
    ) -> Reply:
        if not result.is_success:
            return Reply(content=self.error_text(result))

        match result.operation:
            case Operation.PLAY:
                # Announced by the notification renderer.
                return Reply()
            case Operation.SEARCH:
                if not result.references:
                    return Reply(content=DiscordUIMessages.ERROR_NO_SEARCH_RESULTS)
                return Reply(
                    embed=build_search_embed(
                        query, result.references, prefix=self._prefix, color=self._ui.embed_color
                    )
                )
            case Operation.PAUSE:
                if isinstance(result.notification, Resumed):
                    return Reply(content=DiscordUIMessages.ACTION_RESUMED)
                if isinstance(result.notification, Paused):
                    return Reply(content=DiscordUIMessages.ACTION_PAUSED)
                return Reply()
            case Operation.VOLUME:
                volume = getattr(result.notification, "volume", None)
                return Reply(content=DiscordUIMessages.ACTION_VOLUME_SET.format(volume=volume))
            case Operation.LOOP:
                mode = getattr(result.notification, "mode", None)
                label = mode.label if mode is not None else DiscordUIMessages.UNKNOWN
                return Reply(content=DiscordUIMessages.ACTION_LOOP_MODE_CHANGED.format(mode=label))
            case Operation.QUEUE:
                return self._queue_reply(result, surface)
            case Operation.NOW_PLAYING:
                info = result.now_playing
                if info is None or info.track is None:
                    return Reply()
                return Reply(
                    embed=build_now_playing_embed(
                        info.track, info.remaining_count, color=self._ui.embed_color
                    )
                )
            case Operation.HELP:
                return Reply(embed=build_help_embed(prefix=self._prefix, color=self._ui.accent_color))
            case operation:
                return Reply(content=_ACKNOWLEDGEMENTS.get(operation))

    def _queue_reply(self, result: CommandResult, surface: InputSurface) -> Reply:
        info = result.queue
        if info is None or info.is_empty:
            if surface is InputSurface.BUTTON:
                return Reply(content=DiscordUIMessages.STATE_QUEUE_EMPTY_SHORT)
            return Reply(content=DiscordUIMessages.STATE_QUEUE_EMPTY)

        if surface is InputSurface.BUTTON:
            return Reply(
                embed=build_compact_queue_embed(
                    info, color=self._ui.accent_color, page_size=self._ui.queue_page_size
                )
            )
        return Reply(
            embed=build_queue_embed(info, color=self._ui.accent_color, page_size=self._ui.queue_page_size)
        )

    def error_text(self, result: CommandResult) -> str:
        match result.error_code:
            case "NO_RECENT_SEARCH":
                message = DiscordUIMessages.ERROR_NO_RECENT_SEARCH.format(prefix=self._prefix)
            case "UNEXPECTED":
                return DiscordUIMessages.ERROR_OCCURRED.format(message=result.message)
            case _:
                message = result.message
        return DiscordUIMessages.ERROR_PREFIX.format(message=message)

    def loading_text(self, query: str) -> str:
        return DiscordUIMessages.ACTION_LOADING.format(query=query)
