"""Embed builders shared by the cogs, the control panel and the notification renderer."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Final

import discord

from discord_jukebox.domain.shared.constants import UIConstants
from discord_jukebox.domain.shared.messages import DiscordUIMessages
from discord_jukebox.utils.reply import truncate

if TYPE_CHECKING:
    from ....application.queries.get_queue import QueueInfo
    from ....domain.music.entities import Track, TrackReference

# (slash usage, description) pairs shown by the help command
HELP_ENTRIES: Final[tuple[tuple[str, str], ...]] = (
    ("play <song/URL>", "Play a song or add to queue"),
    ("search <query>", "Search YouTube for songs"),
    ("skip", "Skip the current song"),
    ("previous", "Play the previous song"),
    ("pause", "Pause/resume playback"),
    ("stop", "Stop and clear queue"),
    ("queue", "Show the current queue"),
    ("nowplaying", "Show current song"),
    ("loop", "Cycle loop modes"),
    ("shuffle", "Shuffle the queue"),
    ("volume <0-100>", "Set volume"),
    ("help", "Show this message"),
)


def format_requester(track: Track) -> str:
    if track.requested_by_id:
        return f"<@{track.requested_by_id}>"
    if track.requested_by_name:
        return track.requested_by_name
    return DiscordUIMessages.UNKNOWN


def format_track_link(track: Track) -> str:
    title = truncate(track.title, UIConstants.TITLE_TRUNCATION)
    return f"[{title}]({track.webpage_url})"


def build_now_playing_embed(
    track: Track,
    remaining_count: int,
    *,
    color: int = UIConstants.EMBED_COLOR,
) -> discord.Embed:
    embed = discord.Embed(
        title=DiscordUIMessages.EMBED_NOW_PLAYING,
        description=format_track_link(track),
        color=color,
    )
    embed.add_field(name=DiscordUIMessages.FIELD_DURATION, value=track.duration_formatted, inline=True)
    embed.add_field(name=DiscordUIMessages.FIELD_REQUESTED_BY, value=format_requester(track), inline=True)
    if track.thumbnail_url:
        embed.set_thumbnail(url=track.thumbnail_url)
    embed.set_footer(text=DiscordUIMessages.EMBED_REMAINING_FOOTER.format(count=remaining_count))
    return embed


def build_queue_embed(
    info: QueueInfo,
    *,
    color: int = UIConstants.ACCENT_COLOR,
    page_size: int = UIConstants.QUEUE_PAGE_SIZE,
) -> discord.Embed:
    embed = discord.Embed(title=DiscordUIMessages.EMBED_QUEUE, color=color)

    if info.current_track is not None:
        current = info.current_track
        embed.add_field(
            name=DiscordUIMessages.EMBED_NOW_PLAYING,
            value=f"{format_track_link(current)} • {current.duration_formatted}",
            inline=False,
        )

    if info.upcoming:
        shown = info.upcoming[:page_size]
        lines = [
            f"**{i}.** {format_track_link(track)} • {track.duration_formatted}"
            for i, track in enumerate(shown, start=1)
        ]
        hidden = len(info.upcoming) - len(shown)
        if hidden > 0:
            lines.append(DiscordUIMessages.EMBED_QUEUE_MORE.format(count=hidden))
        embed.add_field(
            name=DiscordUIMessages.EMBED_QUEUE_UP_NEXT.format(count=len(info.upcoming)),
            value="\n".join(lines),
            inline=False,
        )

    embed.add_field(name=DiscordUIMessages.FIELD_LOOP, value=info.loop_mode.label, inline=True)
    embed.add_field(name=DiscordUIMessages.FIELD_VOLUME, value=f"{info.volume}%", inline=True)
    embed.set_footer(
        text=DiscordUIMessages.EMBED_QUEUE_TOTAL.format(duration=info.total_duration_formatted)
    )
    return embed


def build_compact_queue_embed(
    info: QueueInfo,
    *,
    color: int = UIConstants.ACCENT_COLOR,
    page_size: int = UIConstants.QUEUE_PAGE_SIZE,
) -> discord.Embed:
    """Short upcoming-only listing used by the control panel's queue button."""
    shown = info.upcoming[:page_size]
    if shown:
        description = "\n".join(
            f"**{i}.** {truncate(track.title, UIConstants.TITLE_TRUNCATION)} • {track.duration_formatted}"
            for i, track in enumerate(shown, start=1)
        )
    else:
        description = DiscordUIMessages.STATE_NO_UPCOMING
    return discord.Embed(title=DiscordUIMessages.BUTTON_QUEUE, description=description, color=color)


def build_search_embed(
    query: str,
    references: Sequence[TrackReference],
    *,
    prefix: str,
    color: int = UIConstants.EMBED_COLOR,
) -> discord.Embed:
    lines = []
    for i, ref in enumerate(references, start=1):
        title = truncate(ref.title, UIConstants.TITLE_TRUNCATION)
        channel = truncate(ref.channel or DiscordUIMessages.UNKNOWN, UIConstants.CHANNEL_TRUNCATION)
        lines.append(f"**{i}.** [{title}]({ref.url})\n└ {channel} • {ref.duration_formatted}")

    embed = discord.Embed(
        title=DiscordUIMessages.EMBED_SEARCH_RESULTS.format(query=truncate(query, 200)),
        description="\n\n".join(lines),
        color=color,
    )
    embed.set_footer(
        text=DiscordUIMessages.EMBED_SEARCH_FOOTER.format(prefix=prefix, count=len(references))
    )
    return embed


def build_help_embed(*, prefix: str, color: int = UIConstants.ACCENT_COLOR) -> discord.Embed:
    embed = discord.Embed(
        title=DiscordUIMessages.EMBED_HELP,
        description=DiscordUIMessages.EMBED_HELP_DESCRIPTION.format(prefix=prefix),
        color=color,
    )
    for usage, description in HELP_ENTRIES:
        embed.add_field(name=f"`/{usage}`", value=description, inline=True)
    return embed
