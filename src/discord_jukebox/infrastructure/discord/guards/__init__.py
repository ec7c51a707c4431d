"""Guard and requester-context helpers for Discord input surfaces."""

from discord_jukebox.infrastructure.discord.guards.voice_guards import (
    build_requester,
    get_member,
    send_ephemeral,
    voice_channel_id,
)

__all__ = [
    "build_requester",
    "get_member",
    "send_ephemeral",
    "voice_channel_id",
]
