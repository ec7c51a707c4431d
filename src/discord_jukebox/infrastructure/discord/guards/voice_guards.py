"""Reusable guard and context helpers for Discord input surfaces.

These are free functions that accept explicit dependencies rather than relying
on a specific cog instance, making them usable from any cog or view.
"""

from __future__ import annotations

import discord

from discord_jukebox.application.commands.control_command import RequesterContext
from discord_jukebox.domain.shared.messages import DiscordUIMessages


async def send_ephemeral(interaction: discord.Interaction, message: str) -> None:
    """Send an ephemeral message, handling both fresh and already-responded interactions."""
    if interaction.response.is_done():
        await interaction.followup.send(message, ephemeral=True)
    else:
        await interaction.response.send_message(message, ephemeral=True)


async def get_member(interaction: discord.Interaction) -> discord.Member | None:
    """Validate that the interaction comes from a guild member. Returns None with error on failure."""
    if not interaction.guild:
        await send_ephemeral(interaction, DiscordUIMessages.STATE_SERVER_ONLY)
        return None

    user = interaction.user
    if not isinstance(user, discord.Member):
        await send_ephemeral(interaction, DiscordUIMessages.STATE_SERVER_ONLY)
        return None

    return user


def voice_channel_id(member: discord.Member | discord.User | discord.abc.User) -> int | None:
    voice = getattr(member, "voice", None)
    if voice is None or voice.channel is None:
        return None
    return voice.channel.id


def build_requester(
    user: discord.Member | discord.User | discord.abc.User,
    text_channel_id: int | None,
) -> RequesterContext:
    """Snapshot who asked and which channels they were in at the time."""
    name = getattr(user, "display_name", None) or user.name
    return RequesterContext(
        user_id=user.id,
        user_name=name,
        text_channel_id=text_channel_id,
        voice_channel_id=voice_channel_id(user),
    )
