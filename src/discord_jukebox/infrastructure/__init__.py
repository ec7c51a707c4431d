"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Discord (bot, cogs, views, voice adapter, message rendering)
- Audio (yt-dlp resolution, FFmpeg sources)
- Memory (per-guild queue registry, search result cache)
"""

from discord_jukebox.infrastructure.discord.adapters.voice_adapter import DiscordVoiceAdapter
from discord_jukebox.infrastructure.discord.bot import create_bot
from discord_jukebox.infrastructure.memory.queue_registry import InMemoryQueueRegistry

__all__ = [
    "create_bot",
    "DiscordVoiceAdapter",
    "InMemoryQueueRegistry",
]
