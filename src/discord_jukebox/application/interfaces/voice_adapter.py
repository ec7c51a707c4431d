"""Port interface for Discord voice operations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from discord_jukebox.domain.shared.types import DiscordSnowflake, NonNegativeInt, VolumePercent

if TYPE_CHECKING:
    from ...domain.music.entities import Track

TrackEndCallback = Callable[[DiscordSnowflake, NonNegativeInt], Awaitable[None]]


class VoiceAdapter(ABC):
    """Interface for Discord voice channel operations."""

    @abstractmethod
    def is_joinable(self, guild_id: DiscordSnowflake, channel_id: DiscordSnowflake | None) -> bool:
        """Whether the bot may connect to and speak in *channel_id*."""
        ...

    @abstractmethod
    def current_members_empty(self, guild_id: DiscordSnowflake) -> bool:
        """Whether the bot's voice channel has no listeners besides bots."""
        ...

    @abstractmethod
    async def ensure_connected(self, guild_id: DiscordSnowflake, channel_id: DiscordSnowflake) -> bool:
        """Ensure bot is connected to the specified channel, connecting or moving as needed."""
        ...

    @abstractmethod
    async def disconnect(self, guild_id: DiscordSnowflake) -> bool:
        """Disconnect from voice in a guild."""
        ...

    @abstractmethod
    async def play(
        self,
        guild_id: DiscordSnowflake,
        track: "Track",
        *,
        volume: VolumePercent,
        playback_id: NonNegativeInt,
    ) -> bool:
        """Start playing a track; the end callback receives *playback_id*."""
        ...

    @abstractmethod
    async def stop(self, guild_id: DiscordSnowflake) -> bool:
        """Stop current playback without firing the end callback."""
        ...

    @abstractmethod
    async def pause(self, guild_id: DiscordSnowflake) -> bool:
        ...

    @abstractmethod
    async def resume(self, guild_id: DiscordSnowflake) -> bool:
        ...

    @abstractmethod
    async def set_volume(self, guild_id: DiscordSnowflake, volume: VolumePercent) -> bool:
        ...

    @abstractmethod
    def is_connected(self, guild_id: DiscordSnowflake) -> bool:
        ...

    @abstractmethod
    def get_current_channel_id(self, guild_id: DiscordSnowflake) -> DiscordSnowflake | None:
        """Get the current voice channel ID, or None if not connected."""
        ...

    @abstractmethod
    def set_on_track_end_callback(self, callback: TrackEndCallback) -> None:
        """Set callback for when a track ends on its own."""
        ...
