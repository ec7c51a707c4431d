"""Query for retrieving the currently playing track."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from discord_jukebox.domain.music.entities import Track
from discord_jukebox.domain.shared.types import DiscordSnowflake, NonNegativeInt

if TYPE_CHECKING:
    from ...domain.music.repository import QueueRegistry


class GetNowPlayingQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    guild_id: DiscordSnowflake


class NowPlayingInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    guild_id: DiscordSnowflake
    track: Track | None = None
    is_paused: bool = False
    remaining_count: NonNegativeInt = 0

    @property
    def is_playing(self) -> bool:
        return self.track is not None and not self.is_paused


class GetNowPlayingHandler:

    def __init__(self, *, queue_registry: QueueRegistry) -> None:
        self._registry = queue_registry

    async def handle(self, query: GetNowPlayingQuery) -> NowPlayingInfo:
        queue = await self._registry.get(query.guild_id)

        if queue is None:
            return NowPlayingInfo(guild_id=query.guild_id)

        return NowPlayingInfo(
            guild_id=query.guild_id,
            track=queue.current,
            is_paused=queue.paused,
            remaining_count=queue.remaining_count,
        )
