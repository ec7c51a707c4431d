"""Query for retrieving the current queue."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from discord_jukebox.domain.music.entities import Track
from discord_jukebox.domain.music.services import QueueDomainService
from discord_jukebox.domain.music.value_objects import LoopMode
from discord_jukebox.domain.shared.constants import LimitConstants
from discord_jukebox.domain.shared.types import DiscordSnowflake, NonNegativeInt, VolumePercent

if TYPE_CHECKING:
    from ...domain.music.repository import QueueRegistry


class GetQueueQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    guild_id: DiscordSnowflake


class QueueInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    guild_id: DiscordSnowflake
    current_track: Track | None = None
    upcoming: list[Track] = Field(default_factory=list)
    loop_mode: LoopMode = LoopMode.OFF
    volume: VolumePercent = LimitConstants.DEFAULT_VOLUME
    is_paused: bool = False
    total_duration: NonNegativeInt | None = None
    total_duration_formatted: str = "0s"

    @property
    def length(self) -> int:
        return len(self.upcoming) + (1 if self.current_track else 0)

    @property
    def is_empty(self) -> bool:
        return self.current_track is None


class GetQueueHandler:

    def __init__(self, *, queue_registry: QueueRegistry) -> None:
        self._registry = queue_registry

    async def handle(self, query: GetQueueQuery) -> QueueInfo:
        queue = await self._registry.get(query.guild_id)

        if queue is None or queue.is_empty:
            return QueueInfo(guild_id=query.guild_id, total_duration=0)

        return QueueInfo(
            guild_id=query.guild_id,
            current_track=queue.current,
            upcoming=list(queue.upcoming),
            loop_mode=queue.loop_mode,
            volume=queue.volume,
            is_paused=queue.paused,
            total_duration=QueueDomainService.total_duration(queue.tracks),
            total_duration_formatted=QueueDomainService.format_total_duration(queue),
        )
