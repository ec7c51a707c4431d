"""In-memory implementation of the queue registry."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from discord_jukebox.domain.music.entities import GuildQueue
from discord_jukebox.domain.music.repository import QueueRegistry
from discord_jukebox.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


class InMemoryQueueRegistry(QueueRegistry):
    def __init__(self) -> None:
        self._queues: dict[int, GuildQueue] = {}
        self._lock = asyncio.Lock()

    async def get(self, guild_id: int) -> GuildQueue | None:
        return self._queues.get(guild_id)

    async def get_or_create(
        self, guild_id: int, factory: Callable[[int], GuildQueue]
    ) -> tuple[GuildQueue, bool]:
        async with self._lock:
            existing = self._queues.get(guild_id)
            if existing is not None:
                return existing, False

            queue = factory(guild_id)
            self._queues[guild_id] = queue
            logger.info(LogTemplates.QUEUE_CREATED, guild_id)
            return queue, True

    async def remove(self, guild_id: int, expected: GuildQueue | None = None) -> bool:
        async with self._lock:
            current = self._queues.get(guild_id)
            if current is None:
                return False
            if expected is not None and current is not expected:
                return False
            del self._queues[guild_id]
            return True

    async def guild_ids(self) -> list[int]:
        return list(self._queues)

    def __len__(self) -> int:
        return len(self._queues)
