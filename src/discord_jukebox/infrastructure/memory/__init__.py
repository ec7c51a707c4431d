"""In-memory stores for process-lifetime state."""

from discord_jukebox.infrastructure.memory.queue_registry import InMemoryQueueRegistry
from discord_jukebox.infrastructure.memory.search_cache import InMemorySearchResultCache

__all__ = ["InMemoryQueueRegistry", "InMemorySearchResultCache"]
