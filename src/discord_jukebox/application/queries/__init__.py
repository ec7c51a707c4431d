"""
Application Queries (CQRS Read Side)

Query objects and handlers for read operations.
Queries do not modify state, only retrieve data.
"""

from discord_jukebox.application.queries.get_current import (
    GetNowPlayingHandler,
    GetNowPlayingQuery,
    NowPlayingInfo,
)
from discord_jukebox.application.queries.get_queue import GetQueueHandler, GetQueueQuery, QueueInfo

__all__ = [
    "GetQueueQuery",
    "GetQueueHandler",
    "QueueInfo",
    "GetNowPlayingQuery",
    "GetNowPlayingHandler",
    "NowPlayingInfo",
]
