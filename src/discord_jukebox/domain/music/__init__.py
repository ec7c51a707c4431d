"""
Music Bounded Context

Domain logic for guild queues, tracks, search results and playback notifications.
"""

from discord_jukebox.domain.music.entities import GuildQueue, Playlist, Track, TrackReference
from discord_jukebox.domain.music.events import (
    Disconnected,
    EmptyChannel,
    Errored,
    Finished,
    LoopModeChanged,
    Notification,
    NowPlaying,
    Paused,
    PlaylistAdded,
    Resumed,
    Shuffled,
    Stopped,
    TrackAdded,
    VolumeChanged,
)
from discord_jukebox.domain.music.repository import QueueRegistry, SearchResultCache
from discord_jukebox.domain.music.services import QueueDomainService
from discord_jukebox.domain.music.value_objects import LoopMode, PlayTarget, TrackId

__all__ = [
    # Entities
    "Track",
    "TrackReference",
    "Playlist",
    "GuildQueue",
    # Value Objects
    "TrackId",
    "LoopMode",
    "PlayTarget",
    # Notifications
    "Notification",
    "NowPlaying",
    "TrackAdded",
    "PlaylistAdded",
    "Paused",
    "Resumed",
    "Stopped",
    "Finished",
    "Shuffled",
    "VolumeChanged",
    "LoopModeChanged",
    "Errored",
    "Disconnected",
    "EmptyChannel",
    # Repository
    "QueueRegistry",
    "SearchResultCache",
    # Services
    "QueueDomainService",
]
