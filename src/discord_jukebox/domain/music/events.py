"""Notifications published by the playback controller.

Every state transition is published once on the ``EventBus``. Presentation
adapters subscribe to ``Notification`` (or a concrete subclass) and render
the payload the same way whichever input surface caused it.
"""

from __future__ import annotations

from typing import Literal

from discord_jukebox.domain.music.entities import Track
from discord_jukebox.domain.music.value_objects import LoopMode
from discord_jukebox.domain.shared.events import DomainEvent
from discord_jukebox.domain.shared.types import (
    DiscordSnowflake,
    NonEmptyStr,
    NonNegativeInt,
    PositiveInt,
    QueuePositionInt,
    VolumePercent,
)

ErrorKind = Literal["resolution", "playback", "search", "unexpected"]


class Notification(DomainEvent):
    """Base class for all per-guild notifications."""

    guild_id: DiscordSnowflake
    text_channel_id: DiscordSnowflake | None = None


class NowPlaying(Notification):
    event_type: Literal["NowPlaying"] = "NowPlaying"
    track: Track
    remaining_count: NonNegativeInt = 0


class TrackAdded(Notification):
    event_type: Literal["TrackAdded"] = "TrackAdded"
    track: Track
    position: QueuePositionInt


class PlaylistAdded(Notification):
    event_type: Literal["PlaylistAdded"] = "PlaylistAdded"
    name: NonEmptyStr
    count: PositiveInt
    requested_by_name: NonEmptyStr | None = None


class Paused(Notification):
    event_type: Literal["Paused"] = "Paused"


class Resumed(Notification):
    event_type: Literal["Resumed"] = "Resumed"


class Stopped(Notification):
    event_type: Literal["Stopped"] = "Stopped"


class Finished(Notification):
    event_type: Literal["Finished"] = "Finished"


class Shuffled(Notification):
    event_type: Literal["Shuffled"] = "Shuffled"
    count: NonNegativeInt = 0


class VolumeChanged(Notification):
    event_type: Literal["VolumeChanged"] = "VolumeChanged"
    volume: VolumePercent


class LoopModeChanged(Notification):
    event_type: Literal["LoopModeChanged"] = "LoopModeChanged"
    mode: LoopMode


class Errored(Notification):
    event_type: Literal["Errored"] = "Errored"
    kind: ErrorKind
    message: NonEmptyStr


class Disconnected(Notification):
    event_type: Literal["Disconnected"] = "Disconnected"


class EmptyChannel(Notification):
    event_type: Literal["EmptyChannel"] = "EmptyChannel"
