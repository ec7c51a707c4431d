"""Core domain entities for the music bounded context."""

from __future__ import annotations

import random
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from discord_jukebox.domain.music.value_objects import LoopMode, TrackIdField
from discord_jukebox.domain.shared.constants import LimitConstants
from discord_jukebox.domain.shared.datetime_utils import utcnow
from discord_jukebox.domain.shared.exceptions import (
    BusinessRuleViolationError,
    EmptyQueueError,
    InvalidArgumentError,
    NoHistoryError,
)
from discord_jukebox.domain.shared.messages import ErrorMessages
from discord_jukebox.domain.shared.types import (
    DiscordSnowflake,
    DurationSeconds,
    HttpUrlStr,
    MaxQueueSize,
    NonEmptyStr,
    NonNegativeInt,
    TrackTitleStr,
    UtcDatetimeField,
    VolumePercent,
)
from discord_jukebox.domain.shared.validators import is_valid_volume


def _format_seconds(seconds: int | None) -> str:
    if seconds is None:
        return "Unknown"

    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


class Track(BaseModel):
    """Immutable value object representing a playable track."""

    model_config = ConfigDict(frozen=True, strict=True)

    id: TrackIdField
    title: TrackTitleStr
    webpage_url: HttpUrlStr
    stream_url: HttpUrlStr | None = None
    duration_seconds: DurationSeconds | None = None
    thumbnail_url: HttpUrlStr | None = None
    channel: NonEmptyStr | None = None

    # Request metadata (set when queued)
    requested_by_id: DiscordSnowflake | None = None
    requested_by_name: NonEmptyStr | None = None
    requested_at: UtcDatetimeField | None = None

    @property
    def duration_formatted(self) -> str:
        """Format duration as MM:SS or HH:MM:SS."""
        return _format_seconds(self.duration_seconds)

    @property
    def display_title(self) -> str:
        """Get display title with duration if available."""
        if self.duration_seconds:
            return f"{self.title} [{self.duration_formatted}]"
        return self.title

    @property
    def is_streamable(self) -> bool:
        return self.stream_url is not None

    def with_requester(
        self, user_id: DiscordSnowflake, user_name: NonEmptyStr, requested_at: datetime | None = None
    ) -> Track:
        """Return a copy of this track with requester metadata populated."""
        return self.model_copy(
            update={
                "requested_by_id": user_id,
                "requested_by_name": user_name,
                "requested_at": requested_at or utcnow(),
            }
        )

    def with_stream_from(self, resolved: Track) -> Track:
        """Merge a freshly resolved copy, keeping identity and requester metadata."""
        return self.model_copy(
            update={
                "title": resolved.title or self.title,
                "stream_url": resolved.stream_url,
                "duration_seconds": resolved.duration_seconds or self.duration_seconds,
                "thumbnail_url": resolved.thumbnail_url or self.thumbnail_url,
                "channel": resolved.channel or self.channel,
            }
        )


class TrackReference(BaseModel):
    """Unresolved pointer to a search hit; becomes a Track only when played."""

    model_config = ConfigDict(frozen=True)

    id: NonEmptyStr
    title: NonEmptyStr
    channel: NonEmptyStr | None = None
    duration_seconds: DurationSeconds | None = None

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.id}"

    @property
    def duration_formatted(self) -> str:
        return _format_seconds(self.duration_seconds)


class Playlist(BaseModel):
    """A resolved playlist: a name plus its ordered tracks."""

    model_config = ConfigDict(frozen=True, strict=True)

    name: NonEmptyStr
    url: HttpUrlStr | None = None
    tracks: list[Track] = Field(min_length=1)

    def with_requester(self, user_id: DiscordSnowflake, user_name: NonEmptyStr) -> Playlist:
        requested_at = utcnow()
        return self.model_copy(
            update={
                "tracks": [t.with_requester(user_id, user_name, requested_at) for t in self.tracks]
            }
        )


class GuildQueue(BaseModel):
    """Aggregate root holding one guild's playback state.

    ``tracks[0]`` is the playing track; the rest are upcoming in insertion
    order. A queue with no tracks has no reason to exist and is removed from
    the registry by the controller.
    """

    model_config = ConfigDict(strict=True)

    guild_id: DiscordSnowflake
    tracks: list[Track] = Field(default_factory=list)
    history: list[Track] = Field(default_factory=list)
    loop_mode: LoopMode = LoopMode.OFF
    volume: VolumePercent = LimitConstants.DEFAULT_VOLUME
    paused: bool = False

    # Transport back-references (owned by the chat layer)
    text_channel_id: DiscordSnowflake | None = None
    voice_channel_id: DiscordSnowflake | None = None

    # Id of the playback handed to the audio engine; end callbacks carrying another id are stale
    playback_id: NonNegativeInt = 0

    max_size: MaxQueueSize = LimitConstants.MAX_QUEUE_SIZE
    history_size: NonNegativeInt = LimitConstants.HISTORY_SIZE
    created_at: UtcDatetimeField = Field(default_factory=utcnow)

    @property
    def current(self) -> Track | None:
        return self.tracks[0] if self.tracks else None

    @property
    def upcoming(self) -> list[Track]:
        return self.tracks[1:]

    @property
    def remaining_count(self) -> int:
        """Tracks left after the playing one."""
        return max(0, len(self.tracks) - 1)

    @property
    def is_empty(self) -> bool:
        return not self.tracks

    @property
    def can_add(self) -> bool:
        return len(self.tracks) < self.max_size

    def append(self, track: Track) -> int:
        """Add a track to the end and return its zero-based position."""
        if not self.can_add:
            raise BusinessRuleViolationError(
                rule="MAX_QUEUE_SIZE",
                message=ErrorMessages.QUEUE_FULL.format(max_size=self.max_size),
            )
        self.tracks.append(track)
        return len(self.tracks) - 1

    def extend(self, tracks: list[Track]) -> int:
        """Append as many tracks as fit and return how many were added."""
        added = 0
        for track in tracks:
            if not self.can_add:
                break
            self.tracks.append(track)
            added += 1
        return added

    def advance(self, *, skipped: bool) -> Track | None:
        """Move past the playing track and return the new head (None when exhausted).

        Track loop keeps the head only for natural completion; queue loop
        rotates the finished track to the back.
        """
        if not self.tracks:
            return None

        if not skipped and self.loop_mode is LoopMode.TRACK:
            return self.tracks[0]

        finished = self.tracks.pop(0)
        self._remember(finished)
        if self.loop_mode is LoopMode.QUEUE:
            self.tracks.append(finished)

        self.paused = False
        return self.current

    def rewind(self) -> Track:
        """Bring back the most recently finished track as the head.

        Under queue loop the finished track was rotated to the back, so that
        exact object is moved forward instead of copied. When it already sits
        at the head (a single-track loop) the rewind is a replay.
        """
        if not self.history:
            raise NoHistoryError()

        track = self.history.pop()
        if self.loop_mode is LoopMode.QUEUE:
            for index in range(len(self.tracks) - 1, -1, -1):
                if self.tracks[index] is track:
                    del self.tracks[index]
                    break

        self.tracks.insert(0, track)
        self.paused = False
        return track

    def shuffle_upcoming(self, rng: random.Random | None = None) -> int:
        """Shuffle everything after the head and return how many tracks moved."""
        upcoming = self.tracks[1:]
        if len(upcoming) < 2:
            raise EmptyQueueError(ErrorMessages.NOT_ENOUGH_TO_SHUFFLE)

        (rng or random).shuffle(upcoming)
        self.tracks[1:] = upcoming
        return len(upcoming)

    def toggle_pause(self) -> bool:
        """Flip the paused flag and return the new value."""
        self.paused = not self.paused
        return self.paused

    def cycle_loop_mode(self) -> LoopMode:
        """Cycle loop mode and return the new mode."""
        self.loop_mode = self.loop_mode.next_mode()
        return self.loop_mode

    def set_volume(self, volume: int) -> int:
        if not is_valid_volume(volume):
            raise InvalidArgumentError(ErrorMessages.VOLUME_OUT_OF_RANGE, field="volume")
        self.volume = volume
        return volume

    def clear(self) -> int:
        """Drop every track and return how many were removed."""
        count = len(self.tracks)
        self.tracks.clear()
        self.paused = False
        return count

    def _remember(self, track: Track) -> None:
        if self.history_size == 0:
            return
        self.history.append(track)
        overflow = len(self.history) - self.history_size
        if overflow > 0:
            del self.history[:overflow]
