"""
Unit Tests for the Music Domain

Tests for:
- Track / TrackReference / Playlist
- GuildQueue (append, advance, rewind, shuffle, volume)
- QueueDomainService
"""

import random
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from conftest import GUILD_ID, USER_ID, build_track
from discord_jukebox.domain.music.entities import GuildQueue, Playlist, Track, TrackReference
from discord_jukebox.domain.music.services import QueueDomainService
from discord_jukebox.domain.music.value_objects import LoopMode, TrackId
from discord_jukebox.domain.shared.exceptions import (
    BusinessRuleViolationError,
    EmptyQueueError,
    InvalidArgumentError,
    NoHistoryError,
)


def _queue(*names: str, **kwargs) -> GuildQueue:
    queue = GuildQueue(guild_id=GUILD_ID, **kwargs)
    for name in names:
        queue.append(build_track(name))
    return queue


def _titles(tracks) -> list[str]:
    return [t.title for t in tracks]


class TestTrack:
    """Tests for the Track value object."""

    def test_duration_formatted(self):
        assert build_track("a", duration=65).duration_formatted == "1:05"
        assert build_track("a", duration=3725).duration_formatted == "1:02:05"
        assert build_track("a", duration=None).duration_formatted == "Unknown"

    def test_display_title(self):
        assert build_track("a", duration=65).display_title == "Track A [1:05]"
        assert build_track("a", duration=None).display_title == "Track A"

    def test_rejects_non_http_url(self):
        """Should refuse a webpage URL without an http(s) scheme."""
        with pytest.raises(ValidationError):
            Track(id=TrackId("x"), title="X", webpage_url="ftp://example.com/x")

    def test_is_frozen(self, sample_track):
        with pytest.raises(ValidationError):
            sample_track.title = "Changed"

    def test_with_requester(self, sample_track):
        when = datetime(2024, 1, 1, tzinfo=UTC)

        stamped = sample_track.with_requester(USER_ID, "Listener", when)

        assert stamped.requested_by_id == USER_ID
        assert stamped.requested_by_name == "Listener"
        assert stamped.requested_at == when
        assert sample_track.requested_by_id is None

    def test_with_stream_from_keeps_requester(self):
        """Should take the fresh stream but keep who asked for the track."""
        flat = build_track("a", streamable=False, duration=None).with_requester(USER_ID, "Listener")
        fresh = build_track("a", duration=99)

        merged = flat.with_stream_from(fresh)

        assert merged.stream_url == fresh.stream_url
        assert merged.duration_seconds == 99
        assert merged.requested_by_name == "Listener"
        assert merged.is_streamable

    def test_track_id_from_youtube_url(self):
        assert TrackId.from_url("https://youtu.be/dQw4w9WgXcQ").value == "dQw4w9WgXcQ"
        assert TrackId.from_url("https://www.youtube.com/shorts/dQw4w9WgXcQ").value == "dQw4w9WgXcQ"

    def test_track_id_hash_fallback(self):
        """Should hash URLs that carry no YouTube id."""
        track_id = TrackId.from_url("https://soundcloud.com/artist/song")

        assert len(track_id.value) == 16
        assert track_id == TrackId.from_url("https://soundcloud.com/artist/song")

    def test_track_id_rejects_blank(self):
        with pytest.raises(ValueError):
            TrackId("   ")


class TestTrackReferenceAndPlaylist:
    def test_reference_url(self):
        reference = TrackReference(id="dQw4w9WgXcQ", title="Never")

        assert reference.url == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
        assert reference.duration_formatted == "Unknown"

    def test_playlist_requires_tracks(self):
        with pytest.raises(ValidationError):
            Playlist(name="Empty", tracks=[])

    def test_playlist_with_requester_stamps_every_track(self, sample_playlist):
        stamped = sample_playlist.with_requester(USER_ID, "Listener")

        assert {t.requested_by_id for t in stamped.tracks} == {USER_ID}
        assert len({t.requested_at for t in stamped.tracks}) == 1


class TestGuildQueueAppend:
    """Tests for adding tracks to a queue."""

    def test_positions_are_zero_based(self):
        queue = GuildQueue(guild_id=GUILD_ID)

        assert queue.append(build_track("a")) == 0
        assert queue.append(build_track("b")) == 1
        assert queue.current.title == "Track A"
        assert _titles(queue.upcoming) == ["Track B"]
        assert queue.remaining_count == 1

    def test_full_queue_raises(self):
        queue = _queue("a", "b", max_size=2)

        with pytest.raises(BusinessRuleViolationError) as exc_info:
            queue.append(build_track("c"))

        assert exc_info.value.rule == "MAX_QUEUE_SIZE"
        assert "2" in exc_info.value.message

    def test_extend_stops_at_capacity(self):
        """Should add what fits and report the count."""
        queue = _queue("a", max_size=3)

        added = queue.extend([build_track("b"), build_track("c"), build_track("d")])

        assert added == 2
        assert _titles(queue.tracks) == ["Track A", "Track B", "Track C"]


class TestGuildQueueAdvance:
    """Tests for moving through the queue."""

    def test_off_pops_head_into_history(self):
        queue = _queue("a", "b")

        head = queue.advance(skipped=False)

        assert head.title == "Track B"
        assert _titles(queue.history) == ["Track A"]

    def test_off_exhausts(self):
        queue = _queue("a")

        assert queue.advance(skipped=False) is None
        assert queue.is_empty

    def test_track_loop_natural_end_repeats(self):
        queue = _queue("a", "b", loop_mode=LoopMode.TRACK)

        assert queue.advance(skipped=False).title == "Track A"
        assert queue.history == []

    def test_track_loop_skip_advances(self):
        queue = _queue("a", "b", loop_mode=LoopMode.TRACK)

        assert queue.advance(skipped=True).title == "Track B"

    def test_queue_loop_rotates(self):
        queue = _queue("a", "b", "c", loop_mode=LoopMode.QUEUE)

        queue.advance(skipped=True)

        assert _titles(queue.tracks) == ["Track B", "Track C", "Track A"]

    def test_queue_loop_single_track_never_exhausts(self):
        queue = _queue("a", loop_mode=LoopMode.QUEUE)

        assert queue.advance(skipped=False).title == "Track A"
        assert len(queue.tracks) == 1

    def test_advance_clears_pause(self):
        queue = _queue("a", "b", paused=True)

        queue.advance(skipped=True)

        assert queue.paused is False

    def test_history_is_bounded(self):
        queue = _queue("a", "b", "c", "d", history_size=2)

        for _ in range(3):
            queue.advance(skipped=True)

        assert _titles(queue.history) == ["Track B", "Track C"]

    def test_history_disabled(self):
        queue = _queue("a", "b", history_size=0)

        queue.advance(skipped=True)

        assert queue.history == []


class TestGuildQueueRewind:
    def test_rewind_restores_head(self):
        queue = _queue("a", "b")
        queue.advance(skipped=True)

        track = queue.rewind()

        assert track.title == "Track A"
        assert _titles(queue.tracks) == ["Track A", "Track B"]
        assert queue.history == []

    def test_rewind_under_queue_loop_does_not_duplicate(self):
        """Should pull the re-appended copy instead of duplicating it."""
        queue = _queue("a", "b", loop_mode=LoopMode.QUEUE)
        queue.advance(skipped=True)

        queue.rewind()

        assert _titles(queue.tracks) == ["Track A", "Track B"]

    def test_rewind_single_track_queue_loop_replays(self):
        """Should replay the lone looping track without growing the queue."""
        queue = _queue("a", loop_mode=LoopMode.QUEUE)
        head = queue.current
        queue.advance(skipped=False)

        track = queue.rewind()

        assert track is head
        assert queue.tracks == [head]
        assert queue.history == []

    def test_rewind_without_history(self):
        with pytest.raises(NoHistoryError):
            _queue("a").rewind()


class TestGuildQueueMutations:
    def test_shuffle_keeps_head_and_members(self):
        queue = _queue("a", "b", "c", "d", "e")

        moved = queue.shuffle_upcoming(random.Random(3))

        assert moved == 4
        assert queue.current.title == "Track A"
        assert sorted(_titles(queue.upcoming)) == ["Track B", "Track C", "Track D", "Track E"]

    def test_shuffle_too_few(self):
        with pytest.raises(EmptyQueueError):
            _queue("a", "b").shuffle_upcoming()

    def test_toggle_pause(self):
        queue = _queue("a")

        assert queue.toggle_pause() is True
        assert queue.toggle_pause() is False

    def test_cycle_loop_mode(self):
        queue = _queue("a")

        assert [queue.cycle_loop_mode() for _ in range(3)] == [
            LoopMode.TRACK,
            LoopMode.QUEUE,
            LoopMode.OFF,
        ]

    @pytest.mark.parametrize("volume", [0, 55, 100])
    def test_set_volume_bounds(self, volume):
        queue = _queue("a")

        assert queue.set_volume(volume) == volume
        assert queue.volume == volume

    @pytest.mark.parametrize("volume", [-5, 101])
    def test_set_volume_rejects(self, volume):
        queue = _queue("a")

        with pytest.raises(InvalidArgumentError):
            queue.set_volume(volume)
        assert queue.volume == 100

    def test_clear(self):
        queue = _queue("a", "b", paused=True)

        assert queue.clear() == 2
        assert queue.is_empty
        assert queue.paused is False


class TestQueueDomainService:
    def test_total_duration(self):
        queue = _queue("a", "b")

        assert QueueDomainService.total_duration(queue.tracks) == 360
        assert QueueDomainService.format_total_duration(queue) == "6m 0s"

    def test_total_duration_unknown(self):
        queue = _queue("a")
        queue.append(build_track("live", duration=None))

        assert QueueDomainService.total_duration(queue.tracks) is None
        assert QueueDomainService.format_total_duration(queue) == "Unknown"

    def test_format_hours(self):
        queue = GuildQueue(guild_id=GUILD_ID)
        queue.append(build_track("long", duration=3661))

        assert QueueDomainService.format_total_duration(queue) == "1h 1m 1s"

    @pytest.mark.parametrize(
        ("names", "mode", "expected"),
        [
            (("a",), LoopMode.OFF, False),
            (("a", "b"), LoopMode.OFF, True),
            (("a",), LoopMode.TRACK, True),
            (("a",), LoopMode.QUEUE, True),
        ],
    )
    def test_will_continue(self, names, mode, expected):
        assert QueueDomainService.will_continue(_queue(*names, loop_mode=mode)) is expected
