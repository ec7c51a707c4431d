from unittest.mock import AsyncMock, MagicMock

import pytest

from discord_jukebox.application.commands.control_command import RequesterContext
from discord_jukebox.domain.music.entities import Playlist, Track, TrackReference
from discord_jukebox.domain.music.events import Notification
from discord_jukebox.domain.music.value_objects import TrackId
from discord_jukebox.domain.shared.events import EventBus

GUILD_ID = 111111111111111111
TEXT_CHANNEL_ID = 222222222222222222
VOICE_CHANNEL_ID = 333333333333333333
USER_ID = 444444444444444444


# ============================================================================
# Domain Entity Fixtures
# ============================================================================


def build_track(name: str = "a", *, duration: int | None = 180, streamable: bool = True) -> Track:
    """Build a track whose id, title and URLs are derived from *name*."""
    return Track(
        id=TrackId(f"id-{name}"),
        title=f"Track {name.upper()}",
        webpage_url=f"https://www.youtube.com/watch?v={name}",
        stream_url=f"https://stream.example/{name}" if streamable else None,
        duration_seconds=duration,
        thumbnail_url=f"https://img.example/{name}.jpg",
        channel="Some Channel",
    )


def build_reference(video_id: str, title: str = "Result") -> TrackReference:
    return TrackReference(id=video_id, title=title, channel="Uploader", duration_seconds=200)


@pytest.fixture
def make_track():
    """Factory for tracks named after a short key."""
    return build_track


@pytest.fixture
def make_reference():
    return build_reference


@pytest.fixture
def sample_track():
    return build_track("a")


@pytest.fixture
def sample_playlist():
    return Playlist(
        name="Road Trip",
        url="https://www.youtube.com/playlist?list=PL123",
        tracks=[build_track("p1"), build_track("p2"), build_track("p3")],
    )


@pytest.fixture
def requester():
    """A user sitting in a voice channel."""
    return RequesterContext(
        user_id=USER_ID,
        user_name="Listener",
        text_channel_id=TEXT_CHANNEL_ID,
        voice_channel_id=VOICE_CHANNEL_ID,
    )


@pytest.fixture
def requester_outside_voice():
    return RequesterContext(
        user_id=USER_ID,
        user_name="Listener",
        text_channel_id=TEXT_CHANNEL_ID,
    )


# ============================================================================
# Port Fixtures
# ============================================================================


@pytest.fixture
def mock_voice():
    """Voice adapter double that accepts every request."""
    voice = MagicMock()
    voice.is_joinable.return_value = True
    voice.current_members_empty.return_value = True
    voice.is_connected.return_value = True
    voice.get_current_channel_id.return_value = VOICE_CHANNEL_ID
    voice.ensure_connected = AsyncMock(return_value=True)
    voice.disconnect = AsyncMock(return_value=True)
    voice.play = AsyncMock(return_value=True)
    voice.stop = AsyncMock(return_value=True)
    voice.pause = AsyncMock(return_value=True)
    voice.resume = AsyncMock(return_value=True)
    voice.set_volume = AsyncMock(return_value=True)
    return voice


@pytest.fixture
def mock_resolver():
    """Resolver double mapping ``"a"`` to ``build_track("a")`` and so on."""
    resolver = AsyncMock()
    resolver.resolve.side_effect = lambda query: build_track(query)
    resolver.resolve_stream.side_effect = lambda track: track.model_copy(
        update={"stream_url": f"https://stream.example/fresh-{track.id}"}
    )
    resolver.search.return_value = []
    return resolver


class NotificationRecorder:
    """Collects every notification published on a bus."""

    def __init__(self, bus: EventBus) -> None:
        self.events: list[Notification] = []
        bus.subscribe(Notification, self._record)

    async def _record(self, event: Notification) -> None:
        self.events.append(event)

    def of_type(self, event_type: type[Notification]) -> list[Notification]:
        return [e for e in self.events if isinstance(e, event_type)]

    @property
    def names(self) -> list[str]:
        return [type(e).__name__ for e in self.events]


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def recorder(event_bus):
    return NotificationRecorder(event_bus)
