"""Immutable value objects for the music bounded context."""

from __future__ import annotations

import hashlib
import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Final
from urllib.parse import parse_qs, urlsplit

from pydantic import PlainSerializer, PlainValidator

from discord_jukebox.domain.shared.constants import LimitConstants
from discord_jukebox.domain.shared.messages import ErrorMessages

YOUTUBE_ID_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([a-zA-Z0-9_-]{11})"),
    re.compile(r"youtube\.com/shorts/([a-zA-Z0-9_-]{11})"),
)

_URL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(?:https?://|www\.)", re.IGNORECASE)
_PLAYLIST_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?:[?&]list=|/playlist\?|/sets/)")
_SEARCH_CHOICE_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"[1-{LimitConstants.SEARCH_RESULT_LIMIT}]"
)


@dataclass(frozen=True)
class TrackId:
    """Typically a YouTube video ID or a hash of the URL."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError(ErrorMessages.EMPTY_TRACK_ID)

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value)

    @classmethod
    def from_url(cls, url: str) -> TrackId:
        """Extract track ID from a URL, using YouTube video ID or a URL hash as fallback."""
        for pattern in YOUTUBE_ID_PATTERNS:
            match = pattern.search(url)
            if match:
                return cls(match.group(1))

        url_hash = hashlib.sha256(url.encode()).hexdigest()[:16]
        return cls(url_hash)


# Serializes as plain string in JSON, stores as TrackId in the model.
TrackIdField = Annotated[
    TrackId,
    PlainValidator(lambda v: TrackId(v) if isinstance(v, str) else v),
    PlainSerializer(lambda v: v.value, return_type=str),
]


class LoopMode(Enum):
    """Loop mode settings for queue playback.

    ``TRACK`` replays the current track on natural completion only; an
    explicit skip still advances. ``QUEUE`` moves each finished track to the
    back so the queue never runs dry.
    """

    OFF = "off"
    TRACK = "track"
    QUEUE = "queue"

    def next_mode(self) -> LoopMode:
        """Cycle to next loop mode (Off → Track → Queue → Off)."""
        modes = list(LoopMode)
        current_index = modes.index(self)
        next_index = (current_index + 1) % len(modes)
        return modes[next_index]

    @property
    def label(self) -> str:
        return _LOOP_LABELS[self]


_LOOP_LABELS: Final[dict[LoopMode, str]] = {
    LoopMode.OFF: "OFF",
    LoopMode.TRACK: "Song 🔂",
    LoopMode.QUEUE: "Queue 🔁",
}


@dataclass(frozen=True)
class PlayTarget:
    """A play request after the YouTube data-cleaning rule has been applied.

    Watch URLs carrying extra parameters are reduced to what the resolver
    needs: the playlist when a ``list`` id is present, otherwise the bare
    video. Anything else (free text, other URLs, unparsable input) passes
    through untouched.
    """

    raw: str
    value: str

    @classmethod
    def from_raw(cls, text: str) -> PlayTarget:
        raw = text.strip()
        return cls(raw=raw, value=canonicalize_youtube_url(raw))

    @property
    def was_canonicalized(self) -> bool:
        return self.raw != self.value

    @property
    def is_url(self) -> bool:
        return bool(_URL_PATTERN.match(self.value))

    @property
    def is_playlist(self) -> bool:
        return self.is_url and bool(_PLAYLIST_PATTERN.search(self.value))

    def __str__(self) -> str:
        return self.value


def canonicalize_youtube_url(text: str) -> str:
    """Normalize a YouTube watch URL that carries more than the video id.

    >>> canonicalize_youtube_url("https://youtube.com/watch?v=X&list=Y")
    'https://www.youtube.com/playlist?list=Y'
    >>> canonicalize_youtube_url("https://youtube.com/watch?v=X&t=30")
    'https://www.youtube.com/watch?v=X'
    """
    if "youtube.com/watch" not in text or "&" not in text:
        return text

    try:
        parts = urlsplit(text)
    except ValueError:
        return text
    if parts.scheme not in ("http", "https") or not parts.netloc:
        return text

    params = parse_qs(parts.query)
    list_id = params.get("list", [None])[0]
    if list_id:
        return f"https://www.youtube.com/playlist?list={list_id}"

    video_id = params.get("v", [None])[0]
    if video_id:
        return f"https://www.youtube.com/watch?v={video_id}"
    return text


def parse_search_choice(args: Sequence[str]) -> int | None:
    """Return the 1-based choice when *args* is exactly one token between 1 and 5."""
    if len(args) != 1:
        return None
    token = args[0].strip()
    if not _SEARCH_CHOICE_PATTERN.fullmatch(token):
        return None
    return int(token)
