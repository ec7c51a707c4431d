"""Port interface for resolving audio tracks from queries and URLs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from discord_jukebox.domain.shared.types import NonEmptyStr, PositiveInt

if TYPE_CHECKING:
    from ...domain.music.entities import Playlist, Track, TrackReference


class AudioResolver(ABC):
    """Interface for resolving URLs and search queries to playable tracks."""

    @abstractmethod
    async def resolve(self, query: NonEmptyStr) -> "Track | Playlist":
        """Resolve a query or URL to a track, or a playlist URL to its tracks.

        Raises:
            TrackNotFoundError: Nothing matched the query.
            ExtractionError: The extractor failed.
        """
        ...

    @abstractmethod
    async def search(self, query: NonEmptyStr, limit: PositiveInt = 5) -> list["TrackReference"]:
        """Search for tracks matching a query without resolving streams.

        Raises:
            SearchError: The search could not be performed.
        """
        ...

    @abstractmethod
    async def resolve_stream(self, track: "Track") -> "Track":
        """Return *track* with a fresh stream URL (flat playlist entries have none)."""
        ...
