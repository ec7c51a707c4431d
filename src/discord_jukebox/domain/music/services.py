"""
Music Domain Services

Domain services containing business logic that doesn't naturally fit
within a single entity or value object.
"""

from __future__ import annotations

from collections.abc import Iterable

from discord_jukebox.domain.music.entities import GuildQueue, Track
from discord_jukebox.domain.music.value_objects import LoopMode


class QueueDomainService:
    """Domain service for queue-wide calculations used by the read side."""

    @classmethod
    def total_duration(cls, tracks: Iterable[Track]) -> int | None:
        """Calculate total duration of the given tracks.

        Args:
            tracks: Tracks to sum.

        Returns:
            Total duration in seconds, or None if any track has unknown duration.
        """
        total = 0
        for track in tracks:
            if track.duration_seconds is None:
                return None
            total += track.duration_seconds
        return total

    @classmethod
    def format_total_duration(cls, queue: GuildQueue) -> str:
        """Format the total queue duration as a human-readable string.

        Args:
            queue: The guild queue.

        Returns:
            Formatted duration string.
        """
        duration = cls.total_duration(queue.tracks)
        if duration is None:
            return "Unknown"

        hours, remainder = divmod(duration, 3600)
        minutes, seconds = divmod(remainder, 60)

        if hours > 0:
            return f"{hours}h {minutes}m {seconds}s"
        elif minutes > 0:
            return f"{minutes}m {seconds}s"
        return f"{seconds}s"

    @staticmethod
    def will_continue(queue: GuildQueue) -> bool:
        """Whether a natural completion leaves something to play."""
        if queue.loop_mode is not LoopMode.OFF:
            return not queue.is_empty
        return queue.remaining_count > 0
