"""
Music Domain Repository Interfaces

Abstract base classes for the process-wide stores the controller borrows
from. Implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from discord_jukebox.domain.music.entities import GuildQueue, TrackReference


class QueueRegistry(ABC):
    """Owns every GuildQueue, at most one per guild id."""

    @abstractmethod
    async def get(self, guild_id: int) -> GuildQueue | None:
        """Retrieve a queue by guild ID.

        Args:
            guild_id: The Discord guild ID.

        Returns:
            The queue if one exists, None otherwise.
        """
        ...

    @abstractmethod
    async def get_or_create(
        self, guild_id: int, factory: Callable[[int], GuildQueue]
    ) -> tuple[GuildQueue, bool]:
        """Return the existing queue or insert one built by *factory*.

        The insert is atomic with respect to concurrent callers for the same
        guild: every caller receives the same instance.

        Args:
            guild_id: The Discord guild ID.
            factory: Builds a fresh queue for ``guild_id``.

        Returns:
            The queue and whether this call created it.
        """
        ...

    @abstractmethod
    async def remove(self, guild_id: int, expected: GuildQueue | None = None) -> bool:
        """Remove the queue for a guild.

        Args:
            guild_id: The Discord guild ID.
            expected: When given, only remove if the stored queue is this instance.

        Returns:
            True if a queue was removed.
        """
        ...

    @abstractmethod
    async def guild_ids(self) -> list[int]:
        """Guild ids that currently own a queue."""
        ...


class SearchResultCache(ABC):
    """Per-user memory of the last search, consumed by ``play N``."""

    @abstractmethod
    def record(self, user_id: int, references: Sequence[TrackReference]) -> list[TrackReference]:
        """Overwrite the user's entry and return what was stored."""
        ...

    @abstractmethod
    def resolve_choice(self, user_id: int, choice: int) -> TrackReference:
        """Return the 1-based *choice* from the user's last search.

        Raises:
            NoRecentSearchError: The user has no recorded search.
            IndexOutOfRangeError: ``choice`` is outside ``1..len(entry)``.
        """
        ...

    @abstractmethod
    def get(self, user_id: int) -> list[TrackReference] | None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...
