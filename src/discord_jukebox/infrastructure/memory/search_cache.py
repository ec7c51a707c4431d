"""In-memory implementation of the per-user search result cache.

Entries are overwritten by the next search from the same user and never
expire; concurrent searches by one user are last-write-wins.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from discord_jukebox.domain.music.entities import TrackReference
from discord_jukebox.domain.music.repository import SearchResultCache
from discord_jukebox.domain.shared.constants import LimitConstants
from discord_jukebox.domain.shared.exceptions import IndexOutOfRangeError, NoRecentSearchError
from discord_jukebox.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


class InMemorySearchResultCache(SearchResultCache):
    def __init__(self, limit: int = LimitConstants.SEARCH_RESULT_LIMIT) -> None:
        self._limit = limit
        self._entries: dict[int, list[TrackReference]] = {}

    def record(self, user_id: int, references: Sequence[TrackReference]) -> list[TrackReference]:
        stored = list(references[: self._limit])
        self._entries[user_id] = stored
        logger.debug(LogTemplates.SEARCH_RECORDED, len(stored), user_id)
        return list(stored)

    def resolve_choice(self, user_id: int, choice: int) -> TrackReference:
        entry = self._entries.get(user_id)
        if entry is None:
            raise NoRecentSearchError(user_id)
        if not 1 <= choice <= len(entry):
            raise IndexOutOfRangeError(choice, len(entry))

        reference = entry[choice - 1]
        logger.debug(LogTemplates.SEARCH_CHOICE_RESOLVED, choice, user_id, reference.id)
        return reference

    def get(self, user_id: int) -> list[TrackReference] | None:
        entry = self._entries.get(user_id)
        return list(entry) if entry is not None else None

    def clear(self) -> None:
        self._entries.clear()
