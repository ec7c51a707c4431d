"""Search Application Service - runs searches and remembers results per user."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...domain.shared.constants import LimitConstants
from ...domain.shared.exceptions import InvalidArgumentError
from ...domain.shared.messages import ErrorMessages
from ...domain.shared.types import DiscordSnowflake

if TYPE_CHECKING:
    from ...domain.music.entities import TrackReference
    from ...domain.music.repository import SearchResultCache
    from ..interfaces.audio_resolver import AudioResolver

logger = logging.getLogger(__name__)


class SearchService:
    """Searches for candidate tracks and records them for ``play N``.

    The cache is only written here; the dispatcher reads it when a play
    request is a bare number.
    """

    def __init__(
        self,
        *,
        audio_resolver: AudioResolver,
        search_cache: SearchResultCache,
        limit: int = LimitConstants.SEARCH_RESULT_LIMIT,
    ) -> None:
        self._resolver = audio_resolver
        self._cache = search_cache
        self._limit = limit

    async def search(self, user_id: DiscordSnowflake, query: str) -> list[TrackReference]:
        query = query.strip()
        if not query:
            raise InvalidArgumentError(ErrorMessages.MISSING_SEARCH_QUERY, field="query")

        results = await self._resolver.search(query, limit=self._limit)
        if not results:
            return []
        return self._cache.record(user_id, results)
