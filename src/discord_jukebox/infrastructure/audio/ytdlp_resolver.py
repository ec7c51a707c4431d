"""AudioResolver implementation using yt-dlp for URL resolution and search."""

from __future__ import annotations

import asyncio
import logging
import re
import time
from typing import Any, Final, cast

from pydantic import ValidationError
from yt_dlp import YoutubeDL
from yt_dlp.utils import DownloadError

from discord_jukebox.application.interfaces.audio_resolver import AudioResolver
from discord_jukebox.config.settings import AudioSettings
from discord_jukebox.domain.music.entities import Playlist, Track, TrackReference
from discord_jukebox.domain.music.value_objects import TrackId
from discord_jukebox.domain.shared.constants import LimitConstants
from discord_jukebox.domain.shared.exceptions import ExtractionError, SearchError, TrackNotFoundError
from discord_jukebox.domain.shared.messages import ErrorMessages, LogTemplates
from discord_jukebox.utils.reply import summarize_error

from .models import (
    CACHE_MAX_SIZE,
    CACHE_TTL,
    LOG_URL_TRUNCATE,
    AudioFormatInfo,
    CacheEntry,
    ExtractorArgs,
    YouTubeExtractorConfig,
    YtDlpOpts,
    YtDlpPlaylistInfo,
    YtDlpTrackInfo,
)

logger = logging.getLogger(__name__)

URL_PATTERNS: Final[list[re.Pattern[str]]] = [
    re.compile(r"https?://"),
    re.compile(r"www\."),
]

PLAYLIST_PATTERNS: Final[list[re.Pattern[str]]] = [
    re.compile(r"[?&]list="),
    re.compile(r"/playlist\?"),
    re.compile(r"/sets/"),
]

_HTTP_PATTERN: Final[re.Pattern[str]] = re.compile(r"^https?://")


class YtDlpResolver(AudioResolver):

    def __init__(self, settings: AudioSettings | None = None) -> None:
        self._settings = settings or AudioSettings()
        self._info_cache: dict[str, CacheEntry] = {}

        self._extractor_args = ExtractorArgs(
            youtube=YouTubeExtractorConfig(player_client=list(self._settings.player_client))
        )
        self._base_opts = YtDlpOpts(
            format=self._settings.ytdlp_format,
            extractor_args=self._extractor_args,
        )

        logger.info(
            LogTemplates.YTDLP_CONFIGURED,
            self._settings.ytdlp_format,
            ",".join(self._settings.player_client),
        )

    def _get_opts(self, **overrides: Any) -> YtDlpOpts:
        if overrides:
            return self._base_opts.model_copy(update=overrides)
        return self._base_opts

    def _get_playlist_opts(self) -> YtDlpOpts:
        return self._get_opts(noplaylist=False, extract_flat="in_playlist")

    def _get_flat_search_opts(self) -> YtDlpOpts:
        return self._get_opts(extract_flat=True)

    # ── Conversion ──────────────────────────────────────────────────

    def _info_to_track(self, info: YtDlpTrackInfo) -> Track | None:
        url = self._extract_webpage_url(info)
        if not url:
            logger.warning(LogTemplates.YTDLP_NO_URL_IN_INFO_DICT)
            return None

        stream_url = self._extract_stream_url(info)
        if not stream_url:
            logger.warning(LogTemplates.YTDLP_NO_STREAM_URL, info.title)
            return None

        return self._build_track(info, url, stream_url)

    def _flat_entry_to_track(self, entry: YtDlpTrackInfo) -> Track | None:
        """Playlist entries carry metadata only; the stream is resolved at play time."""
        url = self._extract_webpage_url(entry)
        if not url and entry.id:
            url = f"https://www.youtube.com/watch?v={entry.id}"
        if not url:
            return None
        return self._build_track(entry, url, None)

    @staticmethod
    def _build_track(info: YtDlpTrackInfo, url: str, stream_url: str | None) -> Track | None:
        thumbnail = info.thumbnail if info.thumbnail and _HTTP_PATTERN.match(info.thumbnail) else None
        try:
            return Track(
                id=TrackId.from_url(url),
                title=info.title,
                webpage_url=url,
                stream_url=stream_url,
                duration_seconds=info.duration,
                thumbnail_url=thumbnail,
                channel=info.channel or info.uploader,
            )
        except ValidationError:
            logger.exception(LogTemplates.YTDLP_FAILED_EXTRACT_INFO, url[:LOG_URL_TRUNCATE])
            return None

    @staticmethod
    def _extract_webpage_url(info: YtDlpTrackInfo) -> str | None:
        for candidate in (info.webpage_url, info.url):
            if candidate and _HTTP_PATTERN.match(candidate):
                return candidate
        return None

    def _extract_stream_url(self, info: YtDlpTrackInfo) -> str | None:
        if info.url and _HTTP_PATTERN.match(info.url) and info.url != info.webpage_url:
            return info.url
        return self._extract_stream_from_formats(info.formats)

    @staticmethod
    def _extract_stream_from_formats(formats: list[AudioFormatInfo]) -> str | None:
        if not formats:
            return None
        audio_formats = [f for f in formats if f.acodec != "none" and f.url]
        if audio_formats:
            return audio_formats[-1].url
        return None

    @staticmethod
    def _parse_info(data: dict[str, Any]) -> YtDlpTrackInfo:
        """Parse a raw yt-dlp info dict into a typed model."""
        return YtDlpTrackInfo.model_validate(data)

    # ── Blocking extraction (run in a worker thread) ────────────────

    def _run_extract(self, target: str, opts: YtDlpOpts) -> dict[str, Any] | None:
        try:
            with YoutubeDL(params=cast(Any, opts.model_dump(exclude_none=True))) as ydl:
                data = ydl.extract_info(target, download=False)
        except DownloadError as e:
            raise ExtractionError(summarize_error(e)) from e
        return dict(data) if isinstance(data, dict) else None

    def _extract_info_sync(self, url: str) -> YtDlpTrackInfo | None:
        now = time.time()
        cached = self._info_cache.get(url)
        if cached is not None:
            if now - cached.cached_at < CACHE_TTL:
                logger.debug(LogTemplates.CACHE_HIT_URL, url[:LOG_URL_TRUNCATE])
                return cached.info
            self._info_cache.pop(url, None)

        try:
            data = self._run_extract(url, self._get_opts())
        except ExtractionError:
            logger.warning(LogTemplates.YTDLP_FAILED_EXTRACT_INFO, url[:LOG_URL_TRUNCATE])
            raise

        result = self._parse_info(data) if data is not None else None
        self._info_cache[url] = CacheEntry(info=result, cached_at=now)
        if len(self._info_cache) > CACHE_MAX_SIZE:
            self._evict_expired(now)
        return result

    def _evict_expired(self, now: float) -> None:
        expired = [k for k, entry in self._info_cache.items() if now - entry.cached_at >= CACHE_TTL]
        for k in expired:
            self._info_cache.pop(k, None)

    def _search_sync(self, query: str, limit: int, *, flat: bool) -> list[YtDlpTrackInfo]:
        opts = self._get_flat_search_opts() if flat else self._get_opts()
        data = self._run_extract(f"ytsearch{limit}:{query}", opts)
        if data is None:
            return []

        entries = data.get("entries", [])
        if not isinstance(entries, list):
            return []
        return [self._parse_info(dict(e)) for e in entries if isinstance(e, dict)]

    def _extract_playlist_sync(self, url: str) -> YtDlpPlaylistInfo | None:
        data = self._run_extract(url, self._get_playlist_opts())
        if data is None:
            return None
        return YtDlpPlaylistInfo.model_validate(data)

    # ── AudioResolver ───────────────────────────────────────────────

    async def resolve(self, query: str) -> Track | Playlist:
        query = query.strip()

        if self.is_url(query) and self.is_playlist(query):
            return await self._resolve_playlist(query)

        if self.is_url(query):
            info = await asyncio.to_thread(self._extract_info_sync, query)
        else:
            results = await asyncio.to_thread(self._search_sync, query, 1, flat=False)
            info = results[0] if results else None

        track = self._info_to_track(info) if info is not None else None
        if track is None:
            raise TrackNotFoundError(query)
        return track

    async def _resolve_playlist(self, url: str) -> Playlist:
        info = await asyncio.to_thread(self._extract_playlist_sync, url)
        if info is None:
            raise TrackNotFoundError(url)

        tracks = [t for t in (self._flat_entry_to_track(e) for e in info.entries) if t is not None]
        logger.info(LogTemplates.YTDLP_PLAYLIST_EXTRACTED, info.title, len(tracks))
        if not tracks:
            raise TrackNotFoundError(url)

        playlist_url = info.webpage_url if info.webpage_url and _HTTP_PATTERN.match(info.webpage_url) else url
        return Playlist(name=info.title, url=playlist_url, tracks=tracks)

    async def search(
        self, query: str, limit: int = LimitConstants.SEARCH_RESULT_LIMIT
    ) -> list[TrackReference]:
        try:
            results = await asyncio.to_thread(self._search_sync, query, limit, flat=True)
        except ExtractionError as e:
            logger.warning(LogTemplates.YTDLP_FAILED_SEARCH, query)
            raise SearchError(query) from e

        references: list[TrackReference] = []
        for info in results:
            if not info.is_video_hit or info.id is None:
                continue
            references.append(
                TrackReference(
                    id=info.id,
                    title=info.title,
                    channel=info.channel or info.uploader,
                    duration_seconds=info.duration,
                )
            )
        return references[:limit]

    async def resolve_stream(self, track: Track) -> Track:
        info = await asyncio.to_thread(self._extract_info_sync, track.webpage_url)
        if info is None:
            raise TrackNotFoundError(track.webpage_url)

        fresh = self._info_to_track(info)
        if fresh is None:
            raise ExtractionError(ErrorMessages.NO_STREAM_URL_FOR_TRACK.format(title=track.title))
        return track.with_stream_from(fresh)

    def is_url(self, query: str) -> bool:
        return any(pattern.search(query) for pattern in URL_PATTERNS)

    def is_playlist(self, url: str) -> bool:
        return any(pattern.search(url) for pattern in PLAYLIST_PATTERNS)
