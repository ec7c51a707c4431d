"""Centralized constants for limits, audio defaults, and UI sizing.

This module provides reusable constants that reduce magic numbers and improve maintainability.
"""

from __future__ import annotations


class AudioConstants:
    """Audio, FFmpeg and yt-dlp configuration constants."""

    # FFmpeg Options
    FFMPEG_BEFORE_OPTIONS_DEFAULT = "-reconnect 1 -reconnect_streamed 1 -reconnect_delay_max 5"
    FFMPEG_OPTIONS_DEFAULT = "-vn"  # No video
    FFMPEG_USER_AGENT_HEADER = '-headers "User-Agent: {user_agent}"'

    # User Agents
    ANDROID_USER_AGENT = "com.google.android.youtube/19.44.38 (Linux; U; Android 14) gzip"

    # yt-dlp Options
    YTDLP_FORMAT_DEFAULT = "bestaudio[acodec!=none]/bestaudio/best"
    YTDLP_PLAYER_CLIENTS = ("android", "mweb", "web")

    CONNECT_TIMEOUT_SECONDS = 10.0


class LimitConstants:
    """Numeric limits and constraints."""

    # Queue limits
    MAX_QUEUE_SIZE = 200
    HISTORY_SIZE = 25

    # Volume limits (percent)
    MIN_VOLUME = 0
    MAX_VOLUME = 100
    DEFAULT_VOLUME = 100

    # Search
    SEARCH_RESULT_LIMIT = 5

    # Playback start attempts before a queue is given up
    MAX_START_ATTEMPTS = 3

    # Discord limits
    MAX_DISCORD_SNOWFLAKE = 2**64
    MESSAGE_SAFE_LENGTH = 1800


class UIConstants:
    """Embed sizing and truncation."""

    EMBED_COLOR = 0xFF0000
    ACCENT_COLOR = 0x5865F2
    QUEUE_PAGE_SIZE = 10
    TITLE_TRUNCATION = 80
    CHANNEL_TRUNCATION = 40
