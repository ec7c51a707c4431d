"""Audio infrastructure - yt-dlp resolver and FFmpeg sources."""

from discord_jukebox.infrastructure.audio.ffmpeg_player import FFmpegConfig, FFmpegPlayer, volume_to_gain
from discord_jukebox.infrastructure.audio.models import (
    AudioFormatInfo,
    CacheEntry,
    ExtractorArgs,
    YtDlpOpts,
    YtDlpPlaylistInfo,
    YtDlpTrackInfo,
    YouTubeExtractorConfig,
)
from discord_jukebox.infrastructure.audio.ytdlp_resolver import YtDlpResolver

__all__ = [
    "AudioFormatInfo",
    "CacheEntry",
    "ExtractorArgs",
    "FFmpegConfig",
    "FFmpegPlayer",
    "YtDlpOpts",
    "YtDlpPlaylistInfo",
    "YtDlpResolver",
    "YtDlpTrackInfo",
    "YouTubeExtractorConfig",
    "volume_to_gain",
]
