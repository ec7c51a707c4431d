"""
FFmpeg Audio Sources

Builds discord.py audio sources for resolved tracks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import discord

from discord_jukebox.config.settings import AudioSettings
from discord_jukebox.domain.shared.constants import AudioConstants, LimitConstants
from discord_jukebox.domain.shared.messages import ErrorMessages

if TYPE_CHECKING:
    from ...domain.music.entities import Track

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FFmpegConfig:
    """Configuration for FFmpeg audio processing."""

    before_options: str = AudioConstants.FFMPEG_BEFORE_OPTIONS_DEFAULT
    options: str = AudioConstants.FFMPEG_OPTIONS_DEFAULT

    # Sent with every stream request; must match yt-dlp's Android client to avoid 403s
    user_agent: str = AudioConstants.ANDROID_USER_AGENT

    @classmethod
    def from_settings(cls, settings: AudioSettings) -> FFmpegConfig:
        return cls(
            before_options=settings.ffmpeg_options.get(
                "before_options", AudioConstants.FFMPEG_BEFORE_OPTIONS_DEFAULT
            ),
            options=settings.ffmpeg_options.get("options", AudioConstants.FFMPEG_OPTIONS_DEFAULT),
        )

    def get_before_options(self) -> str:
        header = AudioConstants.FFMPEG_USER_AGENT_HEADER.format(user_agent=self.user_agent)
        return f"{self.before_options} {header}".strip()

    def get_options(self) -> str:
        return self.options


def volume_to_gain(volume: int) -> float:
    """Map a 0-100 percentage onto PCMVolumeTransformer's linear gain."""
    clamped = max(LimitConstants.MIN_VOLUME, min(LimitConstants.MAX_VOLUME, volume))
    return clamped / 100


class FFmpegPlayer:
    """Creates volume-controllable FFmpeg sources for tracks."""

    def __init__(
        self, settings: AudioSettings | None = None, config: FFmpegConfig | None = None
    ) -> None:
        self._settings = settings or AudioSettings()
        self._config = config or FFmpegConfig.from_settings(self._settings)

    @property
    def config(self) -> FFmpegConfig:
        return self._config

    def create_source(self, track: Track, volume: int) -> discord.PCMVolumeTransformer:
        """Create an audio source for *track* at *volume* percent.

        Raises:
            ValueError: If the track has no stream URL.
        """
        if not track.stream_url:
            raise ValueError(ErrorMessages.NO_STREAM_URL_FOR_TRACK.format(title=track.title))

        source = discord.FFmpegPCMAudio(
            track.stream_url,
            before_options=self._config.get_before_options(),
            options=self._config.get_options(),
        )
        return discord.PCMVolumeTransformer(source, volume=volume_to_gain(volume))

    @staticmethod
    def apply_volume(source: discord.AudioSource | None, volume: int) -> bool:
        """Adjust a playing source in place; False when it has no volume control."""
        if isinstance(source, discord.PCMVolumeTransformer):
            source.volume = volume_to_gain(volume)
            return True
        return False
