"""Discord voice adapter implementing VoiceAdapter for connection and playback."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import discord

from discord_jukebox.application.interfaces.voice_adapter import TrackEndCallback, VoiceAdapter
from discord_jukebox.config.settings import AudioSettings
from discord_jukebox.domain.shared.constants import AudioConstants
from discord_jukebox.domain.shared.messages import LogTemplates
from discord_jukebox.infrastructure.audio.ffmpeg_player import FFmpegPlayer

if TYPE_CHECKING:
    from ....domain.music.entities import Track

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT: float = AudioConstants.CONNECT_TIMEOUT_SECONDS

VoiceChannelLike = discord.VoiceChannel | discord.StageChannel


class DiscordVoiceAdapter(VoiceAdapter):
    def __init__(
        self,
        bot: discord.Client,
        settings: AudioSettings | None = None,
        player: FFmpegPlayer | None = None,
    ) -> None:
        self._bot = bot
        self._settings = settings or AudioSettings()
        self._player = player or FFmpegPlayer(self._settings)
        self._on_track_end: TrackEndCallback | None = None
        # playback id of the source each guild is currently playing
        self._active: dict[int, int] = {}

    def _get_voice_client(self, guild_id: int) -> discord.VoiceClient | None:
        guild = self._bot.get_guild(guild_id)
        if not guild:
            return None

        vc = guild.voice_client
        return vc if isinstance(vc, discord.VoiceClient) else None

    def _get_voice_channel(self, guild_id: int, channel_id: int) -> VoiceChannelLike | None:
        guild = self._bot.get_guild(guild_id)
        if not guild:
            logger.warning(LogTemplates.GUILD_NOT_FOUND, guild_id)
            return None

        channel = guild.get_channel(channel_id)
        if not isinstance(channel, VoiceChannelLike):
            logger.warning(LogTemplates.CHANNEL_NOT_VOICE, channel_id)
            return None
        return channel

    def is_joinable(self, guild_id: int, channel_id: int | None) -> bool:
        if channel_id is None:
            return False

        channel = self._get_voice_channel(guild_id, channel_id)
        if channel is None:
            return False

        me = channel.guild.me
        if me is None:
            return False

        permissions = channel.permissions_for(me)
        if not (permissions.connect and permissions.speak):
            logger.info(LogTemplates.VOICE_NO_PERMISSION, channel_id)
            return False
        return True

    def current_members_empty(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if not vc or not vc.channel:
            return True
        return not any(not member.bot for member in vc.channel.members)

    async def connect(self, guild_id: int, channel_id: int) -> bool:
        channel = self._get_voice_channel(guild_id, channel_id)
        if channel is None:
            return False

        try:
            async with asyncio.timeout(CONNECT_TIMEOUT):
                await channel.connect(self_deaf=True)
            logger.info(LogTemplates.VOICE_CONNECTED, channel.name, channel.guild.name)
            return True
        except TimeoutError:
            logger.error(LogTemplates.VOICE_CONNECTION_TIMEOUT, channel_id)
            return False
        except discord.Forbidden:
            logger.error(LogTemplates.VOICE_NO_PERMISSION, channel_id)
            return False
        except discord.ClientException as e:
            logger.error(LogTemplates.VOICE_CLIENT_ERROR, e)
            return False

    async def disconnect(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        self._active.pop(guild_id, None)
        if not vc:
            return True

        try:
            await vc.disconnect(force=True)
        except discord.HTTPException as e:
            logger.warning(LogTemplates.VOICE_DISCONNECT_FAILED, guild_id, e)
            return False

        logger.info(LogTemplates.VOICE_DISCONNECTED, guild_id)
        return True

    async def ensure_connected(self, guild_id: int, channel_id: int) -> bool:
        """Connect if not connected, move if in a different channel."""
        vc = self._get_voice_client(guild_id)

        if vc and not vc.is_connected():
            logger.warning(LogTemplates.VOICE_STALE_CLEANUP, guild_id)
            await self.disconnect(guild_id)
            vc = None

        if vc and vc.channel:
            if vc.channel.id == channel_id:
                return True
            return await self.move_to(guild_id, channel_id)

        return await self.connect(guild_id, channel_id)

    async def move_to(self, guild_id: int, channel_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if not vc:
            return await self.connect(guild_id, channel_id)

        channel = self._get_voice_channel(guild_id, channel_id)
        if channel is None:
            return False

        try:
            async with asyncio.timeout(CONNECT_TIMEOUT):
                await vc.move_to(channel)
        except TimeoutError:
            logger.error(LogTemplates.VOICE_MOVE_TIMEOUT, channel_id)
            return False

        logger.info(LogTemplates.VOICE_MOVED, channel.name)
        return True

    async def play(self, guild_id: int, track: Track, *, volume: int, playback_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if not vc:
            logger.warning(LogTemplates.VOICE_NOT_CONNECTED, guild_id)
            return False

        if not track.stream_url:
            logger.error(LogTemplates.YTDLP_NO_STREAM_URL, track.title)
            return False

        # Claim the guild first so the outgoing source's callback is recognised as stale.
        self._active[guild_id] = playback_id
        if vc.is_playing() or vc.is_paused():
            vc.stop()

        loop = self._bot.loop

        def after_callback(error: Exception | None = None) -> None:
            logger.info(LogTemplates.TRACK_ENDED, guild_id, playback_id, error)
            if error:
                logger.warning(LogTemplates.PLAYBACK_ERROR, guild_id, error)
            asyncio.run_coroutine_threadsafe(self._handle_track_end(guild_id, playback_id), loop)

        try:
            source = self._player.create_source(track, volume)
            vc.play(source, after=after_callback)
        except (discord.ClientException, ValueError) as e:
            logger.error(LogTemplates.PLAYBACK_FAILED_START, e)
            self._active.pop(guild_id, None)
            return False

        return True

    async def stop(self, guild_id: int) -> bool:
        self._active.pop(guild_id, None)
        vc = self._get_voice_client(guild_id)
        if vc and (vc.is_playing() or vc.is_paused()):
            vc.stop()
            logger.debug(LogTemplates.PLAYBACK_STOPPED, guild_id)
        return True

    async def pause(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if vc and vc.is_playing():
            vc.pause()
            return True
        return False

    async def resume(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if vc and vc.is_paused():
            vc.resume()
            return True
        return False

    async def set_volume(self, guild_id: int, volume: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if not vc:
            return False
        return self._player.apply_volume(vc.source, volume)

    def is_connected(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        return vc is not None and vc.is_connected()

    def get_current_channel_id(self, guild_id: int) -> int | None:
        vc = self._get_voice_client(guild_id)
        if vc and vc.channel:
            return vc.channel.id
        return None

    def set_on_track_end_callback(self, callback: TrackEndCallback) -> None:
        self._on_track_end = callback

    async def _handle_track_end(self, guild_id: int, playback_id: int) -> None:
        """Runs on the bot loop after FFmpeg's thread reports the end of a source."""
        if self._active.get(guild_id) != playback_id:
            return
        self._active.pop(guild_id, None)

        if self._on_track_end is None:
            logger.warning(LogTemplates.PLAYBACK_NO_CALLBACK, guild_id)
            return

        try:
            await self._on_track_end(guild_id, playback_id)
        except Exception as e:
            logger.exception(LogTemplates.PLAYBACK_CALLBACK_ERROR, guild_id, e)
