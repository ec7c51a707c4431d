"""Playback Controller - the serialized command surface over each guild queue."""

from __future__ import annotations

import asyncio
import itertools
import logging
import random
from typing import TYPE_CHECKING

from ...domain.music.entities import GuildQueue, Playlist
from ...domain.music.events import (
    Disconnected,
    EmptyChannel,
    Errored,
    Finished,
    LoopModeChanged,
    Notification,
    NowPlaying,
    Paused,
    PlaylistAdded,
    Resumed,
    Shuffled,
    Stopped,
    TrackAdded,
    VolumeChanged,
)
from ...domain.music.value_objects import LoopMode, PlayTarget
from ...domain.shared.constants import LimitConstants
from ...domain.shared.enums import DestroyReason
from ...domain.shared.exceptions import (
    BusinessRuleViolationError,
    EmptyQueueError,
    ExtractionError,
    NotJoinableError,
    ResolutionFailedError,
    TrackNotFoundError,
)
from ...domain.shared.messages import ErrorMessages, LogTemplates
from ...domain.shared.types import DiscordSnowflake, NonNegativeInt
from .playback_models import PlaybackPolicy

if TYPE_CHECKING:
    from ...domain.music.repository import QueueRegistry
    from ...domain.shared.events import EventBus
    from ..commands.control_command import RequesterContext
    from ..interfaces.audio_resolver import AudioResolver
    from ..interfaces.voice_adapter import VoiceAdapter

logger = logging.getLogger(__name__)


class PlaybackController:
    """Owns every playback-relevant mutation of a guild queue.

    All operations for one guild run one at a time, in arrival order, under
    that guild's lock; a ``stop`` issued while a ``play`` is resolving is
    applied after the ``play`` completes. Different guilds never contend.
    """

    _MAX_START_ATTEMPTS: int = LimitConstants.MAX_START_ATTEMPTS

    def __init__(
        self,
        *,
        queue_registry: QueueRegistry,
        audio_resolver: AudioResolver,
        voice_adapter: VoiceAdapter,
        event_bus: EventBus,
        policy: PlaybackPolicy | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._registry = queue_registry
        self._resolver = audio_resolver
        self._voice = voice_adapter
        self._bus = event_bus
        self._policy = policy or PlaybackPolicy()
        self._rng = rng

        self._locks: dict[DiscordSnowflake, asyncio.Lock] = {}
        # Shared across guilds so a recreated queue never reuses an id.
        self._playback_ids = itertools.count(1)

        self._voice.set_on_track_end_callback(self.handle_track_finished)

    @property
    def policy(self) -> PlaybackPolicy:
        return self._policy

    def _lock_for(self, guild_id: DiscordSnowflake) -> asyncio.Lock:
        """Return the guild's lock, creating it on first use.

        Locks live for the controller's lifetime, one per guild ever seen, and
        are never dropped with the queue: a waiter may still hold a reference
        to the old lock while a new queue is created under a fresh one.
        """
        lock = self._locks.get(guild_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[guild_id] = lock
        return lock

    def _new_queue(self, guild_id: DiscordSnowflake) -> GuildQueue:
        return GuildQueue(
            guild_id=guild_id,
            volume=self._policy.default_volume,
            max_size=self._policy.max_queue_size,
            history_size=self._policy.history_size,
        )

    async def _require_queue(self, guild_id: DiscordSnowflake) -> GuildQueue:
        queue = await self._registry.get(guild_id)
        if queue is None or queue.is_empty:
            raise EmptyQueueError()
        return queue

    async def _publish(self, notification: Notification) -> Notification:
        await self._bus.publish(notification)
        return notification

    # ── Commands ────────────────────────────────────────────────────

    async def play(
        self,
        guild_id: DiscordSnowflake,
        target: PlayTarget | str,
        requester: RequesterContext,
    ) -> Notification:
        """Resolve *target* and add it to the guild's queue, creating the queue if needed."""
        async with self._lock_for(guild_id):
            channel_id = requester.voice_channel_id
            if channel_id is None:
                raise NotJoinableError()
            if not self._voice.is_joinable(guild_id, channel_id):
                raise NotJoinableError(ErrorMessages.MISSING_VOICE_PERMISSIONS)

            query = str(target)
            try:
                resolved = await self._resolver.resolve(query)
            except (TrackNotFoundError, ExtractionError) as exc:
                raise ResolutionFailedError(query, exc.message) from exc

            queue = await self._registry.get(guild_id)
            created = False
            if queue is None:
                if not await self._voice.ensure_connected(guild_id, channel_id):
                    raise NotJoinableError(ErrorMessages.COULD_NOT_JOIN_VOICE)
                queue, created = await self._registry.get_or_create(guild_id, self._new_queue)
                queue.voice_channel_id = channel_id
            if queue.text_channel_id is None:
                queue.text_channel_id = requester.text_channel_id

            if isinstance(resolved, Playlist):
                return await self._enqueue_playlist(queue, resolved, requester, created=created)

            track = resolved.with_requester(requester.user_id, requester.user_name)
            position = queue.append(track)
            logger.info(LogTemplates.QUEUE_ENQUEUED, track.title, position, guild_id)

            if created:
                return await self._start_head(queue)

            return await self._publish(
                TrackAdded(
                    guild_id=guild_id,
                    text_channel_id=queue.text_channel_id,
                    track=track,
                    position=position,
                )
            )

    async def _enqueue_playlist(
        self,
        queue: GuildQueue,
        playlist: Playlist,
        requester: RequesterContext,
        *,
        created: bool,
    ) -> Notification:
        stamped = playlist.with_requester(requester.user_id, requester.user_name)
        added = queue.extend(stamped.tracks)
        if added == 0:
            raise BusinessRuleViolationError(
                rule="MAX_QUEUE_SIZE",
                message=ErrorMessages.QUEUE_FULL.format(max_size=queue.max_size),
            )
        if added < len(stamped.tracks):
            logger.warning(LogTemplates.QUEUE_PLAYLIST_TRUNCATED, playlist.name, added, queue.guild_id)
        logger.info(LogTemplates.QUEUE_PLAYLIST_ENQUEUED, playlist.name, added, queue.guild_id)

        notification = await self._publish(
            PlaylistAdded(
                guild_id=queue.guild_id,
                text_channel_id=queue.text_channel_id,
                name=playlist.name,
                count=added,
                requested_by_name=requester.user_name,
            )
        )
        if created:
            await self._start_head(queue)
        return notification

    async def skip(self, guild_id: DiscordSnowflake) -> Notification:
        """Advance past the playing track; under track loop the skip still advances."""
        async with self._lock_for(guild_id):
            queue = await self._require_queue(guild_id)
            skipped = queue.current
            if skipped is not None:
                logger.info(LogTemplates.QUEUE_SKIPPED, skipped.title, guild_id)
            return await self._advance(queue, skipped=True)

    async def previous(self, guild_id: DiscordSnowflake) -> Notification:
        async with self._lock_for(guild_id):
            queue = await self._require_queue(guild_id)
            track = queue.rewind()
            logger.info(LogTemplates.QUEUE_REWOUND, track.title, guild_id)
            return await self._start_head(queue)

    async def pause_toggle(self, guild_id: DiscordSnowflake) -> Notification:
        """Flip the queue's paused flag and mirror it onto the voice client.

        The flag is the source of truth. When the engine has no source to
        pause or resume (between tracks) the flag still flips, and the next
        ``_start_head`` clears it as the new source begins.
        """
        async with self._lock_for(guild_id):
            queue = await self._require_queue(guild_id)

            if queue.toggle_pause():
                if not await self._voice.pause(guild_id):
                    logger.debug(LogTemplates.PLAYBACK_TOGGLE_UNAPPLIED, "pause", guild_id)
                logger.debug(LogTemplates.PLAYBACK_PAUSED, guild_id)
                notification: Notification = Paused(
                    guild_id=guild_id, text_channel_id=queue.text_channel_id
                )
            else:
                if not await self._voice.resume(guild_id):
                    logger.debug(LogTemplates.PLAYBACK_TOGGLE_UNAPPLIED, "resume", guild_id)
                logger.debug(LogTemplates.PLAYBACK_RESUMED, guild_id)
                notification = Resumed(guild_id=guild_id, text_channel_id=queue.text_channel_id)

            return await self._publish(notification)

    async def stop(self, guild_id: DiscordSnowflake) -> Notification:
        async with self._lock_for(guild_id):
            queue = await self._require_queue(guild_id)
            queue.clear()
            await self._destroy(queue, DestroyReason.STOPPED)

            await self._voice.stop(guild_id)
            if self._policy.leave_on_stop:
                await self._voice.disconnect(guild_id)
            logger.info(LogTemplates.PLAYBACK_STOPPED, guild_id)

            return await self._publish(
                Stopped(guild_id=guild_id, text_channel_id=queue.text_channel_id)
            )

    async def set_volume(self, guild_id: DiscordSnowflake, volume: int) -> Notification:
        async with self._lock_for(guild_id):
            queue = await self._require_queue(guild_id)
            queue.set_volume(volume)
            await self._voice.set_volume(guild_id, volume)
            logger.info(LogTemplates.VOLUME_CHANGED, volume, guild_id)

            return await self._publish(
                VolumeChanged(guild_id=guild_id, text_channel_id=queue.text_channel_id, volume=volume)
            )

    async def cycle_loop_mode(self, guild_id: DiscordSnowflake) -> Notification:
        async with self._lock_for(guild_id):
            queue = await self._require_queue(guild_id)
            mode = queue.cycle_loop_mode()
            logger.info(LogTemplates.LOOP_MODE_CHANGED, mode.value, guild_id)

            return await self._publish(
                LoopModeChanged(guild_id=guild_id, text_channel_id=queue.text_channel_id, mode=mode)
            )

    async def shuffle(self, guild_id: DiscordSnowflake) -> Notification:
        async with self._lock_for(guild_id):
            queue = await self._require_queue(guild_id)
            count = queue.shuffle_upcoming(self._rng)
            logger.info(LogTemplates.QUEUE_SHUFFLED, count, guild_id)

            return await self._publish(
                Shuffled(guild_id=guild_id, text_channel_id=queue.text_channel_id, count=count)
            )

    # ── Engine and gateway events ───────────────────────────────────

    async def handle_track_finished(
        self, guild_id: DiscordSnowflake, playback_id: NonNegativeInt
    ) -> Notification | None:
        """Natural end of a track, reported by the audio engine."""
        async with self._lock_for(guild_id):
            queue = await self._registry.get(guild_id)
            if queue is None or queue.playback_id != playback_id:
                logger.debug(
                    LogTemplates.PLAYBACK_STALE_CALLBACK,
                    guild_id,
                    playback_id,
                    queue.playback_id if queue else None,
                )
                return None

            return await self._advance(queue, skipped=False)

    async def handle_channel_empty(self, guild_id: DiscordSnowflake) -> Notification | None:
        """Leave when nobody is left listening."""
        if not self._policy.leave_on_empty:
            return None

        async with self._lock_for(guild_id):
            queue = await self._registry.get(guild_id)
            if queue is None or not self._voice.current_members_empty(guild_id):
                return None

            notification = await self._publish(
                EmptyChannel(guild_id=guild_id, text_channel_id=queue.text_channel_id)
            )
            await self._destroy(queue, DestroyReason.EMPTY_CHANNEL)
            await self._voice.stop(guild_id)
            await self._voice.disconnect(guild_id)
            return notification

    async def handle_disconnect(self, guild_id: DiscordSnowflake) -> Notification | None:
        """The bot was removed from voice by someone else."""
        async with self._lock_for(guild_id):
            queue = await self._registry.get(guild_id)
            if queue is None:
                return None

            await self._destroy(queue, DestroyReason.DISCONNECTED)
            return await self._publish(
                Disconnected(guild_id=guild_id, text_channel_id=queue.text_channel_id)
            )

    async def snapshot(self, guild_id: DiscordSnowflake) -> GuildQueue | None:
        """Detached copy of the guild's queue for read-only views."""
        queue = await self._registry.get(guild_id)
        return queue.model_copy(deep=True) if queue is not None else None

    async def shutdown(self) -> None:
        for guild_id in await self._registry.guild_ids():
            async with self._lock_for(guild_id):
                queue = await self._registry.get(guild_id)
                if queue is not None:
                    await self._destroy(queue, DestroyReason.STOPPED)
                await self._voice.stop(guild_id)
                await self._voice.disconnect(guild_id)

    # ── Internals (caller holds the guild lock) ─────────────────────

    async def _advance(self, queue: GuildQueue, *, skipped: bool) -> Notification:
        replaying = not skipped and queue.loop_mode is LoopMode.TRACK
        if queue.advance(skipped=skipped) is None:
            return await self._finish(queue)

        if replaying and queue.current is not None:
            logger.debug(LogTemplates.TRACK_REPLAYED, queue.current.title, queue.guild_id)
            return await self._start_head(queue, announce=self._policy.announce_repeats)
        return await self._start_head(queue)

    async def _start_head(self, queue: GuildQueue, *, announce: bool = True) -> Notification:
        """Hand ``tracks[0]`` to the audio engine, discarding heads that fail to start."""
        guild_id = queue.guild_id

        for attempt in range(1, self._MAX_START_ATTEMPTS + 1):
            track = queue.current
            if track is None:
                break

            try:
                if not track.is_streamable:
                    track = await self._resolver.resolve_stream(track)
                    queue.tracks[0] = track

                queue.playback_id = next(self._playback_ids)
                started = await self._voice.play(
                    guild_id, track, volume=queue.volume, playback_id=queue.playback_id
                )
                if not started:
                    raise ExtractionError(ErrorMessages.VOICE_PLAY_FAILED.format(title=track.title))
            except (TrackNotFoundError, ExtractionError) as exc:
                logger.warning(
                    LogTemplates.PLAYBACK_START_RETRY,
                    track.title,
                    guild_id,
                    attempt,
                    self._MAX_START_ATTEMPTS,
                    exc.message,
                )
                queue.tracks.pop(0)
                await self._publish(
                    Errored(
                        guild_id=guild_id,
                        text_channel_id=queue.text_channel_id,
                        kind="playback",
                        message=exc.message,
                    )
                )
                continue

            queue.paused = False
            logger.info(LogTemplates.PLAYBACK_STARTED, track.title, guild_id, queue.playback_id)
            notification = NowPlaying(
                guild_id=guild_id,
                text_channel_id=queue.text_channel_id,
                track=track,
                remaining_count=queue.remaining_count,
            )
            if announce:
                await self._publish(notification)
            return notification
        else:
            if not queue.is_empty:
                logger.error(LogTemplates.PLAYBACK_RETRIES_EXHAUSTED, self._MAX_START_ATTEMPTS, guild_id)

        return await self._finish(queue)

    async def _finish(self, queue: GuildQueue) -> Notification:
        guild_id = queue.guild_id
        queue.clear()
        await self._destroy(queue, DestroyReason.FINISHED)
        await self._voice.stop(guild_id)
        if self._policy.leave_on_finish:
            await self._voice.disconnect(guild_id)

        return await self._publish(Finished(guild_id=guild_id, text_channel_id=queue.text_channel_id))

    async def _destroy(self, queue: GuildQueue, reason: DestroyReason) -> None:
        if await self._registry.remove(queue.guild_id, expected=queue):
            logger.info(LogTemplates.QUEUE_DESTROYED, queue.guild_id, reason.value)
