"""
Unit Tests for the Discord presentation layer

Covers the embed builders, ReplyBuilder and NotificationRenderer. Views need a
running event loop, so anything that can build one is tested asynchronously.
"""

from unittest.mock import MagicMock

import discord
import pytest

from conftest import GUILD_ID, TEXT_CHANNEL_ID, USER_ID, build_reference, build_track
from discord_jukebox.application.commands.control_command import CommandResult, Operation
from discord_jukebox.application.queries.get_current import NowPlayingInfo
from discord_jukebox.application.queries.get_queue import QueueInfo
from discord_jukebox.config.settings import UISettings
from discord_jukebox.domain.music.events import (
    Disconnected,
    EmptyChannel,
    Errored,
    Finished,
    LoopModeChanged,
    NowPlaying,
    Paused,
    PlaylistAdded,
    Resumed,
    Shuffled,
    Stopped,
    TrackAdded,
    VolumeChanged,
)
from discord_jukebox.domain.music.value_objects import LoopMode
from discord_jukebox.domain.shared.enums import InputSurface
from discord_jukebox.domain.shared.exceptions import NoRecentSearchError, NotJoinableError
from discord_jukebox.infrastructure.discord.services.embeds import (
    HELP_ENTRIES,
    build_compact_queue_embed,
    build_help_embed,
    build_now_playing_embed,
    build_queue_embed,
    build_search_embed,
    format_requester,
)
from discord_jukebox.infrastructure.discord.services.notification_renderer import (
    NotificationRenderer,
)
from discord_jukebox.infrastructure.discord.services.reply_builder import ReplyBuilder
from discord_jukebox.infrastructure.discord.views.control_panel_view import ControlPanelView


def _queue_info(upcoming_count: int = 2) -> QueueInfo:
    return QueueInfo(
        guild_id=GUILD_ID,
        current_track=build_track("now"),
        upcoming=[build_track(f"u{i}") for i in range(upcoming_count)],
        loop_mode=LoopMode.QUEUE,
        volume=70,
        total_duration=180 * (upcoming_count + 1),
        total_duration_formatted="9:00",
    )


@pytest.fixture
def builder():
    return ReplyBuilder(prefix="!", ui=UISettings())


# ============================================================================
# Embeds
# ============================================================================


class TestEmbeds:
    def test_requester_mention_preferred(self):
        track = build_track("a").with_requester(USER_ID, "Listener")

        assert format_requester(track) == f"<@{USER_ID}>"
        assert format_requester(build_track("a")) == "Unknown"

    def test_now_playing(self):
        track = build_track("a").with_requester(USER_ID, "Listener")

        embed = build_now_playing_embed(track, 3)

        assert embed.title == "🎵 Now Playing"
        assert embed.description == "[Track A](https://www.youtube.com/watch?v=a)"
        assert [f.name for f in embed.fields] == ["Duration", "Requested by"]
        assert embed.fields[0].value == "3:00"
        assert embed.thumbnail.url == "https://img.example/a.jpg"
        assert embed.footer.text == "3 track(s) remaining in queue"

    def test_queue(self):
        embed = build_queue_embed(_queue_info())

        names = [f.name for f in embed.fields]
        assert names == ["🎵 Now Playing", "Up Next (2 tracks)", "🔁 Loop", "🔊 Volume"]
        assert "**1.** [Track U0]" in embed.fields[1].value
        assert embed.fields[2].value == "Queue 🔁"
        assert embed.fields[3].value == "70%"
        assert embed.footer.text == "Total length: 9:00"

    def test_queue_pages_long_listing(self):
        """Should list one page of upcoming tracks and count the rest."""
        embed = build_queue_embed(_queue_info(upcoming_count=14), page_size=10)

        listing = embed.fields[1].value
        assert "**10.**" in listing
        assert "**11.**" not in listing
        assert listing.endswith("...and 4 more")

    def test_compact_queue_without_upcoming(self):
        embed = build_compact_queue_embed(_queue_info(upcoming_count=0))

        assert embed.description == "No upcoming songs."

    def test_search(self):
        references = [build_reference("aaaaaaaaaaa", "First"), build_reference("bbbbbbbbbbb", "Second")]

        embed = build_search_embed("lofi", references, prefix="!")

        assert embed.title == "🔍 Search Results for: lofi"
        assert "**1.** [First](https://www.youtube.com/watch?v=aaaaaaaaaaa)" in embed.description
        assert "└ Uploader • 3:20" in embed.description
        assert embed.footer.text == "Type !play 1-2 to play a result"

    def test_help_lists_every_command(self):
        embed = build_help_embed(prefix="?")

        assert len(embed.fields) == len(HELP_ENTRIES)
        assert "`?prefix`" in embed.description


# ============================================================================
# ReplyBuilder
# ============================================================================


class TestReplyBuilder:
    def test_play_success_is_silent(self, builder):
        notification = NowPlaying(guild_id=GUILD_ID, track=build_track("a"))
        result = CommandResult.success(Operation.PLAY, notification=notification)

        assert builder.build(result).is_empty

    @pytest.mark.parametrize(
        ("notification", "expected"),
        [
            (Paused(guild_id=GUILD_ID), "⏸ Paused!"),
            (Resumed(guild_id=GUILD_ID), "▶️ Resumed!"),
        ],
    )
    def test_pause_toggle(self, builder, notification, expected):
        result = CommandResult.success(Operation.PAUSE, notification=notification)

        assert builder.build(result).content == expected

    @pytest.mark.parametrize(
        ("operation", "expected"),
        [
            (Operation.SKIP, "⏭ Skipped!"),
            (Operation.PREVIOUS, "⏮ Playing previous song!"),
            (Operation.STOP, "⏹ Stopped and cleared the queue!"),
            (Operation.SHUFFLE, "🔀 Queue shuffled!"),
        ],
    )
    def test_acknowledgements(self, builder, operation, expected):
        assert builder.build(CommandResult.success(operation)).content == expected

    def test_volume(self, builder):
        result = CommandResult.success(
            Operation.VOLUME, notification=VolumeChanged(guild_id=GUILD_ID, volume=30)
        )

        assert builder.build(result).content == "🔊 Volume set to **30%**"

    def test_loop(self, builder):
        result = CommandResult.success(
            Operation.LOOP, notification=LoopModeChanged(guild_id=GUILD_ID, mode=LoopMode.TRACK)
        )

        assert builder.build(result).content == "🔁 Loop mode: **Song 🔂**"

    def test_search_results(self, builder):
        result = CommandResult.success(Operation.SEARCH, references=[build_reference("aaaaaaaaaaa")])

        reply = builder.build(result, query="lofi")

        assert reply.embed is not None
        assert reply.embed.title == "🔍 Search Results for: lofi"

    def test_search_without_results(self, builder):
        reply = builder.build(CommandResult.success(Operation.SEARCH))

        assert reply.content == "❌ No results found."

    @pytest.mark.parametrize(
        ("surface", "expected"),
        [(InputSurface.TEXT, "📋 The queue is empty!"), (InputSurface.BUTTON, "📋 Queue is empty.")],
    )
    def test_empty_queue(self, builder, surface, expected):
        result = CommandResult.success(Operation.QUEUE, queue=QueueInfo(guild_id=GUILD_ID))

        assert builder.build(result, surface=surface).content == expected

    def test_queue_button_is_compact(self, builder):
        """Should answer the queue button with the short upcoming-only listing."""
        result = CommandResult.success(Operation.QUEUE, queue=_queue_info())

        full = builder.build(result, surface=InputSurface.SLASH)
        compact = builder.build(result, surface=InputSurface.BUTTON)

        assert full.embed.title == "📋 Music Queue"
        assert compact.embed.title == "📋 Queue"

    def test_now_playing(self, builder):
        info = NowPlayingInfo(guild_id=GUILD_ID, track=build_track("a"), remaining_count=2)

        reply = builder.build(CommandResult.success(Operation.NOW_PLAYING, now_playing=info))

        assert reply.embed.footer.text == "2 track(s) remaining in queue"

    def test_help(self, builder):
        reply = builder.build(CommandResult.success(Operation.HELP))

        assert reply.embed.title == "🎵 Music Bot Commands"

    def test_domain_error(self, builder):
        result = CommandResult.failure(Operation.PLAY, NotJoinableError())

        assert builder.build(result).content == "❌ You need to be in a voice channel!"

    def test_no_recent_search_mentions_prefix(self, builder):
        result = CommandResult.failure(Operation.PLAY, NoRecentSearchError(USER_ID))

        assert builder.build(result).content == (
            "❌ No recent search found. Use `!search <query>` first."
        )

    def test_unexpected_error(self, builder):
        result = CommandResult.unexpected(Operation.STOP, "socket closed")

        assert builder.build(result).content == "❌ An error occurred: socket closed"

    def test_loading_text(self, builder):
        assert builder.loading_text("lofi") == "🔍 Loading **lofi**..."


# ============================================================================
# NotificationRenderer
# ============================================================================


@pytest.fixture
def text_channel():
    return MagicMock(spec=discord.TextChannel)


@pytest.fixture
def renderer(event_bus, text_channel):
    bot = MagicMock()
    bot.get_channel.return_value = text_channel
    return NotificationRenderer(bot=bot, event_bus=event_bus, prefix="!", ui=UISettings())


class TestNotificationRenderer:
    @pytest.mark.asyncio
    async def test_now_playing_posts_embed_with_controls(self, renderer, event_bus, text_channel):
        renderer.start()

        await event_bus.publish(
            NowPlaying(
                guild_id=GUILD_ID,
                text_channel_id=TEXT_CHANNEL_ID,
                track=build_track("a"),
                remaining_count=1,
            )
        )

        kwargs = text_channel.send.await_args.kwargs
        assert kwargs["embed"].title == "🎵 Now Playing"
        assert isinstance(kwargs["view"], ControlPanelView)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("notification", "expected"),
        [
            (
                TrackAdded(guild_id=GUILD_ID, track=build_track("a"), position=2),
                "✅ Added **Track A** to the queue! Position: #2",
            ),
            (
                PlaylistAdded(guild_id=GUILD_ID, name="Road Trip", count=3),
                "✅ Added playlist **Road Trip** (3 songs) to the queue!",
            ),
            (Finished(guild_id=GUILD_ID), "✅ Queue finished! Use `!play` to add more songs."),
            (Disconnected(guild_id=GUILD_ID), "👋 Disconnected from voice channel."),
            (EmptyChannel(guild_id=GUILD_ID), "🔇 Voice channel is empty, leaving..."),
        ],
    )
    async def test_text_notifications(self, renderer, notification, expected):
        content, embed, view = renderer.render(notification)

        assert content == expected
        assert embed is None
        assert view is None

    @pytest.mark.asyncio
    async def test_error_is_summarized(self, renderer):
        """Should keep only the useful first line of long error text."""
        notification = Errored(
            guild_id=GUILD_ID,
            kind="playback",
            message="WARNING: retry\nERROR: Video unavailable\nmore detail",
        )

        content, _, _ = renderer.render(notification)

        assert content == "❌ An error occurred: ERROR: Video unavailable"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "notification",
        [
            Paused(guild_id=GUILD_ID),
            Resumed(guild_id=GUILD_ID),
            Stopped(guild_id=GUILD_ID),
            Shuffled(guild_id=GUILD_ID, count=3),
            VolumeChanged(guild_id=GUILD_ID, volume=10),
            LoopModeChanged(guild_id=GUILD_ID, mode=LoopMode.OFF),
        ],
    )
    async def test_acknowledged_notifications_are_not_posted(
        self, renderer, event_bus, text_channel, notification
    ):
        renderer.start()

        await event_bus.publish(notification.model_copy(update={"text_channel_id": TEXT_CHANNEL_ID}))

        text_channel.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_without_channel_nothing_is_sent(self, renderer, text_channel):
        await renderer.on_notification(Finished(guild_id=GUILD_ID))

        text_channel.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_send_failure_is_logged(self, renderer, text_channel, caplog):
        response = MagicMock(status=403, reason="Forbidden")
        text_channel.send.side_effect = discord.Forbidden(response, "Missing Permissions")

        await renderer.on_notification(Finished(guild_id=GUILD_ID, text_channel_id=TEXT_CHANNEL_ID))

        assert "Missing Permissions" in caplog.text

    @pytest.mark.asyncio
    async def test_stop_unsubscribes(self, renderer, event_bus, text_channel):
        renderer.start()
        renderer.start()
        renderer.stop()

        await event_bus.publish(Finished(guild_id=GUILD_ID, text_channel_id=TEXT_CHANNEL_ID))

        text_channel.send.assert_not_awaited()
