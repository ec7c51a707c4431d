"""
Unit Tests for the Application Command Model

Tests for:
- Text, slash and button parsers
- ControlCommand normalization
- CommandResult factories
"""

import pytest
from pydantic import ValidationError

from conftest import GUILD_ID
from discord_jukebox.application.commands.control_command import (
    CommandResult,
    CommandStatus,
    ControlCommand,
    Operation,
    RequesterContext,
)
from discord_jukebox.application.commands.parsers import (
    parse_button,
    parse_slash_command,
    parse_text_command,
    parse_volume,
    resolve_operation_name,
)
from discord_jukebox.domain.shared.exceptions import EmptyQueueError, InvalidArgumentError


class TestResolveOperationName:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("play", Operation.PLAY),
            ("P", Operation.PLAY),
            ("s", Operation.SEARCH),
            ("sk", Operation.SKIP),
            ("prev", Operation.PREVIOUS),
            ("q", Operation.QUEUE),
            ("vol", Operation.VOLUME),
            ("np", Operation.NOW_PLAYING),
            ("nowplaying", Operation.NOW_PLAYING),
            ("help", Operation.HELP),
        ],
    )
    def test_names_and_aliases(self, name, expected):
        assert resolve_operation_name(name) is expected

    def test_unknown(self):
        assert resolve_operation_name("dance") is None


class TestParseTextCommand:
    """Tests for prefixed chat messages."""

    def test_command_with_arguments(self):
        assert parse_text_command("!play never gonna", "!") == (
            Operation.PLAY,
            ("never", "gonna"),
        )

    def test_alias_without_arguments(self):
        assert parse_text_command("!sk", "!") == (Operation.SKIP, ())

    def test_custom_prefix(self):
        assert parse_text_command("$$vol 30", "$$") == (Operation.VOLUME, ("30",))

    @pytest.mark.parametrize("content", ["hello there", "!", "!   ", "!dance", "?play x"])
    def test_ignored_messages(self, content):
        """Should return None for anything that is not one of our commands."""
        assert parse_text_command(content, "!") is None


class TestParseSlashCommand:
    def test_options_become_args(self):
        assert parse_slash_command("play", {"query": " lofi "}) == (Operation.PLAY, ("lofi",))

    def test_integer_option(self):
        assert parse_slash_command("volume", {"level": 40}) == (Operation.VOLUME, ("40",))

    def test_missing_options_skipped(self):
        assert parse_slash_command("skip", {"unused": None}) == (Operation.SKIP, ())
        assert parse_slash_command("queue") == (Operation.QUEUE, ())

    def test_unknown_command(self):
        with pytest.raises(InvalidArgumentError):
            parse_slash_command("dance", {})


class TestParseButton:
    @pytest.mark.parametrize(
        ("custom_id", "operation"),
        [
            ("previous", Operation.PREVIOUS),
            ("togglepause", Operation.PAUSE),
            ("stop", Operation.STOP),
            ("skip", Operation.SKIP),
            ("queue", Operation.QUEUE),
        ],
    )
    def test_known_buttons(self, custom_id, operation):
        assert parse_button(custom_id) == (operation, ())

    def test_unknown_button(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_button("launch")

        assert exc_info.value.field == "custom_id"


class TestParseVolume:
    def test_number(self):
        assert parse_volume(["75"]) == 75

    def test_out_of_range_still_parses(self):
        """Should leave range checks to the queue."""
        assert parse_volume(["150"]) == 150

    @pytest.mark.parametrize("args", [[], ["loud"], ["4.5"]])
    def test_invalid(self, args):
        with pytest.raises(InvalidArgumentError):
            parse_volume(args)


class TestControlCommand:
    def test_args_are_stripped(self, requester):
        command = ControlCommand(
            guild_id=GUILD_ID,
            operation=Operation.PLAY,
            args=["  lofi ", "", "beats"],
            requester=requester,
        )

        assert command.args == ("lofi", "beats")
        assert command.argument_text == "lofi beats"

    def test_requester_requires_positive_ids(self):
        with pytest.raises(ValidationError):
            RequesterContext(user_id=0, user_name="x")

    def test_only_play_needs_voice(self):
        assert Operation.PLAY.needs_voice
        assert not Operation.SKIP.needs_voice


class TestCommandResult:
    def test_failure_carries_code(self):
        result = CommandResult.failure(Operation.SKIP, EmptyQueueError())

        assert result.status is CommandStatus.FAILURE
        assert not result.is_success
        assert result.error_code == "EMPTY_QUEUE"
        assert result.message == "Nothing is playing!"

    def test_unexpected(self):
        result = CommandResult.unexpected(Operation.PLAY, "boom")

        assert result.error_code == "UNEXPECTED"
        assert result.message == "boom"

    def test_success_defaults(self):
        result = CommandResult.success(Operation.HELP)

        assert result.is_success
        assert result.references == []
        assert result.notification is None
