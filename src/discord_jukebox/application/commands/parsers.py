"""Turn raw input from each surface into an ``(operation, args)`` pair."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final

from discord_jukebox.application.commands.control_command import TEXT_ALIASES, Operation
from discord_jukebox.domain.shared.exceptions import InvalidArgumentError
from discord_jukebox.domain.shared.messages import ErrorMessages

ParsedCommand = tuple[Operation, tuple[str, ...]]

BUTTON_OPERATIONS: Final[dict[str, Operation]] = {
    "previous": Operation.PREVIOUS,
    "togglepause": Operation.PAUSE,
    "stop": Operation.STOP,
    "skip": Operation.SKIP,
    "queue": Operation.QUEUE,
}


def resolve_operation_name(name: str) -> Operation | None:
    """Map a command name or alias to its operation."""
    key = name.strip().lower()
    if key in TEXT_ALIASES:
        return TEXT_ALIASES[key]
    try:
        return Operation(key)
    except ValueError:
        return None


def parse_text_command(content: str, prefix: str) -> ParsedCommand | None:
    """Parse a prefixed chat message.

    Returns None for messages that are not commands for this bot, so the
    caller can ignore them silently.
    """
    if not content.startswith(prefix):
        return None

    tokens = content[len(prefix) :].split()
    if not tokens:
        return None

    operation = resolve_operation_name(tokens[0])
    if operation is None:
        return None
    return operation, tuple(tokens[1:])


def parse_slash_command(name: str, options: Mapping[str, object] | None = None) -> ParsedCommand:
    operation = resolve_operation_name(name)
    if operation is None:
        raise InvalidArgumentError(ErrorMessages.UNKNOWN_COMMAND.format(name=name), field="command")

    args: list[str] = []
    for value in (options or {}).values():
        if value is None:
            continue
        text = str(value).strip()
        if text:
            args.append(text)
    return operation, tuple(args)


def parse_button(custom_id: str) -> ParsedCommand:
    operation = BUTTON_OPERATIONS.get(custom_id)
    if operation is None:
        raise InvalidArgumentError(
            ErrorMessages.UNKNOWN_BUTTON.format(custom_id=custom_id), field="custom_id"
        )
    return operation, ()


def parse_volume(args: Sequence[str]) -> int:
    """Parse the volume argument; range checks happen on the queue."""
    if not args:
        raise InvalidArgumentError(ErrorMessages.VOLUME_NOT_A_NUMBER, field="volume")
    try:
        return int(args[0])
    except ValueError:
        raise InvalidArgumentError(ErrorMessages.VOLUME_NOT_A_NUMBER, field="volume") from None
