"""
Application Commands (CQRS Write Side)

The surface-independent command model and the parsers that build it.
"""

from discord_jukebox.application.commands.control_command import (
    TEXT_ALIASES,
    CommandResult,
    CommandStatus,
    ControlCommand,
    Operation,
    RequesterContext,
)
from discord_jukebox.application.commands.parsers import (
    BUTTON_OPERATIONS,
    parse_button,
    parse_slash_command,
    parse_text_command,
    parse_volume,
    resolve_operation_name,
)

__all__ = [
    # Model
    "Operation",
    "TEXT_ALIASES",
    "RequesterContext",
    "ControlCommand",
    "CommandStatus",
    "CommandResult",
    # Parsers
    "BUTTON_OPERATIONS",
    "resolve_operation_name",
    "parse_text_command",
    "parse_slash_command",
    "parse_button",
    "parse_volume",
]
