"""Shared validators for Discord-specific values used by settings and models."""

from __future__ import annotations

from discord_jukebox.domain.shared.constants import LimitConstants
from discord_jukebox.domain.shared.messages import ErrorMessages


def validate_discord_snowflake(value: int) -> int:
    """Validate a Discord snowflake ID.

    Discord snowflake IDs are 64-bit unsigned integers representing unique
    identifiers for users, guilds, channels, messages, etc.

    Args:
        value: The snowflake ID to validate.

    Returns:
        The validated snowflake ID.

    Raises:
        ValueError: If the snowflake ID is invalid.
    """
    if value <= 0:
        raise ValueError(ErrorMessages.INVALID_SNOWFLAKE)
    if value >= LimitConstants.MAX_DISCORD_SNOWFLAKE:
        raise ValueError(ErrorMessages.SNOWFLAKE_TOO_LARGE)
    return value


def is_valid_volume(value: int) -> bool:
    """Return True when *value* is an accepted volume percentage."""
    return LimitConstants.MIN_VOLUME <= value <= LimitConstants.MAX_VOLUME
