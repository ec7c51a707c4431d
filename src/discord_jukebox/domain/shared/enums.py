"""Shared string enumerations for type-safe comparisons across layers."""

from __future__ import annotations

from enum import StrEnum


class InputSurface(StrEnum):
    """Where a control command came from."""

    TEXT = "text"
    SLASH = "slash"
    BUTTON = "button"


class DestroyReason(StrEnum):
    """Why a guild queue was removed from the registry."""

    FINISHED = "finished"
    STOPPED = "stopped"
    EMPTY_CHANNEL = "empty_channel"
    DISCONNECTED = "disconnected"
