"""
Shared Domain Kernel

Contains exceptions, constrained types and the event bus shared across the domain.
"""

from discord_jukebox.domain.shared.events import DomainEvent, EventBus
from discord_jukebox.domain.shared.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    EmptyQueueError,
    ExtractionError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    NoHistoryError,
    NoRecentSearchError,
    NotJoinableError,
    ResolutionFailedError,
    SearchError,
    TrackNotFoundError,
)

__all__ = [
    "DomainEvent",
    "EventBus",
    "DomainError",
    "BusinessRuleViolationError",
    "NotJoinableError",
    "ResolutionFailedError",
    "EmptyQueueError",
    "NoHistoryError",
    "NoRecentSearchError",
    "IndexOutOfRangeError",
    "InvalidArgumentError",
    "SearchError",
    "TrackNotFoundError",
    "ExtractionError",
]
