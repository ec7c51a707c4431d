"""Base exception classes for domain-level errors.

Every failure a caller can recover from is a ``DomainError`` subclass with a
stable ``code``. The command dispatcher turns these into typed failure
results; anything that is not a ``DomainError`` is treated as unexpected.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class BusinessRuleViolationError(DomainError):
    """Raised when a business rule is violated."""

    def __init__(self, rule: str, message: str | None = None) -> None:
        msg = message or f"Business rule violated: {rule}"
        super().__init__(msg, code="BUSINESS_RULE_VIOLATION")
        self.rule = rule


# ── Controller failures ─────────────────────────────────────────────


class NotJoinableError(DomainError):
    """Raised when the caller's voice context cannot be used for playback."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "You need to be in a voice channel!", code="NOT_JOINABLE")


class ResolutionFailedError(DomainError):
    """Raised when a play target could not be turned into any track."""

    def __init__(self, query: str, message: str | None = None) -> None:
        super().__init__(message or f"Couldn't find anything for: {query}", code="RESOLUTION_FAILED")
        self.query = query


class EmptyQueueError(DomainError):
    """Raised when an operation needs an active queue (or more tracks than it has)."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Nothing is playing!", code="EMPTY_QUEUE")


class NoHistoryError(DomainError):
    """Raised by ``previous`` when no earlier track is retained."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "No previous song available.", code="NO_HISTORY")


class NoRecentSearchError(DomainError):
    """Raised when a numeric choice is made without a prior search."""

    def __init__(self, user_id: int, message: str | None = None) -> None:
        super().__init__(message or "No recent search found", code="NO_RECENT_SEARCH")
        self.user_id = user_id


class IndexOutOfRangeError(DomainError):
    """Raised when a 1-based choice exceeds the stored result count."""

    def __init__(self, index: int, available: int, message: str | None = None) -> None:
        msg = message or f"Choice {index} is out of range (1-{available})"
        super().__init__(msg, code="INDEX_OUT_OF_RANGE")
        self.index = index
        self.available = available


class InvalidArgumentError(DomainError):
    """Raised when a caller supplies an argument outside its allowed domain."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="INVALID_ARGUMENT")
        self.field = field


class SearchError(DomainError):
    """Raised when the external search capability fails."""

    def __init__(self, query: str, message: str | None = None) -> None:
        super().__init__(message or "Search failed. Please try again.", code="SEARCH_ERROR")
        self.query = query


# ── Resolver failures ───────────────────────────────────────────────


class TrackNotFoundError(DomainError):
    """Raised by a resolver when a query matches nothing."""

    def __init__(self, query: str) -> None:
        super().__init__(f"No results for: {query}", code="NOT_FOUND")
        self.query = query


class ExtractionError(DomainError):
    """Raised by a resolver when extraction fails; carries the raw extractor message."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="EXTRACTION_ERROR")
