"""
Error types raised by loading and query evaluation.
"""
from __future__ import annotations


class TrackAnalyticsError(Exception):
    """Base class for all track analytics errors."""


class ValidationError(TrackAnalyticsError, ValueError):
    """A raw row has a field that cannot be coerced to its declared type."""

    def __init__(self, row: int, field: str, value, reason: str = "invalid value") -> None:
        self.row = row
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"row {row}: {field}={value!r} ({reason})")


class UnknownQueryError(TrackAnalyticsError, KeyError):
    """The requested catalog entry does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown query: {self.name}"


class EmptyInputError(TrackAnalyticsError, ValueError):
    """A global aggregate was requested over zero values."""

    def __init__(self, query: str, detail: str = "no records to aggregate") -> None:
        self.query = query
        super().__init__(f"{query}: {detail}")
