"""Error types raised by the Stride core."""

from __future__ import annotations


class StrideError(Exception):
    """Base class for all Stride errors."""


class MalformedRecord(StrideError):
    """A contact has no usable name for bucketing."""

    def __init__(self, identifier: str, field: str) -> None:
        self.identifier = identifier
        self.field = field
        super().__init__(f"Contact '{identifier}' has an empty '{field}' field")


class SelectionCapacityExceeded(StrideError):
    """The selection already holds the maximum number of members."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"You are limited to {limit} members")


class UnknownIdentifier(StrideError):
    """An identifier that the roster never produced."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Unknown contact identifier: {identifier}")


class ConfigurationError(StrideError, ValueError):
    """Merged configuration failed validation."""
