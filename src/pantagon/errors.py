"""Exception types raised by Pantagon services."""

from __future__ import annotations

from typing import Mapping


class PantagonError(Exception):
    """Base class for every error raised deliberately by the application."""


class StoreError(PantagonError, RuntimeError):
    """The backing store failed to fetch, insert, or delete records."""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.message = message


class ValidationError(PantagonError, ValueError):
    """User supplied data was rejected; nothing was written."""

    def __init__(self, message: str, errors: Mapping[str, list[str]] | None = None):
        super().__init__(message)
        self.message = message
        self.errors: dict[str, list[str]] = {k: list(v) for k, v in (errors or {}).items()}

    @classmethod
    def from_errors(cls, errors: Mapping[str, list[str]]) -> "ValidationError":
        first = next((msgs[0] for msgs in errors.values() if msgs), "Invalid input.")
        return cls(first, errors)


class TradeImportError(ValidationError):
    """A structured-text trade batch could not be parsed or validated."""


class RecordNotFoundError(PantagonError, LookupError):
    """A record addressed by id does not exist."""
