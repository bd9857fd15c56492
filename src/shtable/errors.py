"""shtable error hierarchy."""

from __future__ import annotations

from typing import Any


class ShTableError(Exception):
    """Base exception for all shtable errors.

    Attributes:
        message: Human readable description of the failure.
        details: Extra context passed as keyword arguments.
    """

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if not self.details:
            return self.message
        extra = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} ({extra})"


class InvalidArgumentError(ShTableError):
    """Raised when a table or row is given no cells, or a cell is not text."""


class ColumnCountMismatchError(ShTableError):
    """Raised when a row has a different number of cells than the header."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            "Incorrect number of cells in a table row",
            expected=expected,
            actual=actual,
        )
        self.expected = expected
        self.actual = actual


class AllocationError(ShTableError):
    """Raised when copying cells into table storage runs out of memory."""


class InternalError(ShTableError):
    """Raised when a width measurement returns an impossible value."""


class ConfigurationError(ShTableError):
    """Raised for an unreadable or invalid render configuration."""
