"""
Result type and error hierarchy for changedir.

This module provides:
1. Result[T, E] type used by the resolver for explicit failure paths
2. Domain-specific exception hierarchy

Usage:
    from changedir.core.result import Err, NotFoundError, Ok, Result

    def find(name: str) -> Result[Path, NotFoundError]:
        if not candidate.is_dir():
            return Err(NotFoundError(f"Directory not found: {name}"))
        return Ok(candidate)

    match find("proj"):
        case Ok(path):
            print(path)
        case Err(err):
            print(err.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Represents a successful result containing a value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Represents a failed result containing an error."""

    error: E


Result = Ok[T] | Err[E]


# ---------------------------------------------------------------------------
# Domain-specific error hierarchy
# ---------------------------------------------------------------------------


class ChangeDirError(Exception):
    """Base exception for all changedir errors.

    Every failure that should end an invocation with a message on stderr and
    a non-zero exit status derives from this class.
    """

    def __init__(self, message: str, *, context: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class CapacityExceededError(ChangeDirError):
    """Raised when a bookmark is added to a full bookmark list."""


class ValidationError(ChangeDirError):
    """Raised for malformed user input."""


class InvalidLabelError(ValidationError):
    """Raised when a slot label is outside the alphabet or the list."""


class InvalidSelectionError(ValidationError):
    """Raised when an interactive or direct selection cannot be honoured.

    Examples:
    - Empty answer or end of input
    - More than one character
    - A label beyond the presented list
    """


class NavigationError(ChangeDirError):
    """Base class for failures to produce a destination directory."""


class NotFoundError(NavigationError):
    """Raised when the three-phase name search finds nothing."""


class AtRootError(NavigationError):
    """Raised when going up from the filesystem root."""


class EmptyHistoryError(NavigationError):
    """Raised when no previous directory is available."""


class FilesystemError(ChangeDirError):
    """Raised for I/O failures.

    Examples:
    - Data file present but unreadable or not valid text
    - Permission denied while saving
    - Current directory removed underneath the process
    """


class ConfigurationError(ChangeDirError):
    """Raised for settings that cannot be loaded or validated."""


__all__ = [
    # Result types
    "Ok",
    "Err",
    "Result",
    # Error hierarchy
    "ChangeDirError",
    "CapacityExceededError",
    "ValidationError",
    "InvalidLabelError",
    "InvalidSelectionError",
    "NavigationError",
    "NotFoundError",
    "AtRootError",
    "EmptyHistoryError",
    "FilesystemError",
    "ConfigurationError",
]
