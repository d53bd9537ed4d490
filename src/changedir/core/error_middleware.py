"""
Centralized error formatting for the CLI.

Every ChangeDirError that ends an invocation is turned into a FormattedError
here, then rendered as Rich markup on the stderr console. Handlers wrap I/O
failures in FilesystemError before they get this far.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from rich.markup import escape

from changedir.core.result import (
    CapacityExceededError,
    ChangeDirError,
    ConfigurationError,
    FilesystemError,
    NavigationError,
    ValidationError,
)


class ErrorSeverity(Enum):
    """Severity levels for error display."""

    WARNING = auto()
    ERROR = auto()


@dataclass(frozen=True, slots=True)
class FormattedError:
    """A formatted error ready for display."""

    message: str
    severity: ErrorSeverity
    code: str
    details: dict[str, Any]
    traceback: str | None = None


def _error_code(exc: ChangeDirError) -> str:
    """Derive an error code from exception type."""
    if isinstance(exc, CapacityExceededError):
        return "CAPACITY_EXCEEDED"
    if isinstance(exc, ValidationError):
        return "INVALID_SELECTION"
    if isinstance(exc, NavigationError):
        return "NAVIGATION_ERROR"
    if isinstance(exc, FilesystemError):
        return "FILESYSTEM_ERROR"
    if isinstance(exc, ConfigurationError):
        return "CONFIG_ERROR"
    return "CHANGEDIR_ERROR"


def _severity(exc: ChangeDirError) -> ErrorSeverity:
    """User mistakes are warnings; I/O and settings failures are errors."""
    if isinstance(exc, (ValidationError, NavigationError, CapacityExceededError)):
        return ErrorSeverity.WARNING
    return ErrorSeverity.ERROR


def format_error(
    exc: ChangeDirError,
    *,
    include_traceback: bool = False,
) -> FormattedError:
    """Format an exception into a structured error.

    Args:
        exc: The exception to format
        include_traceback: Whether to include full traceback (for --verbose)

    Returns:
        FormattedError ready for display
    """
    tb = None
    if include_traceback:
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    return FormattedError(
        message=exc.message,
        severity=_severity(exc),
        code=_error_code(exc),
        details=dict(exc.context),
        traceback=tb,
    )


def format_for_cli(error: FormattedError) -> str:
    """Format error for CLI display with Rich markup."""
    color_map = {
        ErrorSeverity.WARNING: "yellow",
        ErrorSeverity.ERROR: "red",
    }
    color = color_map[error.severity]

    parts = [f"[{color}]{error.code}[/{color}]: {escape(error.message)}"]

    if error.details:
        detail_lines = [f"  {k}: {escape(str(v))}" for k, v in error.details.items()]
        parts.append("\n".join(detail_lines))

    if error.traceback:
        parts.append(f"\n[dim]{escape(error.traceback)}[/dim]")

    return "\n".join(parts)


__all__ = [
    "ErrorSeverity",
    "FormattedError",
    "format_error",
    "format_for_cli",
]
