"""Core shared infrastructure and navigation logic for changedir.

This package contains:
    - config: Settings for data file locations and search limits
    - console: Rich console output and logging
    - result: Result type and error hierarchy
    - error_middleware: Error formatting for the CLI
    - store: Bookmark/history persistence
    - slots: Positional slot labels
    - history: Most-recently-used history
    - nav: Directory resolution
    - selector: Interactive label selection
"""

from __future__ import annotations

from . import config, console

__all__ = ["config", "console"]
