"""CLI command handlers for changedir.

This package contains the user-facing actions behind the command flags:
    - nav: Bookmark management, interactive selection, and navigation
"""

from __future__ import annotations

from . import nav

__all__ = ["nav"]
