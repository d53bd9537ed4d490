"""changedir - directory bookmarks and quick navigation for the shell.

This package provides the core of the `changedir` command-line tool: a small
bookmark store, a bounded visit history, and the name resolver that a
wrapping shell function uses to pick the directory to change into.

Exports:
    __version__: Package version string.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.3.0"
