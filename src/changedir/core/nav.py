"""Directory resolution core logic.

Turns a query into one existing directory:
    - Three-phase name search (bookmarks, children, ancestors)
    - Parent directory
    - Previous directory from history
    - Subdirectory listing for interactive selection

Resolution failures are returned as ``Err`` values rather than raised, so
callers decide how to report them.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from changedir.core.config import ANCESTOR_SEARCH_DEPTH, MAX_SUBDIRS
from changedir.core.result import (
    AtRootError,
    EmptyHistoryError,
    Err,
    FilesystemError,
    NavigationError,
    NotFoundError,
    Ok,
    Result,
)

logger = logging.getLogger(__name__)


def _is_plain_name(query: str) -> bool:
    if not query or query in (".", ".."):
        return False
    separators = {os.sep} | ({os.altsep} if os.altsep else set())
    return not any(sep in query for sep in separators)


def current_directory() -> Path:
    """Return the process working directory in canonical form."""
    try:
        return Path.cwd().resolve()
    except OSError as exc:
        raise FilesystemError(
            "Cannot determine the current directory", context={"error": str(exc)}
        ) from exc


def list_subdirectories(root: Path, limit: int = MAX_SUBDIRS) -> list[Path]:
    """Immediate subdirectories of ``root`` sorted by name, at most ``limit``.

    Entries keep their listed names; a symlinked subdirectory is shown under
    the link name and canonicalized once it is chosen.
    """
    try:
        with os.scandir(root) as it:
            names = sorted(entry.name for entry in it if _entry_is_dir(entry))
    except OSError as exc:
        raise FilesystemError(
            f"Cannot list {root}", context={"error": str(exc)}
        ) from exc

    if len(names) > limit:
        logger.debug("Offering %d of %d subdirectories", limit, len(names))
    return [root / name for name in names[:limit]]


def _entry_is_dir(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


class Resolver:
    """Resolves queries relative to a working directory."""

    def __init__(
        self,
        cwd: Path,
        bookmarks: Sequence[Path] = (),
        history: Sequence[Path] = (),
        search_depth: int = ANCESTOR_SEARCH_DEPTH,
    ) -> None:
        self.cwd = cwd
        self.bookmarks = bookmarks
        self.history = history
        self.search_depth = search_depth

    def resolve(self, query: str) -> Result[Path, NavigationError]:
        """Find a directory named ``query``.

        Precedence, first match wins:
            1. A bookmark whose last component is ``query``
            2. ``cwd / query``
            3. For each ancestor up to ``search_depth`` levels, shallowest
               first: ``ancestor / query``, then the ancestor itself
        """
        logger.debug("Searching for directory %r from %s", query, self.cwd)
        if not _is_plain_name(query):
            return Err(NotFoundError(f"Directory not found: {query}"))

        for finder in (self._match_bookmark, self._match_child, self._match_ancestor):
            found = finder(query)
            if found is not None:
                return Ok(found)

        logger.debug("Directory %r not found in any location", query)
        return Err(
            NotFoundError(
                f"Directory not found: {query}",
                context={"searched_levels": self.search_depth},
            )
        )

    def _match_bookmark(self, query: str) -> Path | None:
        for bookmark in self.bookmarks:
            if bookmark.name != query:
                continue
            if bookmark.is_dir():
                logger.debug("Found in bookmarks: %s", bookmark)
                return bookmark
            logger.debug("Bookmark %s no longer exists, skipping", bookmark)
        return None

    def _match_child(self, query: str) -> Path | None:
        candidate = self.cwd / query
        if candidate.is_dir():
            logger.debug("Found in current directory: %s", candidate)
            return candidate.resolve()
        return None

    def _match_ancestor(self, query: str) -> Path | None:
        ancestor = self.cwd
        for depth in range(1, self.search_depth + 1):
            parent = ancestor.parent
            if parent == ancestor:
                logger.debug("Reached filesystem root at depth %d", depth)
                break
            ancestor = parent

            candidate = ancestor / query
            logger.debug("Checking depth %d: %s", depth, candidate)
            if candidate.is_dir():
                return candidate.resolve()
            if ancestor.name == query:
                logger.debug("Ancestor at depth %d is named %r", depth, query)
                return ancestor
        return None

    def up(self) -> Result[Path, NavigationError]:
        parent = self.cwd.parent
        if parent == self.cwd:
            return Err(AtRootError("Already at root directory."))
        return Ok(parent)

    def back(self) -> Result[Path, NavigationError]:
        """Most recent history entry other than ``cwd`` that still exists."""
        for entry in self.history:
            if entry == self.cwd:
                continue
            if not entry.is_dir():
                logger.debug("Previous directory %s no longer exists, skipping", entry)
                continue
            return Ok(entry)
        return Err(EmptyHistoryError("No directory history."))

    def print_current(self) -> Path:
        return self.cwd
