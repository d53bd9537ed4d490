"""Directory navigation and bookmark commands.

Each handler either returns the destination directory, which the CLI prints
on stdout for the shell wrapper, or returns None after printing
informational text:
    - Name search, parent, previous directory
    - Bookmark management (add, list, forget, forget all)
    - Interactive selection among bookmarks or subdirectories
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from changedir.core import nav as nav_core
from changedir.core.console import get_console, notice, warn
from changedir.core.result import Err, InvalidSelectionError, Ok
from changedir.core.selector import InteractiveSelector, labeled_table
from changedir.core.store import normalize_path

if TYPE_CHECKING:
    from changedir.main import AppState


def _resolver(state: AppState) -> nav_core.Resolver:
    return nav_core.Resolver(
        state.cwd,
        bookmarks=state.bookmarks.paths,
        history=state.history.entries,
        search_depth=state.config.search_depth,
    )


def _navigate(state: AppState, destination: Path) -> Path:
    """Record the move and return the canonical destination."""
    destination = normalize_path(destination)
    state.history.record_move(state.cwd, destination)
    return destination


def print_current(state: AppState) -> Path:
    """The current directory, without touching history."""
    return _resolver(state).print_current()


def go_to_name(state: AppState, name: str) -> Path:
    match _resolver(state).resolve(name):
        case Err(err):
            raise err
        case Ok(path):
            return _navigate(state, path)


def go_up(state: AppState) -> Path:
    match _resolver(state).up():
        case Err(err):
            raise err
        case Ok(path):
            return _navigate(state, path)


def go_back(state: AppState) -> Path:
    match _resolver(state).back():
        case Err(err):
            raise err
        case Ok(path):
            return _navigate(state, path)


def list_bookmarks(state: AppState) -> None:
    if not len(state.bookmarks):
        notice("No bookmarked directories.", style="yellow")
        return
    get_console().print(labeled_table(state.bookmarks.paths))


def bookmark_current(state: AppState) -> None:
    if state.bookmarks.add(state.cwd):
        notice(f"Bookmarked: {state.cwd}")
    else:
        state.logger.debug("Directory already bookmarked")
        warn("Current directory is already bookmarked.")


def forget_current(state: AppState) -> None:
    if state.bookmarks.remove(state.cwd):
        notice(f"Removed bookmark: {state.cwd}")
    else:
        state.logger.debug("Directory was not bookmarked")


def forget_all(state: AppState) -> None:
    if state.bookmarks.clear():
        notice("All bookmarks removed.")
    else:
        notice("No bookmarks to remove.", style="yellow")


def choose_bookmark(state: AppState, slot: str | None = None, stream: TextIO | None = None) -> Path:
    """Pick a bookmark by slot, prompting when no slot is given."""
    if not len(state.bookmarks):
        raise InvalidSelectionError("No bookmarked directories.")

    selector = InteractiveSelector(get_console(stderr=True), stream=stream)
    items = state.bookmarks.paths
    selected = selector.present(items) if slot is None else selector.choose(items, slot)
    return _navigate(state, selected)


def choose_subdirectory(state: AppState, stream: TextIO | None = None) -> Path:
    """Pick one of the current directory's subdirectories."""
    subdirs = nav_core.list_subdirectories(state.cwd, limit=state.config.subdir_limit)
    if not subdirs:
        raise InvalidSelectionError("No subdirectories found.")

    selector = InteractiveSelector(get_console(stderr=True), stream=stream)
    selected = selector.present(subdirs, display=lambda path: path.name)
    return _navigate(state, selected)
