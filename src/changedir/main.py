from __future__ import annotations

import logging
import signal
from dataclasses import dataclass
from pathlib import Path
from types import FrameType

import typer
from rich.markup import escape
from rich.panel import Panel

from . import __version__
from .commands import nav
from .core.config import AppConfig, load_config
from .core.console import get_console, setup_logging, warn
from .core.error_middleware import format_error, format_for_cli
from .core.history import HistoryTracker
from .core.nav import current_directory
from .core.result import ChangeDirError
from .core.store import BookmarkList, PathStore, StoreKind, normalize_path

app = typer.Typer(
    help="changedir: directory bookmarks and quick navigation.",
    add_completion=False,
)

HELP_OPTIONS = {"help_option_names": ["-h", "--help", "-?"]}


class ApplicationLifecycle:
    """Signal handling for a single invocation.

    An interrupted invocation (typically while waiting at the selection
    prompt) exits without printing a path and without saving.
    """

    def __init__(self) -> None:
        self._shutdown_requested: bool = False

    def handle_shutdown(self, signum: int, frame: FrameType | None) -> None:
        if not self._shutdown_requested:
            self._shutdown_requested = True
            warn("\nCancelled.")
        raise SystemExit(128 + signum)

    def register_signal_handlers(self) -> None:
        signal.signal(signal.SIGINT, self.handle_shutdown)
        signal.signal(signal.SIGTERM, self.handle_shutdown)


@dataclass
class AppState:
    config: AppConfig
    logger: logging.Logger
    store: PathStore
    bookmarks: BookmarkList
    history: HistoryTracker
    cwd: Path

    @classmethod
    def load(cls, config: AppConfig, app_logger: logging.Logger) -> AppState:
        store = PathStore.from_config(config)
        return cls(
            config=config,
            logger=app_logger,
            store=store,
            bookmarks=BookmarkList(store.load(StoreKind.BOOKMARKS)),
            history=HistoryTracker(
                (normalize_path(entry) for entry in store.load(StoreKind.HISTORY)),
                limit=config.history_limit,
            ),
            cwd=current_directory(),
        )

    def flush(self) -> None:
        """Write back whichever lists changed during this invocation."""
        if self.bookmarks.dirty:
            self.store.save(StoreKind.BOOKMARKS, self.bookmarks.paths)
            self.bookmarks.dirty = False
        if self.history.dirty:
            self.store.save(StoreKind.HISTORY, self.history.entries)
            self.history.dirty = False


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _dispatch(
    state: AppState,
    name: str | None,
    *,
    list_: bool,
    bookmark: bool,
    forget: bool,
    forget_all: bool,
    choose: bool,
    back: bool,
    up: bool,
    down: bool,
) -> Path | None:
    if list_:
        return nav.list_bookmarks(state)
    if bookmark:
        return nav.bookmark_current(state)
    if forget:
        return nav.forget_current(state)
    if forget_all:
        return nav.forget_all(state)
    if choose:
        return nav.choose_bookmark(state, name)
    if back:
        return nav.go_back(state)
    if up:
        return nav.go_up(state)
    if down:
        return nav.choose_subdirectory(state)
    if name is not None:
        return nav.go_to_name(state, name)
    return nav.print_current(state)


@app.command(context_settings=HELP_OPTIONS)
def main(
    name: str | None = typer.Argument(
        None,
        metavar="[NAME|LABEL]",
        help="Directory name to change to, or the slot label for --choose.",
    ),
    list_: bool = typer.Option(False, "--list", "-l", help="List all bookmarked directories."),
    bookmark: bool = typer.Option(False, "--bookmark", help="Bookmark the current directory."),
    forget: bool = typer.Option(
        False, "--forget", "-f", help="Forget the current directory if bookmarked."
    ),
    forget_all: bool = typer.Option(
        False, "--forget-all", "-F", help="Forget all bookmarked directories."
    ),
    choose: bool = typer.Option(
        False, "--choose", "-c", help="Choose a bookmark, by LABEL or interactively."
    ),
    back: bool = typer.Option(
        False, "--back", "-b", "-back", help="Change to the previous directory."
    ),
    up: bool = typer.Option(False, "--up", "-u", help="Change up one directory level."),
    down: bool = typer.Option(False, "--down", "-d", help="List and select a subdirectory."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output on stderr."),
    config: Path | None = typer.Option(
        None, "--config", help="Path to a changedir settings file (TOML or JSON)."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the changedir version.",
    ),
) -> None:
    """Resolve a directory and print it for the shell wrapper to cd into.

    Navigation commands print exactly one path on stdout; listing and
    bookmark commands print informational text only.
    """
    loaded_config, meta = load_config(config_path=config)
    app_logger = setup_logging(level=loaded_config.log_level, verbose=verbose)
    app_logger.debug("Verbose mode enabled")

    if meta.error:
        get_console(stderr=True).print(
            Panel(
                f"[bold red]Configuration Error - Safe Mode Active[/bold red]\n\n"
                f"Failed to load {escape(str(meta.path))}:\n{escape(meta.error)}\n\n"
                f"[yellow]Using default settings.[/yellow]",
                border_style="red",
            )
        )
    else:
        app_logger.debug(
            "Loaded settings from %s (file: %s, env overrides: %s)",
            meta.path,
            meta.file_loaded,
            sorted(meta.env_overrides),
        )

    ApplicationLifecycle().register_signal_handlers()

    try:
        state = AppState.load(loaded_config, app_logger)
        destination = _dispatch(
            state,
            name,
            list_=list_,
            bookmark=bookmark,
            forget=forget,
            forget_all=forget_all,
            choose=choose,
            back=back,
            up=up,
            down=down,
        )
        state.flush()
    except ChangeDirError as exc:
        error = format_error(exc, include_traceback=verbose)
        get_console(stderr=True).print(format_for_cli(error))
        raise typer.Exit(code=1) from exc

    if destination is not None:
        typer.echo(str(destination))


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()
