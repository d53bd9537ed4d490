"""Console output and logging for changedir.

stdout belongs to the shell wrapper: navigation commands write exactly one
path there with ``typer.echo``. Everything meant for the person at the
terminal goes through the two Rich consoles below:
    - console: bookmark listings and confirmations
    - stderr_console: selection tables, prompts, warnings, errors, logs

Consoles are looked up through ``get_console`` at call time so tests can
swap in recording consoles.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

LOGGER_NAME = "changedir"

console = Console()
stderr_console = Console(stderr=True)


def get_console(stderr: bool = False) -> Console:
    return stderr_console if stderr else console


def notice(message: str, style: str = "green") -> None:
    """Print an informational line on stdout."""
    get_console().print(f"[{style}]{escape(message)}[/{style}]")


def warn(message: str) -> None:
    get_console(stderr=True).print(f"[yellow]{escape(message)}[/yellow]")


def setup_logging(level: str = "WARNING", verbose: bool = False) -> logging.Logger:
    """Route ``changedir.*`` log records to stderr and return the package logger.

    ``--verbose`` forces DEBUG. An unknown level name falls back to WARNING.
    The logger does not propagate, so nothing reaches a root handler that
    might write to stdout.
    """
    numeric_level = logging.DEBUG if verbose else logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    handler = RichHandler(
        console=get_console(stderr=True),
        markup=False,
        show_path=False,
        show_time=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(numeric_level)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
