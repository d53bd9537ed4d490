"""Interactive label selection.

Shows a labeled list on the stderr console, reads a single answer and maps
it back to an item. Malformed answers fail immediately; there is no retry
loop.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TextIO

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from changedir.core import slots
from changedir.core.result import InvalidLabelError, InvalidSelectionError

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "Select directory (0-9, a-z)"


def labeled_table(
    items: Sequence[Path],
    title: str | None = None,
    display: Callable[[Path], str] = str,
) -> Table:
    """Build the slot/path table shared by listings and prompts."""
    table = Table(title=title, box=box.SIMPLE, show_header=False)
    table.add_column("Slot", style="bold cyan", no_wrap=True)
    table.add_column("Path", style="bright_white", overflow="fold")
    for slot, item in slots.labeled(items):
        table.add_row(escape(f"[{slot}]"), escape(display(item)))
    return table


class InteractiveSelector:
    """Presents items with slot labels and resolves the user's answer."""

    def __init__(self, console: Console, stream: TextIO | None = None) -> None:
        self.console = console
        self.stream = stream

    def choose(self, items: Sequence[Path], answer: str) -> Path:
        """Map an answer such as ``" B "`` to the item at that slot."""
        slot = answer.strip()
        if not slot:
            raise InvalidSelectionError("Invalid selection: no label given.")
        try:
            selected = slots.pick(items, slot)
        except InvalidLabelError as exc:
            raise InvalidSelectionError(
                f"Invalid selection: {slot}", context={"entries": len(items)}
            ) from exc
        logger.debug("Selected %s with slot %r", selected, slot)
        return selected

    def present(
        self,
        items: Sequence[Path],
        prompt: str = DEFAULT_PROMPT,
        display: Callable[[Path], str] = str,
    ) -> Path:
        if not items:
            raise InvalidSelectionError("Nothing to select from.")

        self.console.print(labeled_table(items, display=display))
        try:
            answer = Prompt.ask(
                f"[bright_yellow]{prompt}[/bright_yellow]",
                console=self.console,
                stream=self.stream,
            )
        except EOFError as exc:
            raise InvalidSelectionError("Invalid selection: no input.") from exc

        logger.debug("User input: %r", answer)
        return self.choose(items, answer)
