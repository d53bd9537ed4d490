"""Most-recently-used directory history."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from changedir.core.config import MAX_HISTORY

logger = logging.getLogger(__name__)


class HistoryTracker:
    """Bounded visit history, most recent first, without duplicates.

    Recording a path already present moves it to the front; recording a new
    path past ``limit`` evicts the oldest entry. Persistence is left to the
    caller, who checks ``dirty`` before saving.
    """

    def __init__(self, entries: Iterable[Path] = (), limit: int = MAX_HISTORY) -> None:
        self.limit = limit
        self._entries: list[Path] = []
        for entry in entries:
            if entry not in self._entries:
                self._entries.append(Path(entry))
        del self._entries[limit:]
        self.dirty = False

    @property
    def entries(self) -> list[Path]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, path: Path) -> None:
        if self._entries and self._entries[0] == path:
            return

        if path in self._entries:
            self._entries.remove(path)
            logger.debug("Moved %s to the front of history", path)
        else:
            logger.debug("Added %s to history", path)

        self._entries.insert(0, path)
        if len(self._entries) > self.limit:
            evicted = self._entries[self.limit :]
            del self._entries[self.limit :]
            logger.debug("Evicted %d old history entries", len(evicted))
        self.dirty = True

    def record_move(self, origin: Path, destination: Path) -> None:
        """Record a navigation from ``origin`` to ``destination``."""
        self.record(origin)
        self.record(destination)
