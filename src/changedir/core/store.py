"""Bookmark and history persistence.

Both lists are stored as plain text, one absolute path per line, and are
rewritten in full on save. Saves go through a uniquely named temporary file
in the target directory followed by ``os.replace``, so a reader (or a
concurrent writer) only ever sees the old or the new complete file.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable, Iterator, Sequence
from enum import Enum
from pathlib import Path

from changedir.core.config import MAX_BOOKMARKS, AppConfig
from changedir.core.result import CapacityExceededError, FilesystemError

logger = logging.getLogger(__name__)


class StoreKind(Enum):
    BOOKMARKS = "bookmarks"
    HISTORY = "history"


def normalize_path(path: str | os.PathLike[str]) -> Path:
    """Return the absolute, symlink-free form used for storage and comparison."""
    return Path(path).expanduser().resolve()


def read_paths(path: Path) -> list[Path]:
    """Read a path list; a missing file is an empty list."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("%s does not exist, starting empty", path)
        return []
    except (OSError, UnicodeDecodeError) as exc:
        raise FilesystemError(
            f"Cannot read {path}", context={"error": str(exc)}
        ) from exc

    return [Path(line.strip()) for line in text.splitlines() if line.strip()]


def write_paths(path: Path, paths: Iterable[Path]) -> None:
    """Atomically rewrite a path list."""
    content = "".join(f"{entry}\n" for entry in paths)
    temp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as fh:
            temp_name = fh.name
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(temp_name, path)
    except OSError as exc:
        if temp_name is not None:
            Path(temp_name).unlink(missing_ok=True)
        raise FilesystemError(f"Cannot write {path}", context={"error": str(exc)}) from exc


class PathStore:
    """Loads and saves the bookmark and history files."""

    def __init__(self, bookmark_file: Path, history_file: Path) -> None:
        self._files = {
            StoreKind.BOOKMARKS: bookmark_file,
            StoreKind.HISTORY: history_file,
        }

    @classmethod
    def from_config(cls, config: AppConfig) -> PathStore:
        return cls(config.bookmark_file, config.history_file)

    def path_for(self, kind: StoreKind) -> Path:
        return self._files[kind]

    def load(self, kind: StoreKind) -> list[Path]:
        target = self._files[kind]
        logger.debug("Loading %s from %s", kind.value, target)
        entries = read_paths(target)
        logger.debug("Loaded %d %s entries", len(entries), kind.value)
        return entries

    def save(self, kind: StoreKind, paths: Sequence[Path]) -> None:
        target = self._files[kind]
        logger.debug("Saving %d %s entries to %s", len(paths), kind.value, target)
        write_paths(target, paths)


class BookmarkList:
    """Ordered, duplicate-free bookmark container.

    Position ``i`` is presented with slot label ``ALPHABET[i]``; the label is
    computed by :mod:`changedir.core.slots` whenever the list is shown.
    """

    def __init__(self, paths: Iterable[Path] = (), capacity: int = MAX_BOOKMARKS) -> None:
        self.capacity = capacity
        self._paths: list[Path] = []
        for entry in paths:
            normalized = normalize_path(entry)
            if normalized not in self._paths:
                self._paths.append(normalized)
        if len(self._paths) > capacity:
            logger.warning(
                "Bookmark file holds %d entries; only the first %d have slot labels",
                len(self._paths),
                capacity,
            )
        self.dirty = False

    def __iter__(self) -> Iterator[Path]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __getitem__(self, position: int) -> Path:
        return self._paths[position]

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    def add(self, path: Path) -> bool:
        """Append ``path``; returns False when it was already bookmarked."""
        normalized = normalize_path(path)
        if normalized in self._paths:
            return False
        if len(self._paths) >= self.capacity:
            raise CapacityExceededError(
                f"Maximum of {self.capacity} bookmarks reached. Remove a bookmark first.",
                context={"path": str(normalized)},
            )
        self._paths.append(normalized)
        self.dirty = True
        return True

    def remove(self, path: Path) -> bool:
        """Drop ``path`` if present; returns False when it was not bookmarked."""
        normalized = normalize_path(path)
        try:
            self._paths.remove(normalized)
        except ValueError:
            return False
        self.dirty = True
        return True

    def clear(self) -> int:
        removed = len(self._paths)
        if removed:
            self._paths.clear()
            self.dirty = True
        return removed
