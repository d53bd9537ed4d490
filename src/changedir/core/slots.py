"""Positional slot labels.

A list presented to the user is labeled ``0``-``9`` then ``a``-``z``: the
item at position ``i`` always carries ``ALPHABET[i]``. Labels are derived at
presentation time and never stored, so removing a bookmark shifts every
later label down by one.
"""

from __future__ import annotations

import string
from collections.abc import Iterable, Sequence
from typing import TypeVar

from changedir.core.result import InvalidLabelError

T = TypeVar("T")

ALPHABET = string.digits + string.ascii_lowercase

# Shown for entries past the alphabet; never accepted as an answer.
OVERFLOW_LABEL = "?"


def label(index: int) -> str:
    """Return the slot label for a list position."""
    if not 0 <= index < len(ALPHABET):
        raise InvalidLabelError(
            f"No slot label for position {index}", context={"max": len(ALPHABET) - 1}
        )
    return ALPHABET[index]


def index(slot: str, length: int) -> int:
    """Return the list position for a label in a list of ``length`` items.

    Labels are matched case-insensitively.
    """
    normalized = slot.lower()
    if len(normalized) != 1 or normalized not in ALPHABET:
        raise InvalidLabelError(f"Invalid slot label: {slot!r}")

    position = ALPHABET.index(normalized)
    if position >= length:
        raise InvalidLabelError(
            f"Slot {normalized!r} is out of range", context={"entries": length}
        )
    return position


def labeled(items: Iterable[T]) -> list[tuple[str, T]]:
    """Pair each item with its label; items past the alphabet get ``OVERFLOW_LABEL``."""
    return [
        (label(i) if i < len(ALPHABET) else OVERFLOW_LABEL, item)
        for i, item in enumerate(items)
    ]


def pick(items: Sequence[T], slot: str) -> T:
    return items[index(slot, len(items))]
