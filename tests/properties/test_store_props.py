"""Property-based tests for bookmark storage, slot labels and history.

These tests verify the core invariants:
- save then load yields the identical ordered sequence
- the i-th surviving bookmark is always labeled ALPHABET[i]
- the bookmark list never exceeds 36 entries nor holds duplicates
- history stays duplicate-free, most-recent-first and within its limit
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from hypothesis import given, settings
from hypothesis import strategies as st

from changedir.core import slots
from changedir.core.config import MAX_BOOKMARKS, MAX_HISTORY
from changedir.core.history import HistoryTracker
from changedir.core.result import CapacityExceededError
from changedir.core.store import BookmarkList, read_paths, write_paths

# === Strategies ===

name_strategy = st.text(
    alphabet=st.characters(
        whitelist_categories=("L", "N"),
        whitelist_characters="_-. ",
    ),
    min_size=1,
    max_size=20,
).filter(lambda s: s.strip() == s and s not in (".", ".."))

absolute_path_strategy = st.lists(name_strategy, min_size=1, max_size=4).map(
    lambda parts: Path("/", *parts)
)

# Operations on a bookmark list: ("add", i) or ("remove", i) over a pool of paths.
operation_strategy = st.lists(
    st.tuples(st.sampled_from(["add", "remove"]), st.integers(min_value=0, max_value=39)),
    max_size=80,
)

# === Property Tests ===


@given(paths=st.lists(absolute_path_strategy, max_size=40))
@settings(max_examples=50, deadline=None)
def test_save_load_round_trip(paths: list[Path]) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        target = Path(tmp) / "list"
        write_paths(target, paths)
        assert read_paths(target) == paths


@given(operations=operation_strategy)
@settings(max_examples=50, deadline=None)
def test_bookmark_labels_follow_positions(operations: list[tuple[str, int]]) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp).resolve()
        pool = [root / f"p{i}" for i in range(40)]
        bookmarks = BookmarkList()
        model: list[Path] = []

        for op, i in operations:
            path = pool[i]
            if op == "add":
                if path in model:
                    assert not bookmarks.add(path)
                elif len(model) >= MAX_BOOKMARKS:
                    try:
                        bookmarks.add(path)
                    except CapacityExceededError:
                        pass
                    else:
                        raise AssertionError("37th bookmark was accepted")
                else:
                    assert bookmarks.add(path)
                    model.append(path)
            else:
                assert bookmarks.remove(path) == (path in model)
                if path in model:
                    model.remove(path)

            assert bookmarks.paths == model
            assert len(bookmarks) <= MAX_BOOKMARKS

        for position, (slot, path) in enumerate(slots.labeled(bookmarks.paths)):
            assert slot == slots.ALPHABET[position]
            assert path == model[position]


@given(visits=st.lists(st.integers(min_value=0, max_value=15), max_size=60))
@settings(max_examples=100, deadline=None)
def test_history_invariants(visits: list[int]) -> None:
    tracker = HistoryTracker()
    for visit in visits:
        path = Path(f"/v/{visit}")
        tracker.record(path)
        entries = tracker.entries
        assert entries[0] == path
        assert len(entries) <= MAX_HISTORY
        assert len(set(entries)) == len(entries)


@given(visits=st.lists(st.integers(min_value=0, max_value=15), min_size=1, max_size=60))
@settings(max_examples=100, deadline=None)
def test_history_matches_most_recent_distinct_visits(visits: list[int]) -> None:
    tracker = HistoryTracker()
    for visit in visits:
        tracker.record(Path(f"/v/{visit}"))

    expected: list[Path] = []
    for visit in reversed(visits):
        path = Path(f"/v/{visit}")
        if path not in expected:
            expected.append(path)
    assert tracker.entries == expected[:MAX_HISTORY]
