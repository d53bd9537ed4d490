"""Tests for core/history.py - bounded MRU history."""

from __future__ import annotations

from pathlib import Path

from changedir.core.history import HistoryTracker


def _paths(*names: str) -> list[Path]:
    return [Path("/tmp") / name for name in names]


class TestRecord:
    def test_new_entry_goes_to_front(self) -> None:
        tracker = HistoryTracker(_paths("a", "b"))
        tracker.record(Path("/tmp/c"))
        assert tracker.entries == _paths("c", "a", "b")
        assert tracker.dirty

    def test_existing_entry_moves_to_front(self) -> None:
        tracker = HistoryTracker(_paths("a", "b", "c"))
        tracker.record(Path("/tmp/c"))
        assert tracker.entries == _paths("c", "a", "b")

    def test_recording_front_entry_twice_is_unchanged(self) -> None:
        tracker = HistoryTracker()
        tracker.record(Path("/tmp/a"))
        tracker.record(Path("/tmp/a"))
        assert tracker.entries == _paths("a")

    def test_recording_current_front_is_not_a_change(self) -> None:
        tracker = HistoryTracker(_paths("a", "b"))
        tracker.record(Path("/tmp/a"))
        assert not tracker.dirty

    def test_eleventh_entry_evicts_oldest(self) -> None:
        names = [str(i) for i in range(10)]
        tracker = HistoryTracker(_paths(*reversed(names)))
        assert len(tracker) == 10

        tracker.record(Path("/tmp/new"))

        assert len(tracker) == 10
        assert tracker.entries[0] == Path("/tmp/new")
        assert Path("/tmp/0") not in tracker.entries
        assert Path("/tmp/1") in tracker.entries

    def test_custom_limit(self) -> None:
        tracker = HistoryTracker(limit=2)
        for name in ("a", "b", "c"):
            tracker.record(Path("/tmp") / name)
        assert tracker.entries == _paths("c", "b")


def test_loaded_entries_are_deduplicated_and_capped() -> None:
    tracker = HistoryTracker(_paths("a", "a", "b", "c"), limit=2)
    assert tracker.entries == _paths("a", "b")
    assert not tracker.dirty


def test_record_move_puts_destination_before_origin() -> None:
    tracker = HistoryTracker()
    tracker.record_move(Path("/tmp/a"), Path("/tmp/b"))
    assert tracker.entries == _paths("b", "a")
