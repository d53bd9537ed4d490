from __future__ import annotations

import io
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console
from typer.testing import CliRunner

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@dataclass
class DataFiles:
    bookmarks: Path
    history: Path
    config: Path


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def data_files(tmp_path: Path, monkeypatch: Any) -> DataFiles:
    """Point settings and both data files at a temp dir so tests don't touch user state."""
    state_dir = tmp_path / "state"
    files = DataFiles(
        bookmarks=state_dir / "bookmarks",
        history=state_dir / "history",
        config=state_dir / "config.toml",
    )
    monkeypatch.setenv("CHANGEDIR_CONFIG", str(files.config))
    monkeypatch.setenv("CHANGEDIR_BOOKMARK_FILE", str(files.bookmarks))
    monkeypatch.setenv("CHANGEDIR_HISTORY_FILE", str(files.history))
    for name in ("CHANGEDIR_HISTORY_LIMIT", "CHANGEDIR_SEARCH_DEPTH", "CHANGEDIR_SUBDIR_LIMIT"):
        monkeypatch.delenv(name, raising=False)
    return files


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: Any) -> Path:
    """A fresh working directory, already chdir'd into."""
    work = (tmp_path / "work").resolve()
    work.mkdir()
    monkeypatch.chdir(work)
    return work


def _recording_console() -> Console:
    return Console(record=True, width=200, file=io.StringIO())


@pytest.fixture(autouse=True)
def capture_console(monkeypatch: Any) -> Console:
    """Use an in-memory Rich console for stdout notices during tests."""
    test_console = _recording_console()
    import changedir.core.console as core_console

    monkeypatch.setattr(core_console, "console", test_console)
    return test_console


@pytest.fixture(autouse=True)
def capture_stderr(monkeypatch: Any) -> Console:
    """Use an in-memory Rich console for prompts, warnings and errors."""
    test_console = _recording_console()
    import changedir.core.console as core_console

    monkeypatch.setattr(core_console, "stderr_console", test_console)
    return test_console
