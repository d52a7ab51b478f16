from __future__ import annotations

import logging
from pathlib import Path

import pytest

from km_actions.engine import EngineLogWatcher


def _append(path: Path, text: str) -> None:
    with path.open("a", encoding="utf-8") as handle:
        handle.write(text)


def test_only_new_error_lines_are_reported(tmp_path: Path) -> None:
    log = tmp_path / "Engine.log"
    log.write_text("2024-01-01 10:00:00 Old error before start\n", encoding="utf-8")
    watcher = EngineLogWatcher(log)
    watcher.start()
    _append(log, "2024-01-01 10:00:01 Macro started\n2024-01-01 10:00:02 Action failed: no window\n")
    errors = watcher.errors()
    assert errors == ["2024-01-01 10:00:02 Action failed: no window"]
    assert EngineLogWatcher.strip_timestamps(errors) == ["Action failed: no window"]
    assert watcher.errors() == []


def test_errors_match_whole_words_only(tmp_path: Path) -> None:
    log = tmp_path / "Engine.log"
    log.write_text("", encoding="utf-8")
    watcher = EngineLogWatcher(log)
    watcher.start()
    _append(log, "Terrorform loaded\nFAILURE detected\nan Error here\n")
    assert watcher.errors() == ["FAILURE detected", "an Error here"]


def test_missing_log_reports_nothing(tmp_path: Path) -> None:
    watcher = EngineLogWatcher(tmp_path / "absent.log")
    assert watcher.start() == 0
    assert watcher.errors() == []


def test_report_logs_warnings(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    log = tmp_path / "Engine.log"
    log.write_text("", encoding="utf-8")
    watcher = EngineLogWatcher(log)
    watcher.start()
    assert watcher.report() is False
    _append(log, "2024-01-01 10:00:02 Execution error in macro\n")
    with caplog.at_level(logging.WARNING):
        assert watcher.report("<dict/>") is True
    assert "Execution error in macro" in caplog.text
