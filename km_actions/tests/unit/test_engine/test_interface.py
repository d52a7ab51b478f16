from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Sequence

import pytest

from km_actions.engine import (
    PollOutcome,
    ProcessResult,
    cleanup_macro_group,
    delete_macro_by_name,
    ensure_macro_group,
    execute_macro_xml,
    find_macro_action_xml,
    import_plist_string,
)
from km_actions.engine.interface import applescript_string, do_script_jxa
from km_actions.exceptions import EngineProcessError


class ScriptedRunner:
    """Returns canned results in order and records every command line."""

    def __init__(self, *results: ProcessResult, default: ProcessResult = ProcessResult(0)) -> None:
        self.results = list(results)
        self.default = default
        self.calls: List[List[str]] = []

    def __call__(self, args: Sequence[str]) -> ProcessResult:
        self.calls.append(list(args))
        return self.results.pop(0) if self.results else self.default

    @property
    def scripts(self) -> List[str]:
        return [call[-1] for call in self.calls]


def _clock(value: float = 1_700_000_000.0) -> Callable[[], float]:
    return lambda: value


def test_applescript_string_escapes_quotes_and_backslashes() -> None:
    assert applescript_string('a "b" \\c') == '"a \\"b\\" \\\\c"'


def test_import_removes_temp_file_on_success(tmp_path: Path) -> None:
    runner = ScriptedRunner()
    path = import_plist_string("<plist/>", temp_dir=tmp_path, runner=runner, clock=_clock())
    assert path.name == "kmjs-test-1700000000000.kmmacros"
    assert not path.exists()
    assert "importMacros (POSIX file" in runner.scripts[0]
    assert str(path) in runner.scripts[0]


def test_import_keeps_temp_file_on_failure(tmp_path: Path) -> None:
    runner = ScriptedRunner(ProcessResult(1, "", "Can't get POSIX file"))
    with pytest.raises(EngineProcessError, match="kept"):
        import_plist_string("<plist/>", temp_dir=tmp_path, runner=runner, clock=_clock())
    kept = tmp_path / "kmjs-test-1700000000000.kmmacros"
    assert kept.read_text(encoding="utf-8") == "<plist/>"


def test_delete_macro_reports_outcome() -> None:
    assert delete_macro_by_name("Gone", runner=ScriptedRunner()) is True
    assert delete_macro_by_name("Gone", runner=ScriptedRunner(ProcessResult(1, "", "no such macro"))) is False


def test_ensure_group_quotes_name_as_json() -> None:
    runner = ScriptedRunner()
    ensure_macro_group('My "Group"', runner=runner)
    assert '"My \\"Group\\""' in runner.scripts[0]
    assert runner.calls[0][1:3] == ["-l", "JavaScript"]


def test_cleanup_returns_count_and_survives_failure() -> None:
    assert cleanup_macro_group("g", runner=ScriptedRunner(ProcessResult(0, "3\n"))) == 3
    assert cleanup_macro_group("g", runner=ScriptedRunner(ProcessResult(1, "", "boom"))) == 0


def test_poll_finds_macro_after_retries() -> None:
    sleeps: List[float] = []
    runner = ScriptedRunner(ProcessResult(0, ""), ProcessResult(0, "\n"), ProcessResult(0, "<dict/>\n"))
    result = find_macro_action_xml("g", "m", attempts=5, interval=0.25, runner=runner, sleep=sleeps.append)
    assert result.found
    assert result.xml == "<dict/>"
    assert result.attempts == 3
    assert sleeps == [0.25, 0.25]


def test_poll_exhaustion_is_not_found_not_an_error() -> None:
    sleeps: List[float] = []
    result = find_macro_action_xml("g", "m", attempts=4, runner=ScriptedRunner(), sleep=sleeps.append)
    assert result.outcome is PollOutcome.NOT_FOUND
    assert result.attempts == 4
    assert len(sleeps) == 3


def test_poll_process_failure_raises() -> None:
    with pytest.raises(EngineProcessError):
        find_macro_action_xml("g", "m", runner=ScriptedRunner(ProcessResult(1, "", "JXA error")), sleep=lambda _: None)


def test_do_script_capture_returns_string_result() -> None:
    source = do_script_jxa("<plist/>", capture=True)
    assert "String(result)" in source
    assert '"<plist/>"' in source
    assert "String(result)" not in do_script_jxa("<plist/>", capture=False)


def test_execute_captures_stdout() -> None:
    runner = ScriptedRunner(ProcessResult(0, "42\n"))
    assert execute_macro_xml("<plist/>", capture=True, runner=runner) == "42"
    assert runner.calls[0][-1].startswith("(function () {\n  var kme")


def test_execute_stderr_raises_unless_tolerated(caplog: pytest.LogCaptureFixture) -> None:
    noisy = ProcessResult(0, "", "execution error: nope")
    with pytest.raises(EngineProcessError, match="nope"):
        execute_macro_xml("<plist/>", runner=ScriptedRunner(noisy))
    assert execute_macro_xml("<plist/>", tolerate_engine_errors=True, runner=ScriptedRunner(noisy)) is None
    assert "nope" in caplog.text
