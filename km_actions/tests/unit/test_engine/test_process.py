from __future__ import annotations

import subprocess
from types import SimpleNamespace

import pytest

from km_actions.engine import ProcessResult, run_applescript, run_jxa, run_process
from km_actions.engine.process import wrap_jxa
from km_actions.exceptions import EngineProcessError, EngineUnavailableError


def test_run_process_captures_output(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(args, **kwargs):
        assert kwargs["capture_output"] is True
        assert kwargs["text"] is True
        return SimpleNamespace(returncode=0, stdout="out\n", stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    result = run_process(["osascript", "-e", "1"])
    assert result == ProcessResult(0, "out\n", "")


def test_run_process_missing_executable(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(args, **kwargs):
        raise FileNotFoundError(args[0])

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(EngineUnavailableError):
        run_process(["osascript"])


def test_run_process_non_zero_status(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(subprocess, "run", lambda args, **kw: SimpleNamespace(returncode=1, stdout="", stderr="bad"))
    with pytest.raises(EngineProcessError) as info:
        run_process(["osascript"])
    assert info.value.status == 1
    assert info.value.stderr == "bad"
    assert run_process(["osascript"], check=False).status == 1


def test_injected_runner_is_still_status_checked() -> None:
    calls = []

    def runner(args):
        calls.append(list(args))
        return ProcessResult(2, "", "syntax error")

    with pytest.raises(EngineProcessError, match="syntax error"):
        run_applescript("beep", runner=runner)
    assert calls == [["osascript", "-e", "beep"]]
    assert run_applescript("beep", check=False, runner=runner).status == 2


def test_run_jxa_wraps_body() -> None:
    seen = []
    run_jxa("return 1;", osascript="/usr/bin/osascript", runner=lambda args: seen.append(args) or ProcessResult(0))
    args = seen[0]
    assert args[:4] == ["/usr/bin/osascript", "-l", "JavaScript", "-e"]
    assert args[4] == wrap_jxa("return 1;")
    assert args[4].startswith("(function () {")
