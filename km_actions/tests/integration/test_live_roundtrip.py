"""Round-trips against a real Keyboard Maestro install.

Opt in with ``KM_ACTIONS_LIVE=1`` on a Mac with the editor and engine running.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from km_actions.actions import create_comment, create_insert_text, create_pause, create_set_variable
from km_actions.app.settings import HarnessSettings
from km_actions.engine import run_virtual_macro
from km_actions.engine.process import is_macos
from km_actions.harness import RoundTripHarness

pytestmark = [
    pytest.mark.engine,
    pytest.mark.skipif(
        not is_macos() or os.environ.get("KM_ACTIONS_LIVE") != "1",
        reason="needs a running Keyboard Maestro engine (set KM_ACTIONS_LIVE=1)",
    ),
]


@pytest.fixture(scope="module")
def harness(tmp_path_factory: pytest.TempPathFactory) -> RoundTripHarness:
    failures: Path = tmp_path_factory.mktemp("km-failures")
    return RoundTripHarness(HarnessSettings(), failures_dir=failures)


@pytest.mark.parametrize(
    "name, action",
    [
        ("pause", create_pause()),
        ("insert text by typing", create_insert_text(text="hello", action="ByTyping")),
        ("comment", create_comment(title="Note", text="body")),
        ("set variable", create_set_variable(variable="Local_Value", text="42")),
    ],
)
def test_engine_keeps_generated_action(harness: RoundTripHarness, name: str, action) -> None:
    result = harness.validate(name, action)
    assert result.passed, f"{result.error or result.script_error}: {result.engine_errors}"


def test_virtual_macro_returns_text() -> None:
    assert run_virtual_macro([], return_text="%Calculate%1+2%", capture=True) == "3"
