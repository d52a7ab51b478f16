from __future__ import annotations

import logging

import pytest

from km_actions.actions import (
    create_comment,
    create_display_text_window,
    create_insert_text,
    create_set_clipboard_to_text,
    create_set_variable,
    create_set_variable_to_calculation,
    create_use_variable,
)
from km_actions.exceptions import ActionConfigurationError, StyledTextError
from km_actions.plist import Data, decode_styled_text


def test_insert_by_typing_targets_front_application() -> None:
    action = create_insert_text(text="hello")
    assert action.plist.keys() == [
        "Action",
        "ActionUID",
        "MacroActionType",
        "TargetApplication",
        "TargetingType",
        "Text",
    ]


def test_display_window_with_styled_text_uses_rtf_plain_text() -> None:
    rtf = r"{\rtf1\ansi\deff0 Bold move}"
    action = create_display_text_window("ignored", include_styled_text=True, rtf_content=rtf)
    styled = action.plist.get("StyledText")
    assert isinstance(styled, Data)
    assert decode_styled_text(styled.text).rtf == rtf
    assert action.plist.get("Text") == "Bold move"
    assert "TargetApplication" not in action.plist.keys()


def test_styled_text_ignored_for_typing() -> None:
    assert "StyledText" not in create_insert_text(text="x", include_styled_text=True).plist.keys()


def test_insert_text_rejects_unknown_processing_mode() -> None:
    with pytest.raises(ActionConfigurationError):
        create_insert_text(text="x", processing_mode="Everything")


def test_comment_always_carries_styled_text() -> None:
    action = create_comment(title="Note", text="remember")
    assert action.plist.keys() == ["ActionUID", "MacroActionType", "StyledText", "Title"]
    assert "remember" in decode_styled_text(action.plist.get("StyledText").text).rtf


def test_set_variable_scopes_prefix_the_name() -> None:
    assert create_set_variable(variable="Count", text="1", scope="local").plist.get("Variable") == "LOCALCount"
    assert create_set_variable(variable="Count", text="1", scope="instance").plist.get("Variable") == "INSTANCECount"
    action = create_set_variable(variable="Count", text="1", where="Append")
    assert action.plist.keys()[-1] == "Where"


def test_variable_actions_require_a_name() -> None:
    with pytest.raises(ActionConfigurationError, match="variable name"):
        create_set_variable(text="1")
    with pytest.raises(ActionConfigurationError):
        create_use_variable()


def test_set_variable_to_calculation_format() -> None:
    plain = create_set_variable_to_calculation(variable="Total", text="1+2")
    assert plain.plist.get("UseFormat") is False
    assert "Format" not in plain.plist.keys()
    formatted = create_set_variable_to_calculation(variable="Total", text="1+2", format="0.00")
    assert formatted.plist.keys()[:2] == ["ActionUID", "Format"]
    assert formatted.plist.get("UseFormat") is True


def test_use_variable_records_stop_on_failure_only_when_enabled() -> None:
    assert "StopOnFailure" not in create_use_variable(variable="Pos", stop_on_failure=False).plist.keys()
    assert create_use_variable(variable="Pos", stop_on_failure=True).plist.get("StopOnFailure") is True


def test_set_clipboard_named_destination() -> None:
    action = create_set_clipboard_to_text(text="x", destination={"name": "Scratch", "uid": "ABC"})
    keys = action.plist.keys()
    assert "TargetNamedClipboardRedundantDisplayName" in keys
    assert action.plist.get("TargetNamedClipboardUID") == "ABC"
    assert action.plist.get("TargetUseNamedClipboard") is True


def test_set_clipboard_falls_back_to_plain_text_when_encoding_fails(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def _fail(rtf: str, wrap: bool = True) -> str:
        raise StyledTextError("boom")

    monkeypatch.setattr("km_actions.actions.clipboard.encode_styled_text", _fail)
    with caplog.at_level(logging.WARNING):
        action = create_set_clipboard_to_text(text="plain", include_styled_text=True)
    assert "StyledText" not in action.plist.keys()
    assert action.plist.get("Text") == "plain"
    assert "plain text" in caplog.text


@pytest.mark.parametrize(
    "options",
    [
        {"action": "ByTyping", "include_styled_text": True},
        {"action": "ByPastingStyles", "include_styled_text": False},
    ],
)
def test_custom_rtf_leaves_text_alone_without_styled_output(options) -> None:
    action = create_insert_text(text="plain", rtf_content=r"{\rtf1\ansi\deff0 styled}", **options)
    assert action.plist.get("Text") == "plain"
    assert "StyledText" not in action.plist.keys()


def test_insert_text_keeps_text_when_rtf_encoding_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail(rtf: str, wrap: bool = True) -> str:
        raise StyledTextError("boom")

    monkeypatch.setattr("km_actions.actions.text.encode_styled_text", _fail)
    action = create_insert_text(
        text="plain", action="ByPastingStyles", include_styled_text=True, rtf_content=r"{\rtf1 styled}"
    )
    assert action.plist.get("Text") == "plain"
    assert "StyledText" not in action.plist.keys()
