from __future__ import annotations

import pytest

from km_actions.actions import (
    SwitchCase,
    create_break_from_loop,
    create_cancel,
    create_group,
    create_if_then_else,
    create_insert_text,
    create_pause,
    create_return,
    create_switch_case,
    create_type_keystroke,
    create_while,
)
from km_actions.exceptions import ActionConfigurationError


def test_cancel_specific_macro_needs_instance() -> None:
    with pytest.raises(ActionConfigurationError, match="instance"):
        create_cancel(cancel_type="CancelSpecificMacro")
    action = create_cancel(cancel_type="CancelSpecificMacro", instance="Other Macro")
    assert action.plist.keys() == ["Action", "ActionUID", "Instance", "MacroActionType"]


def test_loop_shortcuts_are_cancel_actions() -> None:
    action = create_break_from_loop()
    assert action.plist.get("Action") == "BreakFromLoop"
    assert action.plist.get("MacroActionType") == "Cancel"


def test_group_nests_actions_and_flattens_sequences() -> None:
    hold = create_type_keystroke(keystroke="Cmd+A", hold_time=0.5)
    group = create_group(name="Setup", actions=[create_pause(), hold])
    assert len(group.plist.get("Actions").items) == 4
    assert group.plist.keys() == ["ActionName", "ActionUID", "Actions", "MacroActionType", "TimeOutAbortsMacro"]


def test_if_then_else_renders_conditions_and_branches() -> None:
    action = create_if_then_else(
        conditions=[{"ConditionType": "Variable", "Variable": "X", "VariableConditionType": "Is", "VariableValue": "1"}],
        then_actions=[create_insert_text(text="yes")],
        else_actions=[],
    )
    xml = action.to_xml()
    assert "<key>ConditionListMatch</key>" in xml
    assert "<key>ElseActions</key>\n\t\t<array/>" in xml
    assert xml.count("<string>InsertText</string>") == 1


def test_while_notify_on_timeout_only_when_given() -> None:
    assert "NotifyOnTimeOut" not in create_while().plist.keys()
    assert create_while(notify_on_timeout=False).plist.get("NotifyOnTimeOut") is False


def test_switch_case_accepts_mappings() -> None:
    action = create_switch_case(
        source="Variable",
        variable="Mode",
        cases=[
            {"conditionType": "Is", "testValue": "fast", "actions": [create_pause(time=1)]},
            SwitchCase("Otherwise"),
        ],
    )
    entries = action.plist.get("CaseEntries").items
    assert [entry.get("ConditionType") for entry in entries] == ["Is", "Otherwise"]
    assert entries[0].get("TestValue") == "fast"
    assert action.plist.get("Variable") == "Mode"


def test_switch_case_requires_cases_and_known_operators() -> None:
    with pytest.raises(ActionConfigurationError):
        create_switch_case(source="Clipboard")
    with pytest.raises(ActionConfigurationError):
        SwitchCase("Resembles")


def test_pause_defaults_and_units() -> None:
    default = create_pause()
    assert default.plist.get("Time") == "0.05"
    assert "Unit" not in default.plist.keys()
    assert create_pause(time=2.0, unit="Minutes").plist.get("Time") == "2"
    assert create_pause(time=2, unit="Minutes").plist.get("Unit") == "Minutes"
    assert "Unit" not in create_pause(time=2, unit="Seconds").plist.keys()


def test_pause_unit_without_time_is_rejected() -> None:
    with pytest.raises(ActionConfigurationError, match="'unit' without 'time'"):
        create_pause(unit="Hours")


def test_return_applies_token_preset() -> None:
    assert create_return(text="ignored", token_preset="delete").plist.get("Text") == "%Delete%"
    assert create_return(text="plain").plist.get("Text") == "plain"
