"""Control flow actions: cancel, groups, conditionals, loops, pause and return."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

from ..conditions import condition_list_plist
from ..exceptions import ActionConfigurationError
from ..plist import PlistArray, PlistDict, action_uid, number_text
from ..templates.flags import timeout_entries
from ..templates.text import text_entries, validate_processing_mode
from ..tokens import resolve_token_preset
from .base import DictAction, actions_array, build, coerce_options, new_action_dict, require_choice

logger = logging.getLogger(__name__)

CANCEL_TYPES = (
    "CancelAllMacros",
    "CancelAllOtherMacros",
    "CancelThisMacro",
    "CancelJustThisMacro",
    "CancelSpecificMacro",
    "BreakFromLoop",
    "ContinueLoop",
    "RetryThisLoop",
)
SWITCH_SOURCES = (
    "Clipboard",
    "NamedClipboard",
    "TriggerClipboard",
    "Variable",
    "Text",
    "Calculation",
    "EnvironmentVariable",
    "File",
)
SWITCH_OPERATORS = (
    "IsEmpty",
    "IsNotEmpty",
    "Is",
    "IsNot",
    "Contains",
    "DoesNotContain",
    "StartsWith",
    "DoesNotStartWith",
    "EndsWith",
    "DoesNotEndWith",
    "Matches",
    "DoesNotMatch",
    "LessThan",
    "LessThanOrEqual",
    "Equal",
    "GreaterThanOrEqual",
    "GreaterThan",
    "NotEqual",
    "Otherwise",
)
PAUSE_UNITS = ("Hours", "Minutes", "Seconds", "Hundredths")
CONDITION_MATCHES = ("All", "Any", "None", "NotAll")


@dataclass(slots=True, frozen=True)
class CancelOptions:
    cancel_type: str = "CancelJustThisMacro"
    instance: Optional[str] = None

    def __post_init__(self) -> None:
        require_choice("cancel_type", self.cancel_type, CANCEL_TYPES)
        if self.cancel_type == "CancelSpecificMacro" and not self.instance:
            raise ActionConfigurationError(
                "CancelSpecificMacro requires an 'instance' (macro name or UUID) to cancel."
            )


def create_cancel(options: Optional[CancelOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(CancelOptions, options, kwargs)
    plist = PlistDict().add("Action", opts.cancel_type).add("ActionUID", action_uid())
    if opts.cancel_type == "CancelSpecificMacro":
        plist.add("Instance", opts.instance)
    plist.add("MacroActionType", "Cancel")
    return build("Cancel", plist)


def create_break_from_loop() -> DictAction:
    return create_cancel(cancel_type="BreakFromLoop")


def create_continue_loop() -> DictAction:
    return create_cancel(cancel_type="ContinueLoop")


def create_retry_this_loop() -> DictAction:
    return create_cancel(cancel_type="RetryThisLoop")


@dataclass(slots=True, frozen=True)
class GroupOptions:
    name: str = ""
    actions: Sequence[Any] = ()
    timeout_aborts: bool = True
    notify_on_timeout: bool = True


def create_group(options: Optional[GroupOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(GroupOptions, options, kwargs)
    plist = (
        PlistDict()
        .add("ActionName", opts.name)
        .add("ActionUID", action_uid())
        .add("Actions", actions_array(opts.actions))
        .add("MacroActionType", "Group")
        .extend(timeout_entries(opts.timeout_aborts, opts.notify_on_timeout))
    )
    return build("Group", plist)


@dataclass(slots=True, frozen=True)
class IfThenElseOptions:
    conditions: Sequence[Any] = ()
    match: str = "All"
    then_actions: Sequence[Any] = ()
    else_actions: Sequence[Any] = ()
    timeout_aborts: bool = True

    def __post_init__(self) -> None:
        require_choice("match", self.match, CONDITION_MATCHES)


def create_if_then_else(options: Optional[IfThenElseOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(IfThenElseOptions, options, kwargs)
    plist = (
        new_action_dict()
        .add("Conditions", condition_list_plist(opts.conditions, opts.match))
        .add("ElseActions", actions_array(opts.else_actions))
        .add("MacroActionType", "IfThenElse")
        .add("ThenActions", actions_array(opts.then_actions))
        .add("TimeOutAbortsMacro", opts.timeout_aborts)
    )
    return build("IfThenElse", plist)


@dataclass(slots=True, frozen=True)
class WhileOptions:
    conditions: Sequence[Any] = ()
    match: str = "All"
    actions: Sequence[Any] = ()
    timeout_aborts: bool = True
    notify_on_timeout: Optional[bool] = None

    def __post_init__(self) -> None:
        require_choice("match", self.match, CONDITION_MATCHES)


def create_while(options: Optional[WhileOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(WhileOptions, options, kwargs)
    plist = (
        new_action_dict()
        .add("Actions", actions_array(opts.actions))
        .add("Conditions", condition_list_plist(opts.conditions, opts.match))
        .add("MacroActionType", "While")
        .add("NotifyOnTimeOut", opts.notify_on_timeout)
        .add("TimeOutAbortsMacro", opts.timeout_aborts)
    )
    return build("While", plist)


@dataclass(slots=True, frozen=True)
class SwitchCase:
    """One branch of a switch: an operator, the value it tests and its actions."""

    operator: str = "Is"
    test_value: str = ""
    actions: Sequence[Any] = ()

    def __post_init__(self) -> None:
        require_choice("operator", self.operator, SWITCH_OPERATORS)

    @classmethod
    def coerce(cls, value: Union["SwitchCase", Mapping[str, Any]]) -> "SwitchCase":
        if isinstance(value, SwitchCase):
            return value
        if not isinstance(value, Mapping):
            raise ActionConfigurationError(f"Switch case must be a mapping, got {value!r}")
        return cls(
            operator=value.get("operator", value.get("conditionType", "Is")),
            test_value=str(value.get("test_value", value.get("testValue", ""))),
            actions=tuple(value.get("actions", ())),
        )

    def to_plist(self) -> PlistDict:
        return (
            PlistDict()
            .add("Actions", actions_array(self.actions))
            .add("ConditionType", self.operator)
            .add("TestValue", self.test_value)
        )


@dataclass(slots=True, frozen=True)
class SwitchCaseOptions:
    source: str = "Clipboard"
    cases: Sequence[Any] = ()
    variable: Optional[str] = None
    text: Optional[str] = None
    text_processing_mode: Optional[str] = None
    calculation: Optional[str] = None
    path: Optional[str] = None
    environment_variable: Optional[str] = None
    named_clipboard: Optional[Mapping[str, str]] = None

    def __post_init__(self) -> None:
        require_choice("source", self.source, SWITCH_SOURCES)
        if not self.cases:
            raise ActionConfigurationError("SwitchCase requires at least one case entry.")
        validate_processing_mode(self.text_processing_mode)


def create_switch_case(options: Optional[SwitchCaseOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(SwitchCaseOptions, options, kwargs)
    cases = PlistArray([SwitchCase.coerce(case).to_plist() for case in opts.cases])
    plist = new_action_dict()
    if opts.source == "Calculation":
        plist.add("Calculation", opts.calculation or "")
    plist.add("CaseEntries", cases)
    plist.add("MacroActionType", "Switch")
    if opts.source == "File":
        plist.add("Path", opts.path or "")
    plist.add("Source", opts.source)
    if opts.source == "Variable":
        plist.add("Variable", opts.variable or "")
    elif opts.source == "Text":
        plist.extend(text_entries(opts.text or "", opts.text_processing_mode))
    elif opts.source == "EnvironmentVariable":
        plist.add("Text", opts.environment_variable or "")
    elif opts.source == "NamedClipboard" and opts.named_clipboard:
        plist.add("ClipboardSourceNamedClipboardUID", opts.named_clipboard.get("uid", ""))
        plist.add(
            "ClipboardSourceNamedClipboardRedundantDisplayName",
            opts.named_clipboard.get("redundantDisplayName", opts.named_clipboard.get("name", "")),
        )
    return build("Switch", plist)


@dataclass(slots=True, frozen=True)
class PauseOptions:
    time: Optional[float] = None
    unit: Optional[str] = None

    def __post_init__(self) -> None:
        if self.unit is not None and self.time is None:
            raise ActionConfigurationError("Cannot specify 'unit' without 'time'.")
        if self.unit is not None:
            require_choice("unit", self.unit, PAUSE_UNITS)


def create_pause(options: Optional[PauseOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(PauseOptions, options, kwargs)
    plist = (
        new_action_dict()
        .add("MacroActionType", "Pause")
        .add("Time", number_text(0.05 if opts.time is None else opts.time))
        .add("TimeOutAbortsMacro", True)
    )
    if opts.unit and opts.unit != "Seconds":
        plist.add("Unit", opts.unit)
    return build("Pause", plist)


@dataclass(slots=True, frozen=True)
class ReturnOptions:
    text: str = ""
    token_preset: Optional[str] = None


def create_return(options: Optional[ReturnOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(ReturnOptions, options, kwargs)
    plist = (
        new_action_dict()
        .add("MacroActionType", "Return")
        .add("Text", resolve_token_preset(opts.text, opts.token_preset))
    )
    return build("Return", plist)
