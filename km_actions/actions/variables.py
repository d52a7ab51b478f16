"""Variable actions: set to text, set to calculation and use variable."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..exceptions import ActionConfigurationError
from ..plist import PlistDict, action_uid
from ..templates.flags import notify_on_failure_entries, stop_on_failure_entries
from ..templates.text import SET_VARIABLE_WHERE, processing_mode_entries, validate_processing_mode, where_entries
from ..tokens import resolve_token_preset
from .base import DictAction, build, coerce_options, new_action_dict, require_choice

VARIABLE_SCOPES = ("global", "local", "instance")
SCOPE_PREFIXES = {"global": "", "local": "LOCAL", "instance": "INSTANCE"}
USE_VARIABLE_ACTIONS = (
    "SetMouse",
    "SetWindowPosition",
    "SetWindowSize",
    "SetWindowFrame",
    "SetWindowByName",
    "SetWindowByNameContains",
    "SetWindowByNameMatches",
    "SetApplicationByName",
    "SetApplicationByNameContains",
    "SetApplicationByNameMatches",
    "SetSystemVolume",
)


def _require_variable(variable: str) -> None:
    if not variable:
        raise ActionConfigurationError("A variable name is required")


@dataclass(slots=True, frozen=True)
class SetVariableOptions:
    variable: str = ""
    text: str = ""
    processing_mode: Optional[str] = None
    where: Optional[str] = None
    token_preset: Optional[str] = None
    scope: str = "global"

    def __post_init__(self) -> None:
        _require_variable(self.variable)
        validate_processing_mode(self.processing_mode)
        require_choice("scope", self.scope, VARIABLE_SCOPES)
        if self.where is not None:
            require_choice("where", self.where, SET_VARIABLE_WHERE)

    @property
    def scoped_variable(self) -> str:
        return SCOPE_PREFIXES[self.scope] + self.variable


def create_set_variable(options: Optional[SetVariableOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(SetVariableOptions, options, kwargs)
    plist = (
        new_action_dict()
        .add("MacroActionType", "SetVariableToText")
        .extend(processing_mode_entries(opts.processing_mode))
        .add("Text", resolve_token_preset(opts.text, opts.token_preset))
        .add("Variable", opts.scoped_variable)
        .extend(where_entries(opts.where))
    )
    return build("SetVariableToText", plist)


@dataclass(slots=True, frozen=True)
class SetVariableToCalculationOptions:
    variable: str = ""
    text: str = ""
    format: Optional[str] = None
    stop_on_failure: Optional[bool] = None
    notify_on_failure: Optional[bool] = None

    def __post_init__(self) -> None:
        _require_variable(self.variable)


def create_set_variable_to_calculation(
    options: Optional[SetVariableToCalculationOptions] = None, /, **kwargs: Any
) -> DictAction:
    opts = coerce_options(SetVariableToCalculationOptions, options, kwargs)
    plist = new_action_dict()
    if opts.format:
        plist.add("Format", opts.format)
    plist.add("MacroActionType", "SetVariableToCalculation")
    plist.extend(notify_on_failure_entries(opts.notify_on_failure))
    plist.extend(stop_on_failure_entries(opts.stop_on_failure))
    plist.add("Text", opts.text)
    plist.add("UseFormat", bool(opts.format))
    plist.add("Variable", opts.variable)
    return build("SetVariableToCalculation", plist)


@dataclass(slots=True, frozen=True)
class UseVariableOptions:
    variable: str = ""
    action: str = "SetMouse"
    stop_on_failure: Optional[bool] = None
    notify_on_failure: Optional[bool] = None

    def __post_init__(self) -> None:
        _require_variable(self.variable)
        require_choice("action", self.action, USE_VARIABLE_ACTIONS)


def create_use_variable(options: Optional[UseVariableOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(UseVariableOptions, options, kwargs)
    plist = (
        PlistDict()
        .add("Action", opts.action)
        .add("ActionUID", action_uid())
        .add("MacroActionType", "UseVariable")
        .extend(notify_on_failure_entries(opts.notify_on_failure))
        # UseVariable records StopOnFailure only when it is switched on
        .extend(stop_on_failure_entries(opts.stop_on_failure, default=False))
        .add("Variable", opts.variable)
    )
    return build("UseVariable", plist)
