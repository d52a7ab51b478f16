"""Application-level actions: activate, quit, show, open and menu or button presses."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

from ..exceptions import ActionConfigurationError
from ..plist import PlistArray, PlistDict, action_uid
from ..templates.application import SpecificApp, application_dict, validate_target
from ..templates.flags import notify_on_failure_entries, stop_on_failure_entries, timeout_entries
from ..templates.text import validate_processing_mode
from .base import DictAction, build, coerce_options, new_action_dict, require_choice

logger = logging.getLogger(__name__)

SpecificLike = Union[SpecificApp, Mapping[str, Any], None]

ALREADY_ACTIVATED_ACTIONS = ("Normal", "SwitchToLast", "BringAllWindows", "Reopen", "Hide", "HideOthers", "Quit")
QUIT_VARIANTS = ("Quit", "QuitRelaunch", "ForceQuit", "ForceQuitRelaunch")
BUTTON_AX_ACTIONS = {
    "PressButtonNamed": None,
    "ShowMenuOfButtonNamed": "AXShowMenu",
    "DecrementSliderNamed": "AXDecrement",
    "IncrementSliderNamed": "AXIncrement",
    "CancelButtonNamed": "AXCancel",
}


def _is_default_application(target: str, specific: SpecificLike) -> bool:
    return target == "Front" or SpecificApp.coerce(specific).is_empty()


@dataclass(slots=True, frozen=True)
class ActivateOptions:
    target: str = "Front"
    specific: SpecificLike = None
    all_windows: bool = False
    reopen_windows: bool = False
    already_activated_action: str = "Normal"
    timeout_aborts: bool = True

    def __post_init__(self) -> None:
        validate_target(self.target)
        require_choice("already_activated_action", self.already_activated_action, ALREADY_ACTIVATED_ACTIONS)


def create_activate_application(options: Optional[ActivateOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(ActivateOptions, options, kwargs)
    plist = (
        new_action_dict()
        .add("AllWindows", opts.all_windows)
        .add("AlreadyActivatedActionType", opts.already_activated_action)
        .add("Application", application_dict(opts.target, opts.specific))
        .add("MacroActionType", "ActivateApplication")
        .add("ReopenWindows", opts.reopen_windows)
        .add("TimeOutAbortsMacro", opts.timeout_aborts)
    )
    return build("ActivateApplication", plist)


@dataclass(slots=True, frozen=True)
class QuitOptions:
    variant: str = "Quit"
    target: str = "Front"
    specific: SpecificLike = None
    timeout_aborts: bool = True

    def __post_init__(self) -> None:
        validate_target(self.target)
        require_choice("variant", self.variant, QUIT_VARIANTS)


def create_quit(options: Optional[QuitOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(QuitOptions, options, kwargs)
    plist = (
        PlistDict()
        .add("Action", opts.variant)
        .add("ActionUID", action_uid())
        .add("Application", application_dict(opts.target, opts.specific))
        .add("MacroActionType", "QuitSpecificApp")
        .add("Target", opts.target)
        .add("TimeOutAbortsMacro", opts.timeout_aborts)
    )
    return build("QuitSpecificApp", plist)


@dataclass(slots=True, frozen=True)
class ShowSpecificAppOptions:
    target: str = "Specific"
    specific: SpecificLike = None

    def __post_init__(self) -> None:
        validate_target(self.target)


def create_show_specific_app(options: Optional[ShowSpecificAppOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(ShowSpecificAppOptions, options, kwargs)
    plist = (
        new_action_dict()
        .add("Application", application_dict(opts.target, opts.specific))
        .add("MacroActionType", "ShowSpecificApp")
    )
    return build("ShowSpecificApp", plist)


@dataclass(slots=True, frozen=True)
class OpenOptions:
    path: str = ""
    target: str = "Front"
    specific: SpecificLike = None
    stop_on_failure: Optional[bool] = None
    notify_on_failure: Optional[bool] = None

    def __post_init__(self) -> None:
        validate_target(self.target)
        if not self.path:
            raise ActionConfigurationError("Open requires a path")


def create_open(options: Optional[OpenOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(OpenOptions, options, kwargs)
    default_app = _is_default_application(opts.target, opts.specific)
    plist = new_action_dict()
    if not default_app:
        plist.add("Application", application_dict(opts.target, opts.specific))
    plist.add("IsDefaultApplication", default_app)
    plist.add("MacroActionType", "Open1File")
    plist.extend(notify_on_failure_entries(opts.notify_on_failure))
    plist.add("Path", opts.path)
    plist.extend(stop_on_failure_entries(opts.stop_on_failure))
    return build("Open1File", plist)


@dataclass(slots=True, frozen=True)
class OpenURLOptions:
    url: str = ""
    target: str = "Front"
    specific: SpecificLike = None
    processing_mode: Optional[str] = None
    open_in_background: bool = False
    stop_on_failure: Optional[bool] = None
    notify_on_failure: Optional[bool] = None
    timeout_aborts: bool = True
    notify_on_timeout: bool = True

    def __post_init__(self) -> None:
        validate_target(self.target)
        validate_processing_mode(self.processing_mode)
        if not self.url:
            raise ActionConfigurationError("OpenURL requires a url")


def create_open_url(options: Optional[OpenURLOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(OpenURLOptions, options, kwargs)
    default_app = _is_default_application(opts.target, opts.specific)
    timeout = dict(timeout_entries(opts.timeout_aborts, opts.notify_on_timeout))
    plist = new_action_dict()
    if not default_app:
        plist.add("Application", application_dict(opts.target, opts.specific))
    plist.add("IsDefaultApplication", default_app)
    plist.add("MacroActionType", "OpenURL")
    plist.extend(notify_on_failure_entries(opts.notify_on_failure))
    plist.add("NotifyOnTimeOut", timeout.get("NotifyOnTimeOut"))
    if opts.open_in_background:
        plist.add("OpenInBackground", True)
    plist.add("ProcessingMode", opts.processing_mode)
    plist.extend(stop_on_failure_entries(opts.stop_on_failure))
    plist.add("TimeOutAbortsMacro", timeout["TimeOutAbortsMacro"])
    plist.add("URL", opts.url)
    return build("OpenURL", plist)


@dataclass(slots=True, frozen=True)
class SelectMenuItemOptions:
    menu_path: Sequence[str] = ()
    target: str = "Front"
    specific: SpecificLike = None
    stop_on_failure: Optional[bool] = None
    notify_on_failure: Optional[bool] = None

    def __post_init__(self) -> None:
        validate_target(self.target)
        if isinstance(self.menu_path, str) or not self.menu_path:
            raise ActionConfigurationError("menu_path (a list of menu and submenu titles) is required")


def create_select_menu_item(options: Optional[SelectMenuItemOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(SelectMenuItemOptions, options, kwargs)
    plist = (
        new_action_dict()
        .add("MacroActionType", "SelectMenuItem")
        .add("Menu", PlistArray(["" if item is None else str(item) for item in opts.menu_path]))
        .extend(notify_on_failure_entries(opts.notify_on_failure))
        .extend(stop_on_failure_entries(opts.stop_on_failure))
        .add("TargetApplication", application_dict(opts.target, opts.specific))
        .add("TargetingType", opts.target)
    )
    return build("SelectMenuItem", plist)


@dataclass(slots=True, frozen=True)
class PressButtonOptions:
    button_name: str = ""
    action: str = "PressButtonNamed"
    wait_for_enabled_button: bool = False
    timeout_aborts: bool = True
    notify_on_timeout: bool = True
    stop_on_failure: Optional[bool] = None
    notify_on_failure: Optional[bool] = None

    def __post_init__(self) -> None:
        require_choice("action", self.action, tuple(BUTTON_AX_ACTIONS))
        if not self.button_name:
            raise ActionConfigurationError("PressButton requires a button_name")


def create_press_button(options: Optional[PressButtonOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(PressButtonOptions, options, kwargs)
    plist = PlistDict().add("AXAction", BUTTON_AX_ACTIONS[opts.action])
    plist.add("ActionUID", action_uid())
    plist.add("ButtonName", opts.button_name)
    plist.add("MacroActionType", "PressButton")
    plist.extend(notify_on_failure_entries(opts.notify_on_failure))
    if opts.wait_for_enabled_button:
        timeout = dict(timeout_entries(opts.timeout_aborts, opts.notify_on_timeout))
        plist.add("NotifyOnTimeOut", timeout.get("NotifyOnTimeOut"))
    plist.extend(stop_on_failure_entries(opts.stop_on_failure))
    if opts.wait_for_enabled_button:
        plist.add("TimeOutAbortsMacro", opts.timeout_aborts)
        plist.add("WaitForEnabledButton", True)
    return build("PressButton", plist)
