"""Name-to-factory registry and JSON action script loading.

An action script is a JSON list of ``{"kind": ..., "options": {...}}``
entries. Nested action lists (``actions``, ``then_actions``,
``else_actions`` and the ``actions`` of each switch case) use the same
shape and are built recursively.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Union

from ..exceptions import ActionConfigurationError
from . import application, clipboard, control, files, keyboard, mouse, system, text, variables
from .base import VirtualAction

logger = logging.getLogger(__name__)

Factory = Callable[..., VirtualAction]

ACTION_FACTORIES: Dict[str, Factory] = {
    "activate_application": application.create_activate_application,
    "quit": application.create_quit,
    "show_specific_app": application.create_show_specific_app,
    "open": application.create_open,
    "open_url": application.create_open_url,
    "select_menu_item": application.create_select_menu_item,
    "press_button": application.create_press_button,
    "cancel": control.create_cancel,
    "break_from_loop": control.create_break_from_loop,
    "continue_loop": control.create_continue_loop,
    "retry_this_loop": control.create_retry_this_loop,
    "group": control.create_group,
    "if_then_else": control.create_if_then_else,
    "while": control.create_while,
    "switch_case": control.create_switch_case,
    "pause": control.create_pause,
    "return": control.create_return,
    "insert_text": text.create_insert_text,
    "display_text_briefly": text.create_display_text_briefly,
    "display_text_window": text.create_display_text_window,
    "comment": text.create_comment,
    "set_variable": variables.create_set_variable,
    "set_variable_to_calculation": variables.create_set_variable_to_calculation,
    "use_variable": variables.create_use_variable,
    "copy": clipboard.create_copy,
    "cut": clipboard.create_cut,
    "paste": clipboard.create_paste,
    "set_clipboard_to_text": clipboard.create_set_clipboard_to_text,
    "clear_typed_string_buffer": system.create_clear_typed_string_buffer,
    "show_status_menu": system.create_show_status_menu,
    "notification": system.create_notification,
    "play_sound": system.create_play_sound,
    "file": files.create_file,
    "type_keystroke": keyboard.create_type_keystroke,
    "click_at_found_image": mouse.create_click_at_found_image,
    "move_and_click": mouse.create_move_and_click,
    "scroll_wheel_event": mouse.create_scroll_wheel_event,
}

_NESTED_ACTION_KEYS = ("actions", "then_actions", "else_actions")


def build_action(spec: Mapping[str, Any]) -> VirtualAction:
    """Build one action from a ``{"kind", "options"}`` mapping."""

    if not isinstance(spec, Mapping):
        raise ActionConfigurationError(f"Action entry must be an object, got {type(spec).__name__}")
    kind = spec.get("kind")
    factory = ACTION_FACTORIES.get(str(kind))
    if factory is None:
        raise ActionConfigurationError(f"Unknown action kind: {kind!r}")
    options = dict(spec.get("options") or {})
    for key in _NESTED_ACTION_KEYS:
        if key in options:
            options[key] = build_actions(options[key])
    if "cases" in options:
        options["cases"] = [_build_case(case) for case in options["cases"]]
    logger.debug("Building %s from script", kind)
    return factory(**options)


def _build_case(case: Any) -> Any:
    if isinstance(case, Mapping) and "actions" in case:
        case = dict(case)
        case["actions"] = build_actions(case["actions"])
    return case


def build_actions(specs: Any) -> List[VirtualAction]:
    if not isinstance(specs, list):
        raise ActionConfigurationError("An action list must be a JSON array")
    return [spec if isinstance(spec, VirtualAction) else build_action(spec) for spec in specs]


def load_action_script(path: Union[str, Path]) -> List[VirtualAction]:
    """Read a JSON action script from disk and build its actions."""

    script_path = Path(path)
    with script_path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and "actions" in data:
        data = data["actions"]
    actions = build_actions(data)
    logger.info("Loaded %d action(s) from %s", len(actions), script_path)
    return actions
