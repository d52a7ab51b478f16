"""Turn normalised condition mappings into ordered plist dicts."""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional

from ..plist import PlistArray, PlistDict, Real
from ..plist.ordering import key_order
from ..templates.application import SpecificApp
from ..templates.screen_area import coerce_screen_area

SKIP = object()

ValueHook = Callable[[str, Any], Any]


def render_condition_value(key: str, value: Any) -> Any:
    """Map a raw condition value to the plist value the engine expects."""

    if isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else Real(value)
    if isinstance(value, (list, tuple)):
        return PlistArray([str(item) for item in value])
    if isinstance(value, SpecificApp):
        return value.to_plist()
    if isinstance(value, Mapping):
        if key == "Application":
            return SpecificApp.coerce(value).to_plist() if value else PlistDict()
        nested = {k: str(v) for k, v in value.items() if v is not None}
        return PlistDict.ordered(nested)
    render = getattr(value, "to_plist", None)
    if callable(render):
        return render()
    return str(value)


def screen_area_hook(key: str, value: Any) -> Any:
    area = coerce_screen_area(value)
    if area is None:
        return render_condition_value(key, value)
    return area.to_plist()


def pressed_only_when_false(key: str, value: Any) -> Any:
    return False if value is False else SKIP


def condition_plist(
    condition: Mapping[str, Any],
    hooks: Optional[Mapping[str, ValueHook]] = None,
) -> PlistDict:
    """Emit a normalised condition with canonical key order, skipping None values."""

    hooks = hooks or {}
    result = PlistDict()
    for key in key_order(condition.keys(), "condition"):
        value = condition[key]
        if value is None:
            continue
        hook = hooks.get(key)
        rendered = hook(key, value) if hook is not None else render_condition_value(key, value)
        if rendered is SKIP:
            continue
        result.add(key, rendered)
    return result


SCREEN_AREA_HOOKS: Dict[str, ValueHook] = {
    "ScreenArea": screen_area_hook,
    "ImageScreenArea": screen_area_hook,
}
OCR_HOOKS: Dict[str, ValueHook] = {"ImageScreenArea": screen_area_hook}
MOUSE_BUTTON_HOOKS: Dict[str, ValueHook] = {"Pressed": pressed_only_when_false}
