"""Condition values and the closed registry of condition variants."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Tuple

from ..exceptions import ActionConfigurationError
from ..plist import PlistArray, PlistDict
from . import normalize
from .render import MOUSE_BUTTON_HOOKS, OCR_HOOKS, SCREEN_AREA_HOOKS, ValueHook, condition_plist

Normalizer = Callable[[Mapping[str, Any]], Dict[str, Any]]

CONDITION_TYPES: Tuple[str, ...] = (
    "ActionResult",
    "Application",
    "Button",
    "Calculation",
    "Clipboard",
    "EnvironmentVariable",
    "FileAttribute",
    "ScreenImage",
    "Key",
    "Location",
    "Macro",
    "Menu",
    "Modifiers",
    "Disk",
    "MouseButton",
    "OCR",
    "Path",
    "Pixel",
    "Script",
    "Text",
    "TypedString",
    "USBDevice",
    "Variable",
    "AnyWindow",
    "FrontWindow",
    "WirelessNetwork",
)

CONDITION_LIST_MATCHES = ("All", "Any", "None", "NotAll")


@dataclass(slots=True, frozen=True)
class ConditionVariant:
    name: str
    required: Tuple[str, ...] = ()
    normalizer: Normalizer = normalize.identity
    hooks: Mapping[str, ValueHook] = field(default_factory=dict)


def _variant(name: str, *required: str, normalizer: Normalizer = normalize.identity, hooks=None) -> ConditionVariant:
    return ConditionVariant(name=name, required=required, normalizer=normalizer, hooks=hooks or {})


CONDITION_VARIANTS: Dict[str, ConditionVariant] = {
    v.name: v
    for v in (
        _variant("ActionResult", "ActionResultConditionType"),
        _variant("Application", "ApplicationConditionType", "Application"),
        _variant("Button", "ButtonConditionType", "ButtonTitle", "ButtonConditionSelectionType"),
        _variant("Calculation", "Text"),
        _variant("Clipboard", "ClipboardConditionType"),
        _variant("EnvironmentVariable", "EnvironmentVariable", "EnvironmentVariableConditionType"),
        _variant("FileAttribute", "Path", "FileAttribute", "FileAttrtibuteConditionType", "ConditionValue"),
        _variant("ScreenImage", "ScreenImageConditionType", normalizer=normalize.normalize_found_image, hooks=SCREEN_AREA_HOOKS),
        _variant("Key", "KeyCode", "KeyConditionType"),
        _variant("Location", "LocationConditionType", "LocationName"),
        _variant("Macro", "MacroUID", "MacroConditionType"),
        _variant("Menu", "MenuConditionType", "MenuTitle", "MenuConditionSelectionType"),
        _variant("Modifiers", "ModifiersDown", "ModifiersUp"),
        _variant("Disk", "DiskConditionType", "DiskTitle", "DiskConditionSelectionType"),
        _variant("MouseButton", "Button", hooks=MOUSE_BUTTON_HOOKS),
        _variant("OCR", "OCRConditionType", normalizer=normalize.normalize_ocr, hooks=OCR_HOOKS),
        _variant("Path", "Path", "PathConditionType"),
        _variant(
            "Pixel",
            "HorizontalPositionExpression",
            "VerticalPositionExpression",
            "Red",
            "Green",
            "Blue",
            normalizer=normalize.normalize_pixel,
        ),
        _variant("Script", "ScriptConditionSourceType", "ScriptConditionType", normalizer=normalize.normalize_script),
        _variant("Text", "Text", "TextConditionType", "TextValue"),
        _variant("TypedString", "TrippedCaseBehaviour"),
        _variant("USBDevice", "USBDeviceConditionType", "USBDeviceConditionName", "USBDeviceConditionSelectionType"),
        _variant("Variable", "Variable", "VariableConditionType", "VariableValue"),
        _variant("AnyWindow", "AnyWindowConditionType", normalizer=normalize.normalize_window),
        _variant("FrontWindow", "FrontWindowConditionType", normalizer=normalize.normalize_window),
        _variant(
            "WirelessNetwork",
            "WirelessNetworkConditionType",
            "WirelessNetworkConditionName",
            "WirelessNetworkMatchType",
        ),
    )
}


def verify_condition_registry(variants: Mapping[str, ConditionVariant] = CONDITION_VARIANTS) -> None:
    """Fail fast when a condition type has no normaliser or renderer hooks registered."""

    missing = [name for name in CONDITION_TYPES if name not in variants]
    if missing:
        raise ActionConfigurationError(f"Condition variants missing from registry: {', '.join(missing)}")
    for name, variant in variants.items():
        if variant.name != name:
            raise ActionConfigurationError(f"Condition variant registered under {name!r} is named {variant.name!r}")
        if not callable(variant.normalizer):
            raise ActionConfigurationError(f"Condition variant {name!r} has no normaliser")
        bad_hooks = [key for key, hook in variant.hooks.items() if not callable(hook)]
        if bad_hooks:
            raise ActionConfigurationError(f"Condition variant {name!r} has invalid renderer hooks: {bad_hooks}")


verify_condition_registry()


@dataclass(slots=True, frozen=True)
class Condition:
    """One entry of a condition list, keyed the way the engine stores it."""

    condition_type: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        variant = CONDITION_VARIANTS.get(self.condition_type)
        if variant is None:
            raise ActionConfigurationError(f"Unknown condition type: {self.condition_type!r}")
        missing = [key for key in variant.required if self.fields.get(key) is None]
        if missing:
            raise ActionConfigurationError(
                f"{self.condition_type} condition requires {', '.join(missing)}"
            )
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def create(cls, condition_type: str, include_all_variables: bool | None = None, **fields: Any) -> "Condition":
        if include_all_variables is not None:
            fields["includeAllVariables"] = include_all_variables
        return cls(condition_type, fields)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Condition":
        if isinstance(data, Condition):
            return data
        if not isinstance(data, Mapping) or "ConditionType" not in data:
            raise ActionConfigurationError(f"Condition mapping requires a ConditionType: {data!r}")
        fields = {key: value for key, value in data.items() if key != "ConditionType"}
        return cls(str(data["ConditionType"]), fields)

    @property
    def variant(self) -> ConditionVariant:
        return CONDITION_VARIANTS[self.condition_type]

    def as_mapping(self) -> Dict[str, Any]:
        return {"ConditionType": self.condition_type, **self.fields}

    def normalized(self) -> Dict[str, Any]:
        return self.variant.normalizer(self.as_mapping())

    def to_plist(self) -> PlistDict:
        return condition_plist(self.normalized(), self.variant.hooks)

    def render(self, depth: int = 0) -> List[str]:
        return self.to_plist().render(depth)

    def to_xml(self) -> str:
        return "\n".join(self.render(0))


def coerce_condition(value: Any) -> Condition:
    if isinstance(value, Condition):
        return value
    return Condition.from_mapping(value)


def condition_to_xml(condition: Any) -> str:
    """Render a Condition, or a mapping carrying ``ConditionType``, as a ``<dict>`` block."""

    return coerce_condition(condition).to_xml()


def condition_list_plist(conditions: Any, match: str = "All") -> PlistDict:
    """``{ConditionList, ConditionListMatch}`` as used by If, While and friends."""

    if match not in CONDITION_LIST_MATCHES:
        raise ActionConfigurationError(f"Condition list match must be one of {CONDITION_LIST_MATCHES}, got {match!r}")
    items = PlistArray([coerce_condition(c).to_plist() for c in conditions or ()])
    return PlistDict().add("ConditionList", items).add("ConditionListMatch", match)
