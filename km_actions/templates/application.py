"""Application target dictionaries and window placement presets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union

from ..exceptions import ActionConfigurationError
from ..plist import PlistDict

APPLICATION_TARGETS = ("Front", "Specific")

MOVE_AND_RESIZE_PRESETS = (
    "Custom",
    "FullScreen",
    "LeftColumn",
    "RightColumn",
    "TopHalf",
    "BottomHalf",
    "TopLeft",
    "TopRight",
    "BottomLeft",
    "BottomRight",
)


@dataclass(slots=True, frozen=True)
class SpecificApp:
    """Identifies one application: by name, bundle id or path."""

    name: Optional[str] = None
    bundle_identifier: Optional[str] = None
    path: Optional[str] = None
    match: Optional[str] = None
    new_file: Optional[str] = None

    @classmethod
    def coerce(cls, value: Union["SpecificApp", Mapping[str, Any], None]) -> "SpecificApp":
        if value is None:
            return cls()
        if isinstance(value, SpecificApp):
            return value
        if not isinstance(value, Mapping):
            raise ActionConfigurationError(f"Invalid application description: {value!r}")
        return cls(
            name=value.get("name") or value.get("Name"),
            bundle_identifier=value.get("bundle_identifier") or value.get("bundleIdentifier") or value.get("BundleIdentifier"),
            path=value.get("path") or value.get("Path"),
            match=value.get("match") or value.get("Match"),
            new_file=value.get("new_file") or value.get("newFile") or value.get("NewFile"),
        )

    def is_empty(self) -> bool:
        return not any((self.name, self.bundle_identifier, self.path, self.match, self.new_file))

    def to_plist(self) -> PlistDict:
        fields = {
            "BundleIdentifier": self.bundle_identifier,
            "Match": self.match,
            "Name": self.name,
            "NewFile": self.new_file,
            "Path": self.path,
        }
        return PlistDict.ordered({k: v for k, v in fields.items() if v}, "application")


def validate_target(target: str) -> str:
    if target not in APPLICATION_TARGETS:
        raise ActionConfigurationError(f"Application target must be one of {APPLICATION_TARGETS}, got {target!r}")
    return target


def application_dict(target: str = "Front", specific: Union[SpecificApp, Mapping[str, Any], None] = None) -> PlistDict:
    """Front yields an empty dict; Specific yields the canonical application keys."""

    validate_target(target)
    if target != "Specific":
        return PlistDict()
    return SpecificApp.coerce(specific).to_plist()


def move_and_resize_defaults(preset: str) -> Tuple[str, str, str, str]:
    """Default left/top/width/height expressions for a placement preset."""

    left, top, width, height = "Left", "Top", "Width", "Height"
    half_width = preset in ("LeftColumn", "RightColumn", "TopLeft", "TopRight", "BottomLeft", "BottomRight")
    half_height = preset in ("TopHalf", "BottomHalf", "TopLeft", "TopRight", "BottomLeft", "BottomRight")
    if preset in ("RightColumn", "TopRight", "BottomRight"):
        left = "MidX"
    if preset in ("BottomHalf", "BottomLeft", "BottomRight"):
        top = "MidY"
    return (
        f"SCREENVISIBLE(Main,{left})",
        f"SCREENVISIBLE(Main,{top})",
        f"SCREENVISIBLE(Main,{width})" + ("*50%" if half_width else ""),
        f"SCREENVISIBLE(Main,{height})" + ("*50%" if half_height else ""),
    )
