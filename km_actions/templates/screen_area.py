"""Screen and window area descriptions used by image and OCR searches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ..exceptions import ActionConfigurationError
from ..plist import PlistDict

SIMPLE_AREA_TYPES = (
    "ScreenAll",
    "ScreenMain",
    "ScreenSecond",
    "ScreenThird",
    "ScreenInternal",
    "ScreenExternal",
    "ScreenFront",
    "ScreenBack",
    "ScreenBack2",
    "ScreenMouse",
    "WindowFront",
)
INDEXED_AREA_TYPES = ("ScreenIndex", "WindowIndex")
NAMED_WINDOW_AREA_TYPES = ("WindowName", "WindowNameContaining", "WindowNameMatching")
AREA_TYPES = SIMPLE_AREA_TYPES + INDEXED_AREA_TYPES + NAMED_WINDOW_AREA_TYPES + ("Area",)


@dataclass(slots=True, frozen=True)
class ScreenArea:
    type: str = "ScreenAll"
    index: Optional[Union[int, str]] = None
    name: Optional[str] = None
    left: Optional[Union[int, str]] = None
    top: Optional[Union[int, str]] = None
    width: Optional[Union[int, str]] = None
    height: Optional[Union[int, str]] = None

    def __post_init__(self) -> None:
        if self.type not in AREA_TYPES:
            raise ActionConfigurationError(f"Unknown screen area type: {self.type!r}")
        if self.type in INDEXED_AREA_TYPES and self.index is None:
            raise ActionConfigurationError(f"{self.type} requires an index")
        if self.type in NAMED_WINDOW_AREA_TYPES and self.name is None:
            raise ActionConfigurationError(f"{self.type} requires a window name")
        if self.type == "Area" and None in (self.left, self.top, self.width, self.height):
            raise ActionConfigurationError("Area requires left, top, width and height")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ScreenArea":
        return cls(
            type=str(data.get("type", "")),
            index=data.get("index"),
            name=data.get("name"),
            left=data.get("left"),
            top=data.get("top"),
            width=data.get("width"),
            height=data.get("height"),
        )

    def to_plist(self) -> PlistDict:
        fields = {"ScreenAreaType": self.type}
        if self.type in INDEXED_AREA_TYPES:
            fields["IndexExpression"] = str(self.index)
        elif self.type in NAMED_WINDOW_AREA_TYPES:
            fields["WindowName"] = str(self.name)
        elif self.type == "Area":
            fields.update(
                LeftExpression=str(self.left),
                TopExpression=str(self.top),
                WidthExpression=str(self.width),
                HeightExpression=str(self.height),
            )
        return PlistDict.ordered(fields)

    def render(self, depth: int):
        return self.to_plist().render(depth)


def coerce_screen_area(value: Any) -> Optional[ScreenArea]:
    """Return a ScreenArea for ``value``, or None when it is missing or invalid."""

    if isinstance(value, ScreenArea):
        return value
    if isinstance(value, str):
        value = {"type": value}
    if isinstance(value, Mapping) and value.get("type"):
        try:
            return ScreenArea.from_mapping(value)
        except ActionConfigurationError:
            return None
    return None


def screen_area_dict(area: Union[ScreenArea, Mapping[str, Any], str]) -> PlistDict:
    resolved = coerce_screen_area(area)
    if resolved is None:
        raise ActionConfigurationError(f"Invalid screen area: {area!r}")
    return resolved.to_plist()
