"""Per-variant condition normalisers.

Each normaliser takes a condition mapping (``ConditionType`` included) and
returns a new mapping shaped the way the engine re-exports it. They never
mutate their input, never raise on odd values and are idempotent.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from ..templates.screen_area import ScreenArea, coerce_screen_area

NAMED_CLIPBOARD_IMAGE_KEYS = ("ImageNamedClipboardName", "ImageNamedClipboardRedundandDisplayName")

FRONT_WINDOW_TITLE_REQUIRED = frozenset(
    {"TitleIs", "TitleIsNot", "TitleContains", "TitleDoesNotContain", "TitleMatches", "TitleDoesNotMatch"}
)
FRONT_WINDOW_TITLE_OPTIONAL = frozenset(
    {"ExistsButTitleIsNot", "ExistsButTitleDoesNotContain", "ExistsButTitleDoesNotMatch"}
)

# expected operator -> operator the engine stores alongside it
PIXEL_PAIRS: Dict[str, str] = {
    "Is": "IsNot",
    "IsNot": "IsBrighter",
    "IsBrighter": "IsDarker",
    "IsDarker": "IsMoreRed",
    "IsMoreRed": "IsLessRed",
    "IsLessRed": "IsMoreGreen",
    "IsMoreGreen": "IsLessGreen",
    "IsLessGreen": "IsMoreBlue",
    "IsMoreBlue": "IsLessBlueIsNot",
    "IsLessBlue": "IsLessBlue",
}

INCLUDE_ALL_VARIABLES = "9999"


def identity(condition: Mapping[str, Any]) -> Dict[str, Any]:
    return dict(condition)


def _drop(data: Dict[str, Any], *keys: str) -> None:
    for key in keys:
        data.pop(key, None)


def normalize_found_image(condition: Mapping[str, Any]) -> Dict[str, Any]:
    data = dict(condition)
    area = coerce_screen_area(data.get("ScreenArea"))
    data["ScreenArea"] = area if area is not None else ScreenArea("ScreenAll")
    source = data.get("ImageSource")
    if source == "Screen" and not data.get("ImageScreenArea"):
        data["ImageScreenArea"] = data["ScreenArea"]
    data.pop("ImageSelection", None)
    if source in (None, "", "Image"):
        _drop(data, "ImagePath", "ImageSource", *NAMED_CLIPBOARD_IMAGE_KEYS)
    elif source == "File":
        _drop(data, *NAMED_CLIPBOARD_IMAGE_KEYS)
    elif source == "NamedClipboard":
        _drop(data, "ImagePath")
    elif source in ("SystemClipboard", "TriggerClipboard", "Icon", "Screen"):
        _drop(data, "ImagePath", *NAMED_CLIPBOARD_IMAGE_KEYS)
    data.setdefault("DisplayMatches", False)
    data.setdefault("Fuzz", 0)
    if data["DisplayMatches"] is None:
        data["DisplayMatches"] = False
    if data["Fuzz"] is None:
        data["Fuzz"] = 0
    return data


def normalize_ocr(condition: Mapping[str, Any]) -> Dict[str, Any]:
    data = dict(condition)
    source = data.get("ImageSource")
    if source == "File":
        _drop(data, "ImageScreenArea", *NAMED_CLIPBOARD_IMAGE_KEYS)
    elif source == "NamedClipboard":
        _drop(data, "ImagePath", "ImageScreenArea")
    elif source == "Screen":
        _drop(data, "ImagePath", *NAMED_CLIPBOARD_IMAGE_KEYS)
    elif source in ("SystemClipboard", "TriggerClipboard", "Icon", "Image"):
        _drop(data, "ImagePath", "ImageScreenArea", *NAMED_CLIPBOARD_IMAGE_KEYS)
        if source == "Image":
            data.pop("ImageSource", None)
    return {key: value for key, value in data.items() if value is not None}


def normalize_window(condition: Mapping[str, Any]) -> Dict[str, Any]:
    """FrontWindow and AnyWindow share the front-application handling."""

    data = dict(condition)
    if data.get("IsFrontApplication") is None:
        data["IsFrontApplication"] = True
    if data["IsFrontApplication"]:
        data.pop("Application", None)
    elif not data.get("Application"):
        data["Application"] = {}
    kind = data.get("ConditionType")
    if kind == "FrontWindow":
        operator = data.get("FrontWindowConditionType")
        if operator in FRONT_WINDOW_TITLE_REQUIRED:
            if data.get("FrontWindowTitle") is None:
                data["FrontWindowTitle"] = "Untitled"
        elif operator in FRONT_WINDOW_TITLE_OPTIONAL:
            if data.get("FrontWindowTitle") is None:
                data["FrontWindowTitle"] = ""
        else:
            data.pop("FrontWindowTitle", None)
    elif kind == "AnyWindow" and data.get("AnyWindowTitle") is None:
        data["AnyWindowTitle"] = ""
    return data


def normalize_pixel(condition: Mapping[str, Any]) -> Dict[str, Any]:
    data = dict(condition)
    observed = data.get("PixelConditionType")
    expected = data.get("PixelConditionTypeGood")
    if observed not in PIXEL_PAIRS.values():
        observed = "IsNot"
    if expected not in PIXEL_PAIRS:
        expected = "Is"
    data["PixelConditionTypeGood"] = expected
    data["PixelConditionType"] = PIXEL_PAIRS[expected]
    return data


def normalize_script(condition: Mapping[str, Any]) -> Dict[str, Any]:
    data = dict(condition)
    include_all = data.pop("includeAllVariables", None)
    explicit = data.get("IncludedVariables")
    if include_all is True:
        data["IncludedVariables"] = [INCLUDE_ALL_VARIABLES]
    elif isinstance(explicit, (list, tuple)):
        data["IncludedVariables"] = [str(item) for item in explicit]
    else:
        data["IncludedVariables"] = []
    return data
