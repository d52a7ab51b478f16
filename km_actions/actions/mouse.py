"""Mouse actions: clicks relative to a found image, window or screen, and scrolling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ..exceptions import ActionConfigurationError
from ..plist import PlistDict, action_uid, number_text
from ..templates.flags import notify_on_failure_entries, stop_on_failure_entries
from ..templates.keystroke import first_modifier_mask
from ..templates.screen_area import ScreenArea, coerce_screen_area
from .base import DictAction, build, coerce_options, new_action_dict, require_choice

CLICK_KINDS = ("Move", "Click", "DoubleClick", "TripleClick", "Release")
CLICK_COUNT = {"Click": 1, "DoubleClick": 2, "TripleClick": 3}
BUTTON_INT = {"Left": 0, "Right": 1, "Center": 2, "Button4": 3, "Button5": 4, "Button6": 5}
RELATIVE_TO = ("Image", "Window", "Screen", "Mouse", "Absolute")
RELATIVE_CORNERS = ("Center", "TopLeft", "TopRight", "BottomLeft", "BottomRight")
IMAGE_SOURCES = ("Image", "Icon", "SystemClipboard", "TriggerClipboard", "NamedClipboard", "File", "Screen")
IMAGE_SELECTIONS = ("Unique", "Best", "Top", "Left", "Bottom", "Right")
# the last three are accepted but the engine resets them to None for single and double clicks
MOUSE_DRAGS = ("None", "To", "Absolute", "Relative", "Hold", "From", "Drag", "Release")
SCROLL_DIRECTIONS = ("Up", "Down", "Left", "Right")

DEFAULT_NAMED_CLIPBOARD_UUID = "FE1390C3-74DF-4983-9C6B-E2C441F97963"
DEFAULT_NAMED_CLIPBOARD_LABEL = "Unnamed Named Clipboard"
DEFAULT_FUZZ = 15

AreaLike = Union[ScreenArea, Mapping[str, Any], str, None]


def _area(value: AreaLike, fallback: Optional[ScreenArea] = None) -> Optional[ScreenArea]:
    if value is None:
        return fallback
    area = coerce_screen_area(value)
    if area is None:
        raise ActionConfigurationError(f"Invalid screen area: {value!r}")
    return area


@dataclass(slots=True, frozen=True)
class ClickAtFoundImageOptions:
    click_kind: str = "Click"
    button: str = "Left"
    click_modifiers: Union[int, str] = 0
    horizontal: Union[int, float, str] = 0
    vertical: Union[int, float, str] = 0
    relative: str = "Image"
    relative_corner: Optional[str] = None
    image_source: str = "Image"
    fuzz: Optional[float] = None
    wait_for_image: Optional[bool] = None
    image_selection: str = "Unique"
    named_clipboard_uuid: Optional[str] = None
    file_path: Optional[str] = None
    screen_area: AreaLike = None
    image_screen_area: AreaLike = None
    mouse_drag: str = "None"
    drag_target_x: Union[int, float, str] = 0
    drag_target_y: Union[int, float, str] = 0
    restore_mouse_location: bool = False

    def __post_init__(self) -> None:
        require_choice("click_kind", self.click_kind, CLICK_KINDS)
        require_choice("button", self.button, tuple(BUTTON_INT))
        require_choice("relative", self.relative, RELATIVE_TO)
        if self.relative_corner is not None:
            require_choice("relative_corner", self.relative_corner, RELATIVE_CORNERS)
        require_choice("image_source", self.image_source, IMAGE_SOURCES)
        require_choice("image_selection", self.image_selection, IMAGE_SELECTIONS)
        require_choice("mouse_drag", self.mouse_drag, MOUSE_DRAGS)
        if self.image_source == "File" and not self.file_path:
            raise ActionConfigurationError("filePath must be supplied when imageSource === 'File'")

    @property
    def effective_restore(self) -> bool:
        # the engine hides restore-location for releases
        return False if self.click_kind == "Release" else bool(self.restore_mouse_location)

    @property
    def effective_corner(self) -> str:
        if self.relative_corner is not None:
            return self.relative_corner
        return "TopLeft" if self.relative in ("Mouse", "Absolute") else "Center"

    @property
    def effective_drag(self) -> str:
        if self.click_kind in ("Click", "DoubleClick") and self.mouse_drag in ("From", "Drag", "Release"):
            return "None"
        return self.mouse_drag

    @property
    def effective_fuzz(self) -> int:
        if self.fuzz is None or isinstance(self.fuzz, bool):
            return DEFAULT_FUZZ
        return int(max(0, min(100, round(self.fuzz))))

    def action_and_count(self):
        if self.click_kind == "Move":
            return "Move", 0
        if self.click_kind == "Release":
            return "MoveAndClick", -1
        return ("Click" if self.effective_restore else "MoveAndClick"), CLICK_COUNT[self.click_kind]


def create_click_at_found_image(options: Optional[ClickAtFoundImageOptions] = None, /, **kwargs: Any) -> DictAction:
    """Move to and click a point measured from a found image, window, screen or the mouse.

    Template-source keys (image path, named clipboard, image screen area and
    source) are only kept when the point is relative to the found image.
    """

    opts = coerce_options(ClickAtFoundImageOptions, options, kwargs)
    action, click_count = opts.action_and_count()
    screen_area = _area(opts.screen_area, ScreenArea("ScreenAll"))
    relative_to_image = opts.relative == "Image"
    source = opts.image_source

    plist = (
        PlistDict()
        .add("Action", action)
        .add("ActionUID", action_uid())
        .add("Button", BUTTON_INT[opts.button])
        .add("ClickCount", click_count)
        .add("DisplayMatches", False)
        .add("DragHorizontalPosition", number_text(opts.drag_target_x))
        .add("DragVerticalPosition", number_text(opts.drag_target_y))
        .add("Fuzz", opts.effective_fuzz)
        .add("HorizontalPositionExpression", number_text(opts.horizontal))
    )
    if relative_to_image:
        if source == "File":
            plist.add("ImagePath", opts.file_path)
        elif source == "NamedClipboard":
            plist.add("ImageNamedClipboardName", opts.named_clipboard_uuid or DEFAULT_NAMED_CLIPBOARD_UUID)
            plist.add("ImageNamedClipboardRedundandDisplayName", DEFAULT_NAMED_CLIPBOARD_LABEL)
        elif source == "Screen":
            plist.add("ImageScreenArea", _area(opts.image_screen_area, screen_area).to_plist())
        if opts.image_selection != "Unique":
            plist.add("ImageSelection", opts.image_selection)
        if source != "Image":
            plist.add("ImageSource", source)
    plist.add("MacroActionType", "MouseMoveAndClick")
    plist.add("Modifiers", first_modifier_mask(opts.click_modifiers))
    plist.add("MouseDrag", opts.effective_drag)
    plist.add("Relative", opts.relative)
    plist.add("RelativeCorner", opts.effective_corner)
    plist.add("RestoreMouseLocation", opts.effective_restore)
    if relative_to_image:
        plist.add("ScreenArea", screen_area.to_plist())
    plist.add("VerticalPositionExpression", number_text(opts.vertical))
    if opts.wait_for_image is True:
        plist.add("TimeOutAbortsMacro", True)
        plist.add("WaitForImage", True)
    return build("MouseMoveAndClick", plist)


@dataclass(slots=True, frozen=True)
class MoveAndClickOptions:
    click_kind: str = "Click"
    button: str = "Left"
    click_modifiers: Union[int, str] = 0
    horizontal: Union[int, float, str] = 0
    vertical: Union[int, float, str] = 0
    relative: str = "Window"
    relative_corner: str = "TopLeft"
    mouse_drag: str = "None"
    drag_target_x: Union[int, float, str] = 0
    drag_target_y: Union[int, float, str] = 0
    restore_mouse_location: bool = False

    def __post_init__(self) -> None:
        if self.relative == "Image":
            raise ActionConfigurationError("MoveAndClick positions relative to a window, screen or the mouse, not an image")


def create_move_and_click(options: Optional[MoveAndClickOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(MoveAndClickOptions, options, kwargs)
    return create_click_at_found_image(
        click_kind=opts.click_kind,
        button=opts.button,
        click_modifiers=opts.click_modifiers,
        horizontal=opts.horizontal,
        vertical=opts.vertical,
        relative=opts.relative,
        relative_corner=opts.relative_corner,
        mouse_drag=opts.mouse_drag,
        drag_target_x=opts.drag_target_x,
        drag_target_y=opts.drag_target_y,
        restore_mouse_location=opts.restore_mouse_location,
        fuzz=DEFAULT_FUZZ,
        image_selection="Unique",
    )


@dataclass(slots=True, frozen=True)
class ScrollWheelEventOptions:
    scroll_amount: Union[int, float, str] = 0
    direction: str = "Down"
    stop_on_failure: Optional[bool] = None
    notify_on_failure: Optional[bool] = None
    action_uid: Optional[int] = None

    def __post_init__(self) -> None:
        require_choice("direction", self.direction, SCROLL_DIRECTIONS)


def create_scroll_wheel_event(options: Optional[ScrollWheelEventOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(ScrollWheelEventOptions, options, kwargs)
    plist = (
        new_action_dict(opts.action_uid)
        .add("MacroActionType", "ScrollWheelEvent")
        .extend(notify_on_failure_entries(opts.notify_on_failure))
        .add("ScrollAmountExpression", number_text(opts.scroll_amount))
        .add("ScrollDirection", opts.direction)
        .extend(stop_on_failure_entries(opts.stop_on_failure, default=False))
    )
    return build("ScrollWheelEvent", plist)
