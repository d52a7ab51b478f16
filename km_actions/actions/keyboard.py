"""Simulated keystrokes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ..exceptions import ActionConfigurationError
from ..plist import PlistDict
from ..templates.keystroke import normalize_shortcut
from .base import ActionSequence, DictAction, build, coerce_options, new_action_dict
from .control import create_pause

Keystroke = Union[int, str, Mapping[int, Optional[int]]]


@dataclass(slots=True, frozen=True)
class TypeKeystrokeOptions:
    keystroke: Keystroke = ""
    press_and_hold: bool = False
    press_and_repeat: bool = False
    hold_time: Optional[float] = None

    def __post_init__(self) -> None:
        if self.press_and_repeat and (self.press_and_hold or self.hold_time is not None):
            raise ActionConfigurationError("pressAndRepeat cannot be combined with pressAndHold or holdTime")

    @property
    def uses_hold(self) -> bool:
        return True if self.hold_time is not None else self.press_and_hold


def _simulate(key_code: int, modifiers: int, press: Optional[str] = None) -> DictAction:
    plist = (
        new_action_dict()
        .add("KeyCode", key_code)
        .add("MacroActionType", "SimulateKeystroke")
        .add("Modifiers", modifiers)
        .add("Press", press)
        .add("ReleaseAll", False)
        .add("TargetApplication", PlistDict())
        .add("TargetingType", "Front")
    )
    return build("SimulateKeystroke", plist)


def create_type_keystroke(
    options: Optional[TypeKeystrokeOptions] = None, /, **kwargs: Any
) -> Union[DictAction, ActionSequence]:
    """Type a keystroke once, repeat it, or hold it for ``hold_time`` seconds.

    Holding produces three actions: press and hold, a pause, then release.
    """

    opts = coerce_options(TypeKeystrokeOptions, options, kwargs)
    ((modifiers, key_code),) = normalize_shortcut(opts.keystroke).items()
    if key_code is None:
        raise ActionConfigurationError(
            f"TypeKeystroke action requires a key, but received modifier-only keystroke: {opts.keystroke!r}"
        )

    if opts.uses_hold:
        pause = create_pause(time=opts.hold_time) if opts.hold_time is not None else create_pause()
        return ActionSequence(
            [
                _simulate(key_code, modifiers, "PressAndHold"),
                pause,
                _simulate(key_code, modifiers, "Release"),
            ]
        )
    if opts.press_and_repeat:
        return _simulate(key_code, modifiers, "PressAndRepeat")
    return _simulate(key_code, modifiers)
