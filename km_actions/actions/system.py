"""System actions: engine housekeeping, notifications and sounds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from ..plist import PlistDict, action_uid
from ..tokens import resolve_token_preset
from .base import ActionSequence, DictAction, build, coerce_options

SYSTEM_SOUNDS = (
    "Basso",
    "Blow",
    "Bottle",
    "Frog",
    "Funk",
    "Glass",
    "Hero",
    "Morse",
    "Ping",
    "Pop",
    "Purr",
    "Sosumi",
    "Submarine",
    "Tink",
)
SYSTEM_SOUND_PATH = "/System/Library/Sounds/{}.aiff"


def _is_sound_path(sound: str) -> bool:
    return "/" in sound


def _system_action(name: str) -> DictAction:
    plist = (
        PlistDict()
        .add("ActionUID", action_uid())
        .add("IsDisclosed", False)
        .add("MacroActionType", "SystemAction")
        .add("SystemAction", name)
    )
    return build("SystemAction", plist)


def create_clear_typed_string_buffer() -> DictAction:
    return _system_action("ClearTypedString")


def create_show_status_menu() -> DictAction:
    return _system_action("ShowStatusMenu")


@dataclass(slots=True, frozen=True)
class PlaySoundOptions:
    sound: str = "Tink"
    asynchronously: bool = True
    volume: float = 75

    @property
    def clamped_volume(self) -> int:
        return int(round(max(0.0, min(100.0, float(self.volume)))))

    @property
    def path(self) -> str:
        return self.sound if _is_sound_path(self.sound) else SYSTEM_SOUND_PATH.format(self.sound)


def create_play_sound(options: Optional[PlaySoundOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(PlaySoundOptions, options, kwargs)
    plist = PlistDict().add("ActionUID", action_uid())
    if opts.asynchronously:
        plist.add("Asynchronously", True)
    plist.add("DeviceID", "SOUNDEFFECTS")
    plist.add("MacroActionType", "PlaySound")
    plist.add("Path", opts.path)
    plist.add("TimeOutAbortsMacro", True)
    if opts.clamped_volume != 100:
        plist.add("Volume", opts.clamped_volume)
    return build("PlaySound", plist)


@dataclass(slots=True, frozen=True)
class NotificationOptions:
    title: str = ""
    subtitle: str = ""
    body: str = ""
    sound: str = ""
    title_preset: Optional[str] = None
    subtitle_preset: Optional[str] = None
    body_preset: Optional[str] = None


def create_notification(
    options: Optional[NotificationOptions] = None, /, **kwargs: Any
) -> Union[DictAction, ActionSequence]:
    """Display a notification.

    A ``sound`` that looks like a file path cannot be named in the
    notification itself, so it is played by a following PlaySound action.
    """

    opts = coerce_options(NotificationOptions, options, kwargs)
    custom_sound = _is_sound_path(opts.sound)
    plist = (
        PlistDict()
        .add("ActionUID", action_uid())
        .add("MacroActionType", "Notification")
        .add("SoundName", "" if custom_sound else opts.sound)
        .add("Subtitle", resolve_token_preset(opts.subtitle, opts.subtitle_preset))
        .add("Text", resolve_token_preset(opts.body, opts.body_preset))
        .add("Title", resolve_token_preset(opts.title, opts.title_preset))
    )
    notification = build("Notification", plist)
    if custom_sound:
        return ActionSequence([notification, create_play_sound(sound=opts.sound)])
    return notification
