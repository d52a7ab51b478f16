from __future__ import annotations

import pytest

from km_actions.actions import (
    ActionSequence,
    create_click_at_found_image,
    create_copy,
    create_file,
    create_move_and_click,
    create_notification,
    create_paste,
    create_play_sound,
    create_scroll_wheel_event,
    create_type_keystroke,
)
from km_actions.exceptions import ActionConfigurationError, UnsupportedKeyError


def test_type_keystroke_combines_modifier_mask() -> None:
    action = create_type_keystroke(keystroke="Cmd+Shift+KeyS")
    assert action.plist.get("KeyCode") == 1
    assert action.plist.get("Modifiers") == 768
    assert "Press" not in action.plist.keys()


def test_type_keystroke_hold_produces_three_actions() -> None:
    sequence = create_type_keystroke(keystroke=36, hold_time=1.5)
    assert isinstance(sequence, ActionSequence)
    kinds = [action.kind for action in sequence.actions]
    assert kinds == ["SimulateKeystroke", "Pause", "SimulateKeystroke"]
    assert sequence.actions[0].plist.get("Press") == "PressAndHold"
    assert sequence.actions[1].plist.get("Time") == "1.5"
    assert sequence.actions[2].plist.get("Press") == "Release"


def test_type_keystroke_rejects_modifier_only_and_unknown_keys() -> None:
    with pytest.raises(ActionConfigurationError, match="modifier-only"):
        create_type_keystroke(keystroke="Cmd+Shift")
    with pytest.raises(UnsupportedKeyError):
        create_type_keystroke(keystroke="Cmd+Sparkle")
    with pytest.raises(ActionConfigurationError):
        create_type_keystroke(keystroke="A", press_and_repeat=True, press_and_hold=True)


def test_copy_and_paste_timeout_defaults_differ() -> None:
    copy = create_copy()
    paste = create_paste()
    assert copy.plist.get("TimeOutAbortsMacro") is True
    assert "NotifyOnTimeOut" not in copy.plist.keys()
    assert paste.plist.get("TimeOutAbortsMacro") is False
    assert paste.plist.get("NotifyOnTimeOut") is True


def test_file_single_path_operations_clear_destination() -> None:
    action = create_file(operation="Trash", source="/tmp/a", destination="/tmp/b")
    assert action.plist.get("Destination") == ""
    unique = create_file(operation="CreateUnique", source="/tmp/a", destination="/tmp", output_path="Result")
    assert unique.plist.get("OutputPath") == "Result"
    assert "OutputPath" not in action.plist.keys()


def test_play_sound_clamps_volume_and_omits_full_volume() -> None:
    assert create_play_sound(volume=250).plist.get("Volume") is None
    assert create_play_sound(volume=-3).plist.get("Volume") == 0
    assert create_play_sound(sound="Glass").plist.get("Path") == "/System/Library/Sounds/Glass.aiff"


def test_notification_with_custom_sound_adds_play_sound() -> None:
    result = create_notification(title="Done", sound="/Users/me/ding.aiff")
    assert isinstance(result, ActionSequence)
    notification, sound = result.actions
    assert notification.plist.get("SoundName") == ""
    assert sound.plist.get("Path") == "/Users/me/ding.aiff"
    assert create_notification(title="Done", sound="Ping").plist.get("SoundName") == "Ping"


def test_click_relative_to_window_drops_image_keys() -> None:
    action = create_move_and_click(horizontal=10, vertical=20.0)
    keys = action.plist.keys()
    assert "ScreenArea" not in keys
    assert "ImageSource" not in keys
    assert action.plist.get("RelativeCorner") == "TopLeft"
    assert action.plist.get("VerticalPositionExpression") == "20"


def test_move_and_click_cannot_target_an_image() -> None:
    with pytest.raises(ActionConfigurationError):
        create_move_and_click(relative="Image")


def test_click_at_found_image_from_screen_source() -> None:
    action = create_click_at_found_image(image_source="Screen", click_kind="DoubleClick", mouse_drag="Drag", fuzz=140)
    assert action.plist.get("ClickCount") == 2
    assert action.plist.get("MouseDrag") == "None"
    assert action.plist.get("Fuzz") == 100
    assert action.plist.get("ImageSource") == "Screen"
    assert action.plist.get("ImageScreenArea").get("ScreenAreaType") == "ScreenAll"


def test_click_at_found_image_file_source_requires_path() -> None:
    with pytest.raises(ActionConfigurationError, match="filePath"):
        create_click_at_found_image(image_source="File")


def test_release_never_restores_mouse_location() -> None:
    action = create_click_at_found_image(click_kind="Release", restore_mouse_location=True)
    assert action.plist.get("Action") == "MoveAndClick"
    assert action.plist.get("ClickCount") == -1
    assert action.plist.get("RestoreMouseLocation") is False


def test_scroll_wheel_event_uses_given_uid() -> None:
    action = create_scroll_wheel_event(scroll_amount=5, direction="Up", action_uid=42)
    assert action.plist.get("ActionUID") == 42
    assert action.plist.keys() == ["ActionUID", "MacroActionType", "ScrollAmountExpression", "ScrollDirection"]
