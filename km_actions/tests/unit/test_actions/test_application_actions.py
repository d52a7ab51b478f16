from __future__ import annotations

import pytest

from km_actions.actions import (
    create_activate_application,
    create_open,
    create_open_url,
    create_press_button,
    create_quit,
    create_select_menu_item,
    create_show_specific_app,
)
from km_actions.actions.application import ActivateOptions
from km_actions.exceptions import ActionConfigurationError


def test_quit_front_app_with_timeout_aborts() -> None:
    action = create_quit(timeout_aborts=True)
    xml = action.to_xml()
    assert action.plist.keys() == ["Action", "ActionUID", "Application", "MacroActionType", "Target", "TimeOutAbortsMacro"]
    assert "\t\t<key>Application</key>\n\t\t<dict/>" in xml
    assert "\t\t<key>TimeOutAbortsMacro</key>\n\t\t<true/>" in xml
    assert xml.startswith("\t<dict>")


def test_quit_specific_app_orders_application_keys() -> None:
    action = create_quit(
        variant="ForceQuit",
        target="Specific",
        specific={"name": "Safari", "bundle_identifier": "com.apple.Safari", "path": "/Applications/Safari.app"},
    )
    application = action.plist.get("Application")
    assert application.keys() == ["BundleIdentifier", "Name", "Path"]
    assert action.plist.get("Action") == "ForceQuit"


def test_activate_accepts_options_instance_or_mapping() -> None:
    from_instance = create_activate_application(ActivateOptions(all_windows=True))
    from_mapping = create_activate_application({"all_windows": True})
    assert from_instance.plist.keys() == from_mapping.plist.keys()
    assert from_instance.plist.get("AllWindows") is True


def test_options_and_kwargs_cannot_be_mixed() -> None:
    with pytest.raises(ActionConfigurationError, match="not both"):
        create_activate_application(ActivateOptions(), all_windows=True)


def test_unknown_option_is_rejected() -> None:
    with pytest.raises(ActionConfigurationError, match="Unknown options"):
        create_activate_application(colour="red")


def test_invalid_target_is_rejected() -> None:
    with pytest.raises(ActionConfigurationError):
        create_show_specific_app(target="Somewhere")


def test_open_with_default_application_omits_application() -> None:
    action = create_open(path="~/Desktop/notes.txt")
    assert "Application" not in action.plist.keys()
    assert action.plist.get("IsDefaultApplication") is True


def test_open_requires_path() -> None:
    with pytest.raises(ActionConfigurationError, match="path"):
        create_open()


def test_open_url_flags_only_when_non_default() -> None:
    plain = create_open_url(url="https://example.com")
    assert plain.plist.keys() == ["ActionUID", "IsDefaultApplication", "MacroActionType", "TimeOutAbortsMacro", "URL"]
    tuned = create_open_url(
        url="https://example.com",
        open_in_background=True,
        notify_on_failure=False,
        stop_on_failure=False,
        notify_on_timeout=False,
    )
    assert tuned.plist.get("OpenInBackground") is True
    assert tuned.plist.get("NotifyOnFailure") is False
    assert tuned.plist.get("StopOnFailure") is False
    assert tuned.plist.get("NotifyOnTimeOut") is False


def test_select_menu_item_renders_menu_path() -> None:
    action = create_select_menu_item(menu_path=["File", "Export", "PDF"])
    xml = action.to_xml()
    assert "<string>Export</string>" in xml
    assert action.plist.get("TargetingType") == "Front"


def test_select_menu_item_requires_list() -> None:
    with pytest.raises(ActionConfigurationError):
        create_select_menu_item(menu_path="File")


def test_press_button_waiting_adds_timeout_keys() -> None:
    action = create_press_button(button_name="OK", action="CancelButtonNamed", wait_for_enabled_button=True)
    assert action.plist.get("AXAction") == "AXCancel"
    assert action.plist.keys()[-2:] == ["TimeOutAbortsMacro", "WaitForEnabledButton"]
    simple = create_press_button(button_name="OK")
    assert "AXAction" not in simple.plist.keys()
    assert "WaitForEnabledButton" not in simple.plist.keys()
