"""Reusable plist fragments shared by actions and conditions."""

from .application import SpecificApp, application_dict, move_and_resize_defaults
from .clipboard import NamedClipboard, clipboard_entries, coerce_clipboard
from .flags import notify_on_failure_entries, stop_on_failure_entries, timeout_entries
from .screen_area import ScreenArea, coerce_screen_area, screen_area_dict
from .text import processing_mode_entries, text_entries, where_entries
