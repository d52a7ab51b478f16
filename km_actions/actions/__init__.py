"""Action factories producing immutable, pre-rendered engine actions."""

from .application import (
    create_activate_application,
    create_open,
    create_open_url,
    create_press_button,
    create_quit,
    create_select_menu_item,
    create_show_specific_app,
)
from .base import ActionSequence, DictAction, VirtualAction, actions_array
from .clipboard import create_copy, create_cut, create_paste, create_set_clipboard_to_text
from .control import (
    SwitchCase,
    create_break_from_loop,
    create_cancel,
    create_continue_loop,
    create_group,
    create_if_then_else,
    create_pause,
    create_retry_this_loop,
    create_return,
    create_switch_case,
    create_while,
)
from .files import create_file
from .keyboard import create_type_keystroke
from .mouse import create_click_at_found_image, create_move_and_click, create_scroll_wheel_event
from .registry import ACTION_FACTORIES, build_action, build_actions, load_action_script
from .system import create_clear_typed_string_buffer, create_notification, create_play_sound, create_show_status_menu
from .text import create_comment, create_display_text_briefly, create_display_text_window, create_insert_text
from .variables import create_set_variable, create_set_variable_to_calculation, create_use_variable
