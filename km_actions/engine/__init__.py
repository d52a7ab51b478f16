"""osascript transport, editor and engine operations, and the engine log."""

from .process import ProcessResult, run_applescript, run_jxa, run_process
from .engine_log import EngineLogWatcher
from .interface import (
    PollOutcome,
    PollResult,
    cleanup_macro_group,
    delete_macro_by_name,
    ensure_macro_group,
    execute_macro_xml,
    find_macro_action_xml,
    import_plist_string,
)
from .runner import run_virtual_macro
