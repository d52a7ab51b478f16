"""Execute actions as a transient macro without importing anything."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..macro.assembler import build_ephemeral_macro_xml
from .engine_log import EngineLogWatcher
from .interface import execute_macro_xml
from .process import DEFAULT_OSASCRIPT, ProcessRunner

logger = logging.getLogger(__name__)


def run_virtual_macro(
    actions: Sequence[Any],
    name: Optional[str] = None,
    return_text: Optional[str] = None,
    capture: bool = False,
    watcher: Optional[EngineLogWatcher] = None,
    osascript: str = DEFAULT_OSASCRIPT,
    runner: Optional[ProcessRunner] = None,
) -> Optional[str]:
    """Run ``actions`` through the engine's ``doScript``.

    When capturing, engine failures raise and the macro's return value is
    returned. Otherwise failures are logged and None is returned. New
    engine-log errors are reported in both cases.
    """

    label = f"virtual macro {name!r}" if name else "virtual macro"
    if not actions and return_text is None:
        logger.info("Skipping %s: no actions to run", label)
        return None

    xml = build_ephemeral_macro_xml(actions, return_text)
    logger.info(
        "Executing %s with %d%s action(s)",
        label,
        len(actions),
        "+Return" if return_text is not None else "",
    )
    watcher = watcher or EngineLogWatcher()
    watcher.start()
    try:
        return execute_macro_xml(
            xml,
            capture=capture,
            tolerate_engine_errors=not capture,
            osascript=osascript,
            runner=runner,
        )
    finally:
        watcher.report(xml)
