"""Generate macro XML and optionally export it to a window, a file or a macro group."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from ..actions.text import create_display_text_window
from ..engine.process import ProcessRunner
from ..exceptions import EngineProcessError
from .assembler import PLIST_FOOTER, PLIST_HEADER, actions_to_xml, create_macro_group_plist

logger = logging.getLogger(__name__)

KMMACROS_SUFFIX = ".kmmacros"


@dataclass(slots=True)
class ExportTarget:
    display_in_text_window: bool = False
    file_path: Optional[Union[str, Path]] = None
    to_km_group: Optional[str] = None

    @property
    def needs_wrapping(self) -> bool:
        return bool(self.file_path or self.to_km_group)


def generate_macro(
    actions: Sequence[Any],
    add_plist_wrapping: bool = False,
    export_target: Optional[ExportTarget] = None,
    macro_name: str = "Generated Macro",
    tolerate_engine_errors: bool = False,
    runner: Optional[ProcessRunner] = None,
) -> str:
    """Return the XML for ``actions`` and perform any requested exports.

    The plist envelope is added when asked for or when exporting to a file
    or a macro group.
    """

    target = export_target or ExportTarget()
    if not actions:
        logger.warning("No actions provided, generating empty macro XML")

    actions_xml = actions_to_xml(actions)
    wrap = add_plist_wrapping or target.needs_wrapping
    final_xml = PLIST_HEADER + actions_xml + "\n" + PLIST_FOOTER if wrap else actions_xml
    logger.info("Generated XML for %d action(s)%s", len(actions), " with plist wrapping" if wrap else "")

    if target.display_in_text_window:
        _display_in_text_window(final_xml, runner)
    if target.file_path:
        export_to_file(final_xml, target.file_path, macro_name)
    if target.to_km_group:
        try:
            export_to_group(actions, target.to_km_group, macro_name, runner=runner)
        except EngineProcessError as exc:
            if not tolerate_engine_errors:
                raise
            logger.warning("Export of %r to group %r skipped: %s", macro_name, target.to_km_group, exc)
    return final_xml


def _display_in_text_window(xml: str, runner: Optional[ProcessRunner] = None) -> None:
    from ..engine import runner as engine_runner

    display = create_display_text_window(xml, processing_mode="Nothing")
    engine_runner.run_virtual_macro([display], "Display Generated XML", runner=runner)


def export_to_file(xml: str, file_path: Union[str, Path], macro_name: str = "Generated Macro") -> Path:
    path = Path(file_path)
    if not path.name.endswith(KMMACROS_SUFFIX):
        path = path.with_name(path.name + KMMACROS_SUFFIX)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(xml, encoding="utf-8")
    logger.info("Exported %r to %s (%d bytes)", macro_name, path, path.stat().st_size)
    return path


def export_to_group(
    actions: Sequence[Any], group_name: str, macro_name: str, runner: Optional[ProcessRunner] = None
) -> None:
    """Replace any macro called ``macro_name`` with one holding ``actions`` in ``group_name``."""

    from ..engine import interface

    plist_xml = create_macro_group_plist(actions, macro_name, group_name)
    if interface.delete_macro_by_name(macro_name, runner=runner):
        logger.info("Deleted existing macro %r", macro_name)
    interface.import_plist_string(plist_xml, runner=runner)
    logger.info("Imported %r to group %r", macro_name, group_name)
