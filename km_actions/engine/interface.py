"""Operations against the running Keyboard Maestro editor and engine."""

from __future__ import annotations

import enum
import json
import logging
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from ..exceptions import EngineProcessError
from .process import DEFAULT_OSASCRIPT, ProcessRunner, run_applescript, run_jxa

logger = logging.getLogger(__name__)

TEMP_FILE_PREFIX = "kmjs-test-"


def applescript_string(value: str) -> str:
    """Quote ``value`` as an AppleScript string literal."""

    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def import_plist_string(
    plist_xml: str,
    temp_dir: Optional[Union[str, Path]] = None,
    osascript: str = DEFAULT_OSASCRIPT,
    runner: Optional[ProcessRunner] = None,
    clock: Callable[[], float] = time.time,
) -> Path:
    """Write ``plist_xml`` to a temporary ``.kmmacros`` file and import it.

    The file is removed after a successful import and kept for inspection
    when the import fails.
    """

    directory = Path(temp_dir) if temp_dir is not None else Path(tempfile.gettempdir())
    directory.mkdir(parents=True, exist_ok=True)
    tmp = directory / f"{TEMP_FILE_PREFIX}{int(clock() * 1000)}.kmmacros"
    tmp.write_text(plist_xml, encoding="utf-8")

    script = f'tell application "Keyboard Maestro" to importMacros (POSIX file {applescript_string(str(tmp))} as alias)'
    result = run_applescript(script, osascript=osascript, check=False, runner=runner)
    if not result.ok:
        raise EngineProcessError(
            f"importMacros failed (kept {tmp}):\n{result.stderr.strip() or result.stdout.strip()}",
            status=result.status,
            stdout=result.stdout,
            stderr=result.stderr,
        )
    tmp.unlink(missing_ok=True)
    logger.debug("Imported macros from %s", tmp.name)
    return tmp


def delete_macro_by_name(
    name: str,
    osascript: str = DEFAULT_OSASCRIPT,
    runner: Optional[ProcessRunner] = None,
) -> bool:
    """Delete the macro called ``name``; False when the editor reported nothing to delete."""

    script = f'tell application "Keyboard Maestro" to deleteMacro {applescript_string(name)}'
    result = run_applescript(script, osascript=osascript, check=False, runner=runner)
    if not result.ok:
        logger.debug("No macro named %r deleted: %s", name, result.stderr.strip())
    return result.ok


def ensure_macro_group(
    name: str,
    osascript: str = DEFAULT_OSASCRIPT,
    runner: Optional[ProcessRunner] = None,
) -> None:
    group = json.dumps(name)
    body = "\n".join(
        [
            'const kme = Application("Keyboard Maestro");',
            f"if (!kme.macroGroups.byName({group}).exists()) {{",
            f"  kme.make({{new: 'macroGroup', withProperties: {{name: {group}}}}});",
            "}",
        ]
    )
    run_jxa(body, osascript=osascript, runner=runner)


def cleanup_macro_group(
    name: str,
    osascript: str = DEFAULT_OSASCRIPT,
    runner: Optional[ProcessRunner] = None,
) -> int:
    """Delete every macro in group ``name`` and return how many went."""

    body = "\n".join(
        [
            'const kme = Application("Keyboard Maestro");',
            f"const group = kme.macroGroups.byName({json.dumps(name)});",
            "if (!group.exists()) return 0;",
            "let deleted = 0;",
            "group.macros().forEach(m => { m.delete(); deleted++; });",
            "return deleted;",
        ]
    )
    try:
        result = run_jxa(body, osascript=osascript, runner=runner)
    except EngineProcessError as exc:
        logger.warning("Could not clean up macros in group %r: %s", name, exc)
        return 0
    try:
        deleted = int(result.stdout.strip() or 0)
    except ValueError:
        deleted = 0
    if deleted:
        logger.info("Deleted %d macro(s) from group %r", deleted, name)
    return deleted


class PollOutcome(enum.Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"


@dataclass(slots=True)
class PollResult:
    outcome: PollOutcome
    xml: str = ""
    attempts: int = 0

    @property
    def found(self) -> bool:
        return self.outcome is PollOutcome.FOUND


def _first_action_query(group: str, macro: str) -> str:
    return "\n".join(
        [
            'const kme = Application("Keyboard Maestro");',
            f"const group = kme.macroGroups.byName({json.dumps(group)});",
            "if (!group.exists()) return '';",
            "const macros = group.macros();",
            "for (let j = 0; j < macros.length; j++) {",
            f"  if (macros[j].name() === {json.dumps(macro)}) return macros[j].actions()[0].xml();",
            "}",
            "return '';",
        ]
    )


def find_macro_action_xml(
    group: str,
    macro: str,
    attempts: int = 20,
    interval: float = 0.01,
    osascript: str = DEFAULT_OSASCRIPT,
    runner: Optional[ProcessRunner] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> PollResult:
    """Poll the editor for ``macro`` in ``group`` and return its first action's XML.

    Running out of attempts is a NOT_FOUND outcome, not an exception.
    Process failures still raise EngineProcessError.
    """

    query = _first_action_query(group, macro)
    for attempt in range(1, max(1, attempts) + 1):
        xml = run_jxa(query, osascript=osascript, runner=runner).stdout.strip()
        if xml:
            return PollResult(PollOutcome.FOUND, xml=xml, attempts=attempt)
        if attempt < attempts:
            sleep(interval)
    logger.warning("Macro %r not found in group %r after %d attempt(s)", macro, group, attempts)
    return PollResult(PollOutcome.NOT_FOUND, attempts=max(1, attempts))


def do_script_jxa(xml: str, capture: bool) -> str:
    """JXA source handing ``xml`` to the engine's ``doScript``."""

    payload = json.dumps(xml)
    if capture:
        return "\n".join(
            [
                "(function () {",
                "  var kme = Application('Keyboard Maestro Engine');",
                f"  var result = kme.doScript({payload});",
                "  return (result !== undefined && result !== null) ? String(result) : '';",
                "})();",
            ]
        )
    return f"Application('Keyboard Maestro Engine').doScript({payload})"


def execute_macro_xml(
    xml: str,
    capture: bool = False,
    tolerate_engine_errors: bool = False,
    osascript: str = DEFAULT_OSASCRIPT,
    runner: Optional[ProcessRunner] = None,
) -> Optional[str]:
    """Run an ephemeral macro through the engine.

    Returns the stripped stdout when capturing, otherwise None. A non-zero
    status or stderr output raises EngineProcessError unless
    ``tolerate_engine_errors`` is set, in which case it is logged.
    """

    result = run_jxa(do_script_jxa(xml, capture), osascript=osascript, wrap=False, check=False, runner=runner)
    if not result.ok or result.stderr.strip():
        message = f"Engine doScript failed (status {result.status}): {result.stderr.strip()}"
        if not tolerate_engine_errors:
            raise EngineProcessError(message, status=result.status, stdout=result.stdout, stderr=result.stderr)
        logger.warning(message)
        return None
    return result.stdout.strip() if capture else None
