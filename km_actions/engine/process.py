"""Blocking osascript invocations."""

from __future__ import annotations

import logging
import platform
import subprocess
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..exceptions import EngineProcessError, EngineUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_OSASCRIPT = "osascript"


@dataclass(slots=True)
class ProcessResult:
    status: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.status == 0


ProcessRunner = Callable[[Sequence[str]], ProcessResult]


def is_macos() -> bool:
    return platform.system() == "Darwin"


def run_process(args: Sequence[str], check: bool = True) -> ProcessResult:
    """Run ``args`` synchronously and capture UTF-8 output.

    Raises EngineUnavailableError when the executable cannot be launched and,
    with ``check``, EngineProcessError on a non-zero exit status.
    """

    logger.debug("Running %s", args[0] if args else "<empty>")
    try:
        completed = subprocess.run(list(args), capture_output=True, text=True, encoding="utf-8")
    except (FileNotFoundError, PermissionError) as exc:
        raise EngineUnavailableError(f"Cannot launch {args[0]!r}: {exc}") from exc
    except OSError as exc:
        raise EngineProcessError(f"Failed to run {args[0]!r}: {exc}") from exc
    result = ProcessResult(status=completed.returncode, stdout=completed.stdout or "", stderr=completed.stderr or "")
    if check:
        raise_for_status(result, args[0])
    return result


def raise_for_status(result: ProcessResult, program: str = DEFAULT_OSASCRIPT) -> ProcessResult:
    if not result.ok:
        raise EngineProcessError(
            f"{program} exited with status {result.status}: {result.stderr.strip() or result.stdout.strip()}",
            status=result.status,
            stdout=result.stdout,
            stderr=result.stderr,
        )
    return result


def _invoke(args: Sequence[str], check: bool, runner: Optional[ProcessRunner]) -> ProcessResult:
    result = runner(args) if runner is not None else run_process(args, check=False)
    return raise_for_status(result, args[0]) if check else result


def run_applescript(
    source: str,
    osascript: str = DEFAULT_OSASCRIPT,
    check: bool = True,
    runner: Optional[ProcessRunner] = None,
) -> ProcessResult:
    return _invoke([osascript, "-e", source], check, runner)


def wrap_jxa(body: str) -> str:
    """Wrap a JXA body in an immediately invoked function so ``return`` is legal."""

    return f"(function () {{\n{body}\n}})();"


def run_jxa(
    body: str,
    osascript: str = DEFAULT_OSASCRIPT,
    wrap: bool = True,
    check: bool = True,
    runner: Optional[ProcessRunner] = None,
) -> ProcessResult:
    return _invoke([osascript, "-l", "JavaScript", "-e", wrap_jxa(body) if wrap else body], check, runner)
