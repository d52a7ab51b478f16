"""Generate, import, re-export and compare actions against a live engine."""

from __future__ import annotations

import logging
import re
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Tuple

from ..app.settings import HarnessSettings
from ..engine import interface
from ..engine.engine_log import EngineLogWatcher
from ..engine.process import ProcessRunner
from ..exceptions import KMError
from ..macro.assembler import wrap_as_km_macros
from . import allure_helpers
from .normalize import normalize_action_xml

logger = logging.getLogger(__name__)

_TEST_ID_RE = re.compile(r"[^A-Za-z0-9]")


def sanitize_test_id(name: str) -> str:
    return _TEST_ID_RE.sub("_", name)


@dataclass(slots=True)
class RoundTripResult:
    name: str
    generated_xml: str = ""
    retrieved_xml: str = ""
    passed: bool = False
    engine_errors: List[str] = field(default_factory=list)
    script_error: Optional[str] = None
    error: Optional[str] = None
    artifact_path: Optional[Path] = None

    @property
    def mismatch(self) -> bool:
        return bool(self.retrieved_xml) and self.generated_xml != self.retrieved_xml


class RoundTripHarness:
    """Validates actions one at a time inside a scratch macro group.

    The group is created and emptied once per harness instance. Every case
    leaves a ``.kmmacros`` copy in the failures directory for inspection.
    """

    def __init__(
        self,
        settings: Optional[HarnessSettings] = None,
        failures_dir: Optional[Path] = None,
        watcher: Optional[EngineLogWatcher] = None,
        runner: Optional[ProcessRunner] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.settings = settings or HarnessSettings()
        failures = failures_dir or self.settings.failures_dir or Path(tempfile.gettempdir()) / "km-actions-failures"
        self.failures_dir = Path(failures)
        self.watcher = watcher or EngineLogWatcher(self.settings.engine_log_path)
        self._runner = runner
        self._sleep = sleep
        self._clock = clock
        self._group_ready = False

    @property
    def osascript(self) -> str:
        return self.settings.osascript_path

    def _ensure_group_once(self) -> None:
        if self._group_ready:
            return
        group = self.settings.test_group_name
        interface.ensure_macro_group(group, osascript=self.osascript, runner=self._runner)
        interface.cleanup_macro_group(group, osascript=self.osascript, runner=self._runner)
        self._group_ready = True

    def _write_artifact(self, wrapped: str, macro_name: str) -> Path:
        self.failures_dir.mkdir(parents=True, exist_ok=True)
        artifact = self.failures_dir / f"{macro_name}.kmmacros"
        artifact.write_text(wrapped, encoding="utf-8")
        return artifact

    def validate(self, name: str, action: Any) -> RoundTripResult:
        """Round-trip one action. Failures are reported in the result, never raised."""

        result = RoundTripResult(name=name)
        test_id = sanitize_test_id(name)
        macro_name = f"{self.settings.macro_name_prefix}{test_id}"
        try:
            self._ensure_group_once()
            result.generated_xml = normalize_action_xml(action.to_xml())
            self.watcher.start()

            wrapped = wrap_as_km_macros(action, macro_name, self.settings.test_group_name, clock=self._clock)
            result.artifact_path = self._write_artifact(wrapped, macro_name)
            interface.import_plist_string(
                wrapped, osascript=self.osascript, runner=self._runner, clock=self._clock
            )
            try:
                poll = interface.find_macro_action_xml(
                    self.settings.test_group_name,
                    macro_name,
                    attempts=self.settings.poll_attempts,
                    interval=self.settings.poll_interval,
                    osascript=self.osascript,
                    runner=self._runner,
                    sleep=self._sleep,
                )
                if not poll.found:
                    result.error = f"Macro not found after import: {macro_name}"
                else:
                    result.retrieved_xml = normalize_action_xml(poll.xml)
            finally:
                interface.delete_macro_by_name(macro_name, osascript=self.osascript, runner=self._runner)
            result.engine_errors = self.watcher.strip_timestamps(self.watcher.errors())
            result.passed = (
                poll.found and result.generated_xml == result.retrieved_xml and not result.engine_errors
            )
            if poll.found and result.generated_xml != result.retrieved_xml:
                result.error = "Generated and retrieved XML differ"
        except (KMError, OSError) as exc:
            result.passed = False
            result.script_error = str(exc)

        if result.passed:
            logger.info("PASS %s", name)
        else:
            logger.warning("FAIL %s: %s", name, result.script_error or result.error or "engine errors")
            for line in result.engine_errors:
                logger.warning("  engine: %s", line)
            allure_helpers.attach_round_trip(result)
        return result

    def run(self, cases: Iterable[Tuple[str, Any]]) -> List[RoundTripResult]:
        """Validate ``cases`` in order, stopping after too many consecutive failures."""

        results: List[RoundTripResult] = []
        consecutive = 0
        limit = self.settings.max_cases
        for name, action in cases:
            if limit is not None and len(results) >= limit:
                logger.info("Reached max_cases=%d, stopping", limit)
                break
            result = self.validate(name, action)
            results.append(result)
            consecutive = 0 if result.passed else consecutive + 1
            if self.settings.max_consecutive_failures and consecutive >= self.settings.max_consecutive_failures:
                logger.warning("Stopping after %d consecutive failures", consecutive)
                break
        return results
