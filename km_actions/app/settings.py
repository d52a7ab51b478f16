# km_actions/app/settings.py
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class HarnessSettings:
    engine_log_path: Optional[str] = None
    failures_dir: Optional[str] = None
    test_group_name: str = "kmjs-test"
    macro_name_prefix: str = "kmjs-test-"
    poll_attempts: int = 20
    poll_interval: float = 0.01
    max_consecutive_failures: int = 10
    max_cases: Optional[int] = None
    tolerate_engine_errors: bool = False
    osascript_path: str = "osascript"

    @classmethod
    def load(cls, path: Path) -> HarnessSettings:
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
            return cls()
        max_cases = data.get("max_cases")
        return cls(
            engine_log_path=data.get("engine_log_path"),
            failures_dir=data.get("failures_dir"),
            test_group_name=str(data.get("test_group_name", cls.test_group_name)),
            macro_name_prefix=str(data.get("macro_name_prefix", cls.macro_name_prefix)),
            poll_attempts=int(data.get("poll_attempts", cls.poll_attempts)),
            poll_interval=float(data.get("poll_interval", cls.poll_interval)),
            max_consecutive_failures=int(data.get("max_consecutive_failures", cls.max_consecutive_failures)),
            max_cases=int(max_cases) if max_cases is not None else None,
            tolerate_engine_errors=bool(data.get("tolerate_engine_errors", cls.tolerate_engine_errors)),
            osascript_path=str(data.get("osascript_path", cls.osascript_path)),
        )

    def save(self, path: Path) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(asdict(self), indent=2), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not save settings to %s: %s", path, exc)
