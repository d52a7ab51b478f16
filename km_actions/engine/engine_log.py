"""Tail the engine log for errors raised while a macro runs."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_ENGINE_LOG = Path.home() / "Library" / "Logs" / "Keyboard Maestro" / "Engine.log"

ERROR_LINE_RE = re.compile(r"\b(fail(?:ed|ure)?|error)\b", re.IGNORECASE)
TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} ")


class EngineLogWatcher:
    """Remembers a byte offset in the engine log and reports error lines written after it."""

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else DEFAULT_ENGINE_LOG
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    def _size(self) -> int:
        try:
            return self.path.stat().st_size
        except OSError:
            return 0

    def start(self) -> int:
        self._position = self._size()
        return self._position

    def errors(self, since: Optional[int] = None) -> List[str]:
        """Error lines appended since the checkpoint (or ``since``); advances the checkpoint."""

        size = self._size()
        start = self._position if since is None else since
        if size <= start:
            self._position = size
            return []
        try:
            with self.path.open("rb") as handle:
                handle.seek(start)
                tail = handle.read(size - start).decode("utf-8", errors="replace")
        except OSError as exc:
            logger.debug("Engine log unreadable: %s", exc)
            return []
        self._position = size
        return [line for line in re.split(r"\r?\n", tail) if ERROR_LINE_RE.search(line)]

    @staticmethod
    def strip_timestamps(lines: Iterable[str]) -> List[str]:
        return [TIMESTAMP_RE.sub("", line) for line in lines]

    def report(self, xml: Optional[str] = None) -> bool:
        """Log any new engine errors; True when there were some."""

        errors = self.strip_timestamps(self.errors())
        if not errors:
            return False
        logger.warning("Engine reported %d error(s) while running a virtual macro", len(errors))
        for line in errors:
            logger.warning("  %s", line)
        if xml:
            logger.debug("Executed XML:\n%s", xml)
        return True
