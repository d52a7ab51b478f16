"""Low level helpers shared by every plist fragment we emit."""

from __future__ import annotations

import time
from typing import Callable

_XML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "'": "&apos;",
    '"': "&quot;",
}


def escape_xml(text: str) -> str:
    """Escape the five XML special characters."""

    return "".join(_XML_ESCAPES.get(ch, ch) for ch in str(text))


def action_uid(clock: Callable[[], float] = time.time) -> int:
    """Return the volatile ActionUID value: whole seconds since the epoch."""

    return int(clock())


def km_time_code(clock: Callable[[], float] = time.time) -> float:
    return float(clock())


def indent_text(text: str, tabs: int = 1) -> str:
    """Prefix every non-blank line of ``text`` with ``tabs`` tab characters."""

    pad = "\t" * tabs
    return "\n".join(pad + line if line.strip() else line for line in text.strip().split("\n"))


def number_text(value) -> str:
    """Render a number the way the engine writes it: ``1.0`` becomes ``1``."""

    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
