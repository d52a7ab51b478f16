"""Failure and timeout flags, emitted only when they differ from the engine default."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

Entries = List[Tuple[str, Any]]


def stop_on_failure_entries(value: Optional[bool], default: bool = True) -> Entries:
    """``StopOnFailure`` when ``value`` diverges from ``default``.

    Most actions treat stopping as the default and only record ``false``.
    A few record ``true`` instead; those pass ``default=False``.
    """

    if value is None or bool(value) == default:
        return []
    return [("StopOnFailure", bool(value))]


def notify_on_failure_entries(value: Optional[bool]) -> Entries:
    return [("NotifyOnFailure", False)] if value is False else []


def timeout_entries(timeout_aborts: bool = True, notify_on_timeout: bool = True) -> Entries:
    entries: Entries = []
    if timeout_aborts != notify_on_timeout:
        entries.append(("NotifyOnTimeOut", bool(notify_on_timeout)))
    entries.append(("TimeOutAbortsMacro", bool(timeout_aborts)))
    return entries
