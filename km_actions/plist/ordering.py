"""Canonical key ordering used by the engine when it exports dicts."""

from __future__ import annotations

from typing import Iterable, List, Optional

CONDITION_FLAG_KEYS = ("IsFront", "IsFrontApplication", "IsFrontWindow")
APPLICATION_KEYS = ("BundleIdentifier", "Match", "Name", "NewFile", "Path")


def alphabetical_key(key: str) -> tuple:
    """Case-insensitive comparison with a case-sensitive tiebreak."""

    return (key.casefold(), key)


def key_order(keys: Iterable[str], context: Optional[str] = None) -> List[str]:
    """Return ``keys`` in the order the engine writes them for ``context``.

    ``condition``: ordinary keys alphabetically, then ``ConditionType``, then
    the flag keys present, alphabetically.
    ``action``: ``MacroActionType``, ``ActionUID``, then the rest alphabetically.
    ``application``: the known application keys first in their fixed order.
    Anything else sorts alphabetically. The input is never mutated and
    duplicates are kept.
    """

    items = list(keys)
    if context == "condition":
        flags = [k for k in items if k in CONDITION_FLAG_KEYS]
        discriminant = [k for k in items if k == "ConditionType"]
        ordinary = [k for k in items if k not in CONDITION_FLAG_KEYS and k != "ConditionType"]
        return sorted(ordinary, key=alphabetical_key) + discriminant + sorted(flags, key=alphabetical_key)
    if context == "action":
        leading = [k for k in items if k == "MacroActionType"] + [k for k in items if k == "ActionUID"]
        rest = [k for k in items if k not in ("MacroActionType", "ActionUID")]
        return leading + sorted(rest, key=alphabetical_key)
    if context == "application":
        known = sorted((k for k in items if k in APPLICATION_KEYS), key=APPLICATION_KEYS.index)
        rest = [k for k in items if k not in APPLICATION_KEYS]
        return known + sorted(rest, key=alphabetical_key)
    return sorted(items, key=alphabetical_key)
