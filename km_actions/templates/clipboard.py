"""Clipboard destination keys shared by clipboard-writing actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple, Union

from ..exceptions import ActionConfigurationError

CLIPBOARD_KINDS = ("SystemClipboard", "TriggerClipboard")


@dataclass(slots=True, frozen=True)
class NamedClipboard:
    name: str
    uid: Optional[str] = None


ClipboardDestination = Union[str, NamedClipboard]


def coerce_clipboard(value: Any) -> ClipboardDestination:
    if value is None:
        return "SystemClipboard"
    if isinstance(value, NamedClipboard):
        return value
    if isinstance(value, Mapping):
        if not value.get("name"):
            raise ActionConfigurationError("Named clipboard requires a name")
        return NamedClipboard(name=str(value["name"]), uid=value.get("uid"))
    if value not in CLIPBOARD_KINDS:
        raise ActionConfigurationError(f"Unknown clipboard destination: {value!r}")
    return value


def clipboard_entries(destination: ClipboardDestination, prefix: str = "Destination") -> List[Tuple[str, Any]]:
    """Keys selecting a clipboard. The system clipboard needs none."""

    if destination == "TriggerClipboard":
        return [(f"{prefix}UseTriggerClipboard", True)]
    if isinstance(destination, NamedClipboard):
        entries: List[Tuple[str, Any]] = [(f"{prefix}NamedClipboardRedundantDisplayName", destination.name)]
        if destination.uid:
            entries.append((f"{prefix}NamedClipboardUID", destination.uid))
        entries.append((f"{prefix}UseNamedClipboard", True))
        return entries
    return []
