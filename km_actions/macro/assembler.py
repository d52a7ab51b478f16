"""Plist envelopes wrapping rendered actions for execution or import."""

from __future__ import annotations

import time
from typing import Any, Callable, Iterable, List, Optional, Sequence, Union

from ..actions.base import VirtualAction
from ..actions.control import create_return
from ..plist import PlistArray, PlistDict, Real, km_time_code, render_document

PLIST_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" '
    '"http://www.apple.com/DTDs/PropertyList-1.0.dtd">\n'
    '<plist version="1.0">\n<array>\n'
)
PLIST_FOOTER = "</array>\n</plist>"

DEFAULT_GROUP_NAME = "kmjs-test"
ZERO_UID = "00000000-0000-0000-0000-000000000000"

ActionLike = Union[VirtualAction, str]


class XmlFragment:
    """Pre-rendered action XML that is re-indented when nested."""

    def __init__(self, xml: str) -> None:
        self.xml = xml

    def to_xml(self) -> str:
        return self.xml


def _fragments(actions: Union[ActionLike, Iterable[ActionLike]]) -> List[Any]:
    if isinstance(actions, (str, VirtualAction)):
        actions = [actions]
    return [XmlFragment(a) if isinstance(a, str) else a for a in actions]


def actions_to_xml(actions: Sequence[Any]) -> str:
    return "\n".join(action.to_xml() for action in actions)


def build_ephemeral_macro_xml(actions: Sequence[Any], return_text: Optional[str] = None) -> str:
    """Anonymous macro body for ``doScript``: the actions in a bare plist array.

    With ``return_text`` a Return action is appended, so an empty action
    list still yields a one-action macro.
    """

    all_actions = list(actions)
    if return_text is not None:
        all_actions.append(create_return(text=return_text))
    return PLIST_HEADER + actions_to_xml(all_actions) + "\n" + PLIST_FOOTER


def _macro_dict(actions: Any, macro_name: str, uid: str, time_code: float) -> PlistDict:
    return (
        PlistDict()
        .add("Actions", PlistArray(_fragments(actions)))
        .add("CreationDate", Real(time_code))
        .add("ModificationDate", Real(time_code))
        .add("Name", macro_name)
        .add("Triggers", PlistArray())
        .add("UID", uid)
    )


def _group_document(group: PlistDict) -> str:
    return PLIST_HEADER + render_document(group, 1) + "\n" + PLIST_FOOTER


def wrap_as_km_macros(
    actions: Union[ActionLike, Iterable[ActionLike]],
    macro_name: str,
    group_name: str = DEFAULT_GROUP_NAME,
    clock: Callable[[], float] = time.time,
) -> str:
    """A named macro inside a scratch group, ready for ``importMacros``."""

    now = clock()
    macro = _macro_dict(actions, macro_name, str(int(now * 1000)), km_time_code(lambda: now))
    group = (
        PlistDict()
        .add("Activate", "Normal")
        .add("CreationDate", Real(0))
        .add("Macros", PlistArray([macro]))
        .add("Name", group_name)
        .add("ToggleMacroUID", ZERO_UID)
        .add("UID", ZERO_UID)
    )
    return _group_document(group)


def create_macro_group_plist(
    actions: Union[ActionLike, Iterable[ActionLike]],
    macro_name: str,
    group_name: str,
    clock: Callable[[], float] = time.time,
) -> str:
    """Durable macro group export with a timestamped group and fresh UIDs."""

    now = clock()
    now_ms = int(now * 1000)
    time_code = km_time_code(lambda: now)
    group = (
        PlistDict()
        .add("Activate", "Normal")
        .add("CreationDate", Real(time_code))
        .add("Macros", PlistArray([_macro_dict(actions, macro_name, str(now_ms), time_code)]))
        .add("Name", group_name)
        .add("ToggleMacroUID", ZERO_UID)
        .add("UID", str(now_ms + 1))
    )
    return _group_document(group)
