"""Core action abstractions shared by every factory."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import fields as dataclass_fields
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Type, TypeVar

from ..exceptions import ActionConfigurationError
from ..plist import PlistArray, PlistDict, action_uid
from ..plist.nodes import render_value

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT")


class VirtualAction(ABC):
    """An immutable action rendered to the engine's plist dialect."""

    @abstractmethod
    def render(self, depth: int = 1) -> List[str]:
        """Return the action's XML lines with its outer ``<dict>`` at ``depth`` tabs."""

    def to_xml(self) -> str:
        return "\n".join(self.render(1))


class DictAction(VirtualAction):
    """A single ``<dict>`` action built once at construction."""

    def __init__(self, kind: str, plist: PlistDict) -> None:
        self.kind = kind
        self._plist = plist

    @property
    def plist(self) -> PlistDict:
        return self._plist

    def render(self, depth: int = 1) -> List[str]:
        return self._plist.render(depth)

    def __repr__(self) -> str:
        return f"DictAction({self.kind!r})"


class ActionSequence(VirtualAction):
    """Several sibling action dicts produced by one factory call."""

    def __init__(self, actions: Sequence[Any]) -> None:
        self.actions = tuple(actions)

    def render(self, depth: int = 1) -> List[str]:
        lines: List[str] = []
        for action in self.actions:
            lines.extend(render_value(action, depth))
        return lines

    def __repr__(self) -> str:
        return f"ActionSequence({list(self.actions)!r})"


def actions_array(actions: Optional[Iterable[Any]]) -> PlistArray:
    """Nested action list; ``ActionSequence`` members are flattened."""

    items: List[Any] = []
    for action in actions or ():
        if isinstance(action, ActionSequence):
            items.extend(action.actions)
        else:
            items.append(action)
    return PlistArray(items)


def new_action_dict(uid: Optional[int] = None) -> PlistDict:
    """Start an action dict with its volatile ``ActionUID``."""

    return PlistDict().add("ActionUID", action_uid() if uid is None else uid)


def coerce_options(options_cls: Type[OptionsT], options: Any, kwargs: Mapping[str, Any]) -> OptionsT:
    """Accept an options instance, a mapping, or keyword arguments."""

    if options is None:
        return _construct(options_cls, dict(kwargs))
    if kwargs:
        raise ActionConfigurationError(f"Pass either a {options_cls.__name__} or keyword options, not both")
    if isinstance(options, options_cls):
        return options
    if isinstance(options, Mapping):
        return _construct(options_cls, dict(options))
    raise ActionConfigurationError(f"Expected {options_cls.__name__}, got {type(options).__name__}")


def _construct(options_cls: Type[OptionsT], values: dict) -> OptionsT:
    known = {f.name for f in dataclass_fields(options_cls)}  # type: ignore[arg-type]
    unknown = sorted(set(values) - known)
    if unknown:
        raise ActionConfigurationError(f"Unknown options for {options_cls.__name__}: {', '.join(unknown)}")
    return options_cls(**values)


def require_choice(name: str, value: Any, choices: Sequence[Any]) -> None:
    if value not in choices:
        raise ActionConfigurationError(f"{name} must be one of {tuple(choices)}, got {value!r}")


def build(kind: str, plist: PlistDict) -> DictAction:
    logger.debug("Built %s action with keys %s", kind, plist.keys())
    return DictAction(kind, plist)
