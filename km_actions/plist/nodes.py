"""Structural plist values rendered as tab-indented XML lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from .ordering import key_order
from .primitives import escape_xml, indent_text


@dataclass(slots=True, frozen=True)
class Data:
    """Base64 payload emitted as a ``<data>`` block, one line per chunk."""

    text: str

    def lines(self) -> List[str]:
        return [line for line in self.text.splitlines() if line.strip()]


@dataclass(slots=True, frozen=True)
class Real:
    value: float


@dataclass(slots=True)
class PlistArray:
    items: List[Any] = field(default_factory=list)

    def append(self, item: Any) -> "PlistArray":
        self.items.append(item)
        return self

    def render(self, depth: int) -> List[str]:
        pad = "\t" * depth
        if not self.items:
            return [f"{pad}<array/>"]
        lines = [f"{pad}<array>"]
        for item in self.items:
            lines.extend(render_value(item, depth + 1))
        lines.append(f"{pad}</array>")
        return lines


@dataclass(slots=True)
class PlistDict:
    """Ordered key/value pairs. Insertion order is emission order."""

    entries: List[Tuple[str, Any]] = field(default_factory=list)

    @classmethod
    def ordered(
        cls,
        mapping: Mapping[str, Any],
        context: Optional[str] = None,
        skip_none: bool = True,
    ) -> "PlistDict":
        """Build a dict whose keys follow the canonical order for ``context``."""

        result = cls()
        for key in key_order(mapping.keys(), context):
            value = mapping[key]
            if value is None and skip_none:
                continue
            result.add(key, value)
        return result

    def add(self, key: str, value: Any) -> "PlistDict":
        if value is not None:
            self.entries.append((key, value))
        return self

    def extend(self, pairs: Iterable[Tuple[str, Any]]) -> "PlistDict":
        for key, value in pairs:
            self.add(key, value)
        return self

    def keys(self) -> List[str]:
        return [key for key, _ in self.entries]

    def get(self, key: str, default: Any = None) -> Any:
        for existing, value in self.entries:
            if existing == key:
                return value
        return default

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def render(self, depth: int) -> List[str]:
        pad = "\t" * depth
        if not self.entries:
            return [f"{pad}<dict/>"]
        inner = "\t" * (depth + 1)
        lines = [f"{pad}<dict>"]
        for key, value in self.entries:
            lines.append(f"{inner}<key>{escape_xml(key)}</key>")
            lines.extend(render_value(value, depth + 1))
        lines.append(f"{pad}</dict>")
        return lines


def render_value(value: Any, depth: int) -> List[str]:
    """Render one plist value at ``depth`` tabs."""

    pad = "\t" * depth
    if isinstance(value, bool):
        return [f"{pad}<true/>" if value else f"{pad}<false/>"]
    if isinstance(value, int):
        return [f"{pad}<integer>{value}</integer>"]
    if isinstance(value, float):
        return [f"{pad}<real>{value!r}</real>"]
    if isinstance(value, Real):
        return [f"{pad}<real>{value.value!r}</real>"]
    if isinstance(value, str):
        if value == "":
            return [f"{pad}<string/>"]
        # continuation lines of multiline strings stay unindented
        return [f"{pad}<string>{escape_xml(value)}</string>"]
    if isinstance(value, Data):
        return [f"{pad}<data>", *(f"{pad}{line}" for line in value.lines()), f"{pad}</data>"]
    if isinstance(value, (PlistDict, PlistArray)):
        return value.render(depth)
    if isinstance(value, Mapping):
        return PlistDict.ordered(value).render(depth)
    if isinstance(value, (list, tuple)):
        return PlistArray(list(value)).render(depth)
    render = getattr(value, "render", None)
    if callable(render):
        return list(render(depth))
    to_xml = getattr(value, "to_xml", None)
    if callable(to_xml):
        return reindent_foreign_xml(to_xml(), depth)
    raise TypeError(f"Cannot render {type(value).__name__} as a plist value")


def reindent_foreign_xml(xml: str, depth: int) -> List[str]:
    """Shift externally produced XML so its outermost element sits at ``depth``."""

    lines = xml.strip("\n").split("\n")
    base = _common_tab_prefix(lines)
    stripped = "\n".join(line[base:] if line.strip() else line for line in lines)
    return indent_text(stripped, depth).split("\n") if depth else stripped.split("\n")


def _common_tab_prefix(lines: Sequence[str]) -> int:
    widths = [len(line) - len(line.lstrip("\t")) for line in lines if line.strip()]
    return min(widths) if widths else 0


def render_document(value: Any, depth: int = 0) -> str:
    return "\n".join(render_value(value, depth))
