"""Loss-tolerant conversion between plist XML snippets and a readable JSON form.

Elements become objects keyed by tag name. Repeated tags collapse into a list,
so the interleaving of ``<key>`` and value elements inside a ``<dict>`` is not
preserved. Attributes are stored under ``@_name`` and text next to children or
attributes under ``#text``. All values stay strings.
"""

from __future__ import annotations

import json
import logging
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Mapping, Union

from ..exceptions import ConversionError

logger = logging.getLogger(__name__)

ATTRIBUTE_PREFIX = "@_"
TEXT_KEY = "#text"

_PROLOG_RE = re.compile(r"<\?xml[^>]*\?>|<!DOCTYPE[^>]*>", re.IGNORECASE)
_WRAPPER = "kmet-fragment"


def _element_to_value(element: ET.Element) -> Any:
    children = list(element)
    text = element.text or ""
    if not children and not element.attrib:
        return text

    node: Dict[str, Any] = {f"{ATTRIBUTE_PREFIX}{name}": value for name, value in element.attrib.items()}
    # whitespace between child elements is layout
    if text and (not children or text.strip()):
        node[TEXT_KEY] = text
    for child in children:
        value = _element_to_value(child)
        if child.tag not in node:
            node[child.tag] = value
        elif isinstance(node[child.tag], list):
            node[child.tag].append(value)
        else:
            node[child.tag] = [node[child.tag], value]
    return node


def xml_to_json(xml: str, pretty: bool = True) -> str:
    """Convert an XML snippet (one or more top-level elements) to JSON text."""

    body = _PROLOG_RE.sub("", xml)
    try:
        wrapper = ET.fromstring(f"<{_WRAPPER}>{body}</{_WRAPPER}>")
    except ET.ParseError as exc:
        raise ConversionError(f"xml_to_json failed: {exc}") from exc
    converted = _element_to_value(wrapper)
    if not isinstance(converted, dict):
        converted = {}
    converted.pop(TEXT_KEY, None)
    logger.debug("Converted XML with %d top-level tag(s) to JSON", len(converted))
    if pretty:
        return json.dumps(converted, indent=2, ensure_ascii=False)
    return json.dumps(converted, separators=(",", ":"), ensure_ascii=False)


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _append_children(parent: ET.Element, tag: str, value: Any) -> None:
    items: List[Any] = value if isinstance(value, list) else [value]
    for item in items:
        child = ET.SubElement(parent, tag)
        _fill_element(child, item)


def _fill_element(element: ET.Element, value: Any) -> None:
    if not isinstance(value, Mapping):
        element.text = _scalar_text(value)
        return
    for key, item in value.items():
        if key.startswith(ATTRIBUTE_PREFIX):
            element.set(key[len(ATTRIBUTE_PREFIX):], _scalar_text(item))
        elif key == TEXT_KEY:
            element.text = _scalar_text(item)
        elif key.startswith("?"):
            continue
        else:
            _append_children(element, key, item)


def json_to_xml(data: Union[str, Mapping[str, Any]], minify: bool = False) -> str:
    """Build XML from JSON text or an already parsed mapping.

    Output is tab indented unless ``minify`` is set. Empty elements are
    written as an open and close tag pair.
    """

    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise ConversionError(f"json_to_xml failed: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConversionError(f"json_to_xml expects a JSON object, got {type(data).__name__}")

    wrapper = ET.Element(_WRAPPER)
    _fill_element(wrapper, data)
    parts = []
    for element in wrapper:
        element.tail = None
        if not minify:
            ET.indent(element, space="\t")
        parts.append(ET.tostring(element, encoding="unicode", short_empty_elements=False))
    return ("" if minify else "\n").join(parts)
