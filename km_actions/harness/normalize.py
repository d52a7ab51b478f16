"""Canonical text form of an action dict, used to compare generated and re-exported XML."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import List

from ..plist import escape_xml

logger = logging.getLogger(__name__)

INDENT = "  "
_ACTION_UID_RE = re.compile(r"<key>ActionUID</key>\s*<(?:integer|string)>[\s\S]*?</(?:integer|string)>")
_STRING_INDENT_RE = re.compile(r"\n[ \t]+")


def extract_action_dict(xml: str) -> str:
    """Strip a plist envelope, keeping the outermost ``<dict>`` element."""

    if "<plist" not in xml:
        return xml
    start = xml.find("<dict>")
    end = xml.rfind("</dict>")
    if start == -1 or end == -1:
        return xml
    return xml[start : end + len("</dict>")]


def _strip_action_uids(element: ET.Element) -> None:
    children = list(element)
    if element.tag == "dict":
        for index, child in enumerate(children):
            if child.tag == "key" and (child.text or "").strip() == "ActionUID":
                element.remove(child)
                if index + 1 < len(children):
                    element.remove(children[index + 1])
    for child in element:
        _strip_action_uids(child)


def _leaf_text(element: ET.Element, previous_key: str) -> str:
    text = (element.text or "").strip()
    if element.tag == "data":
        return "".join(text.split())
    if element.tag == "string":
        text = _STRING_INDENT_RE.sub("\n", text)
        if previous_key == "Text":
            text = text.replace("\n", "")
    return text


def _serialize(element: ET.Element, depth: int, previous_key: str, out: List[str]) -> None:
    pad = INDENT * depth
    children = list(element)
    if not children:
        text = _leaf_text(element, previous_key)
        out.append(f"{pad}<{element.tag}>{escape_xml(text)}</{element.tag}>" if text else f"{pad}<{element.tag}/>")
        return
    out.append(f"{pad}<{element.tag}>")
    key = ""
    for child in children:
        _serialize(child, depth + 1, key, out)
        key = (child.text or "").strip() if child.tag == "key" else ""
    out.append(f"{pad}</{element.tag}>")


def normalize_action_xml(xml: str) -> str:
    """Canonicalise an action's XML for comparison.

    ActionUID pairs are dropped everywhere, whitespace is re-flowed, string
    continuation indentation and newlines inside ``Text`` strings are removed
    and ``<data>`` payloads are compacted. Text that does not parse only has
    its first ActionUID removed.
    """

    if not xml:
        return ""
    action_xml = extract_action_dict(xml)
    try:
        root = ET.fromstring(action_xml)
    except ET.ParseError as exc:
        logger.debug("Falling back to textual normalisation: %s", exc)
        return _ACTION_UID_RE.sub("", action_xml, count=1).strip()
    _strip_action_uids(root)
    lines: List[str] = []
    _serialize(root, 0, "", lines)
    return "\n".join(lines)
