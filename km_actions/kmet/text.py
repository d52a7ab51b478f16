from __future__ import annotations

import json
import re
from typing import Pattern, Union

from ..exceptions import ConversionError
from ..plist.primitives import escape_xml


def encode_text_for_json(raw: str) -> str:
    """Escape ``raw`` for a JSON string literal, without the surrounding quotes."""

    return json.dumps(raw, ensure_ascii=False)[1:-1]


def encode_text_for_xml(raw: str) -> str:
    """XML-escape ``raw`` and double its backslashes for JXA string literals."""

    return escape_xml(raw).replace("\\", "\\\\")


def search_replace_in_text(
    text: str,
    pattern: Union[str, Pattern[str]],
    replacement: str,
    literal: bool = False,
    ignore_case: bool = False,
) -> str:
    """Replace every match of ``pattern`` in ``text``.

    Plain strings are matched literally and ``replacement`` is inserted as-is.
    A compiled pattern keeps its own flags and ``replacement`` may use
    ``\\1`` group references.
    """

    if literal or isinstance(pattern, str):
        source = pattern if isinstance(pattern, str) else pattern.pattern
        compiled = re.compile(re.escape(source), re.IGNORECASE if ignore_case else 0)
        return compiled.sub(lambda _match: replacement, text)
    try:
        return pattern.sub(replacement, text)
    except re.error as exc:
        raise ConversionError(f"Invalid replacement {replacement!r}: {exc}") from exc


def compile_search(find: str, regex: bool = False, ignore_case: bool = False) -> Union[str, Pattern[str]]:
    """Turn command-line ``--find`` input into a search pattern."""

    if not regex:
        return find
    try:
        return re.compile(find, re.IGNORECASE if ignore_case else 0)
    except re.error as exc:
        raise ConversionError(f"Invalid regular expression {find!r}: {exc}") from exc
