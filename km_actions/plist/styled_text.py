"""Codec for the base64 RTF payloads stored under ``StyledText`` keys.

The engine archives an attributed string to RTF and stores it base64 encoded,
wrapped at 76 columns. We treat the RTF as opaque text: replacing plain ASCII
inside it is safe, restyling it is not. Every re-archive produces different
bytes, so never compare the base64 text across writes.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from typing import Callable

from ..exceptions import StyledTextError
from .primitives import escape_xml

logger = logging.getLogger(__name__)

STYLED_TEXT_RE = re.compile(
    r"<key>\s*StyledText\s*</key>\s*<data>(?P<data>[\s\S]*?)</data>",
    re.IGNORECASE | re.MULTILINE,
)
PLAIN_TEXT_RE = re.compile(
    r"<key>\s*Text\s*</key>\s*<string>(?P<text>[\s\S]*?)</string>",
    re.IGNORECASE | re.MULTILINE,
)
_HEX_ESCAPE_RE = re.compile(r"\\'([0-9a-fA-F]{2})")
_FONT_TABLE_RE = re.compile(r"\{\\fonttbl[^{}]*(?:\{[^{}]*\}[^{}]*)*\}")
_COLOR_TABLE_RE = re.compile(r"\{\\colortbl[^{}]*(?:\{[^{}]*\}[^{}]*)*\}")
_CONTROL_WORD_RE = re.compile(r"\\[a-zA-Z]+\d*\s?")
_WHITESPACE_RE = re.compile(r"\s+")

BASE64_LINE_WIDTH = 76


@dataclass(slots=True, frozen=True)
class DecodedStyledText:
    rtf: str
    text: str


def wrap_base64(b64: str, width: int = BASE64_LINE_WIDTH) -> str:
    return "\n".join(b64[i : i + width] for i in range(0, len(b64), width))


def encode_styled_text(rtf: str, wrap: bool = True) -> str:
    """Encode RTF source as UTF-8 base64, wrapped at 76 columns by default."""

    try:
        encoded = base64.b64encode(rtf.encode("utf-8")).decode("ascii")
    except (UnicodeEncodeError, AttributeError) as exc:
        raise StyledTextError(f"Failed to encode RTF into base64: {exc}") from exc
    return wrap_base64(encoded) if wrap else encoded


def decode_styled_text(payload: str) -> DecodedStyledText:
    """Decode a base64 StyledText blob into its RTF source and a plain preview."""

    compact = _WHITESPACE_RE.sub("", payload or "")
    try:
        rtf = base64.b64decode(compact, validate=True).decode("utf-8")
    except (binascii.Error, ValueError) as exc:
        raise StyledTextError(f"Failed to decode base64 StyledText: {exc}") from exc
    return DecodedStyledText(rtf=rtf, text=strip_rtf_to_plain_text(rtf))


def strip_rtf_to_plain_text(rtf: str) -> str:
    """Heuristic, lossy RTF to plain text conversion."""

    text = _HEX_ESCAPE_RE.sub(lambda m: bytes.fromhex(m.group(1)).decode("latin-1"), rtf)
    text = _FONT_TABLE_RE.sub("", text)
    text = _COLOR_TABLE_RE.sub("", text)
    text = _CONTROL_WORD_RE.sub(" ", text)
    text = text.replace("{", "").replace("}", "")
    return _WHITESPACE_RE.sub(" ", text).strip()


def generate_basic_rtf(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("}", "\\}").replace("{", "\\{")
    return f"{{\\rtf1\\ansi\\deff0 {escaped}}}"


def update_styled_text_in_xml(xml: str, transform: Callable[[str], str]) -> str:
    """Apply ``transform`` to the RTF inside an action's StyledText payload.

    The re-encoded payload replaces the old one and the plain ``Text`` string
    is re-synchronised from the new RTF. XML without a StyledText payload is
    returned unchanged.
    """

    match = STYLED_TEXT_RE.search(xml)
    if match is None:
        logger.warning("No <StyledText><data> block found; leaving XML untouched")
        return xml
    decoded = decode_styled_text(match.group("data"))
    new_rtf = transform(decoded.rtf)
    block = "\n".join(["<key>StyledText</key>", "<data>", encode_styled_text(new_rtf), "</data>"])
    updated = xml[: match.start()] + block + xml[match.end() :]
    return _set_plain_text(updated, strip_rtf_to_plain_text(new_rtf))


def _set_plain_text(xml: str, text: str) -> str:
    match = PLAIN_TEXT_RE.search(xml)
    if match is None:
        logger.warning("No <key>Text</key> string found; plain text not updated")
        return xml
    start, end = match.span("text")
    return xml[:start] + escape_xml(text) + xml[end:]
