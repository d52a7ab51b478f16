"""Plist XML building blocks: escaping, ordering, structural nodes, styled text."""

from .nodes import Data, PlistArray, PlistDict, Real, render_document, render_value
from .ordering import key_order
from .primitives import action_uid, escape_xml, indent_text, km_time_code, number_text
from .styled_text import (
    DecodedStyledText,
    decode_styled_text,
    encode_styled_text,
    generate_basic_rtf,
    strip_rtf_to_plain_text,
    update_styled_text_in_xml,
)
