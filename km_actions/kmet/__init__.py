"""Edit Keyboard Maestro XML as text: escaping, XML/JSON conversion and search-replace."""

from .convert import json_to_xml, xml_to_json
from .text import compile_search, encode_text_for_json, encode_text_for_xml, search_replace_in_text

__all__ = [
    "compile_search",
    "encode_text_for_json",
    "encode_text_for_xml",
    "json_to_xml",
    "search_replace_in_text",
    "xml_to_json",
]
