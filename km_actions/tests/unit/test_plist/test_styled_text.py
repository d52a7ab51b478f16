from __future__ import annotations

import logging

import pytest
from hypothesis import given, strategies as st

from km_actions.exceptions import StyledTextError
from km_actions.plist import (
    decode_styled_text,
    encode_styled_text,
    generate_basic_rtf,
    strip_rtf_to_plain_text,
    update_styled_text_in_xml,
)

ascii_text = st.text(alphabet=st.characters(min_codepoint=32, max_codepoint=126), max_size=200)


@given(ascii_text)
def test_ascii_rtf_survives_encode_decode(text: str) -> None:
    rtf = generate_basic_rtf(text)
    assert decode_styled_text(encode_styled_text(rtf)).rtf == rtf


def test_encoded_payload_wraps_at_76_columns() -> None:
    encoded = encode_styled_text("x" * 300)
    assert all(len(line) <= 76 for line in encoded.splitlines())
    assert len(encoded.splitlines()) > 1


def test_decode_rejects_garbage() -> None:
    with pytest.raises(StyledTextError):
        decode_styled_text("!!! not base64 !!!")


def test_strip_rtf_drops_tables_and_control_words() -> None:
    rtf = r"{\rtf1\ansi{\fonttbl{\f0 Helvetica;}}{\colortbl;\red0\green0\blue0;}\f0 Hello \'e9t\'e9}"
    assert strip_rtf_to_plain_text(rtf) == "Hello été"


def test_generate_basic_rtf_escapes_braces() -> None:
    assert generate_basic_rtf("a{b}\\") == r"{\rtf1\ansi\deff0 a\{b\}\\}"


def test_update_styled_text_resyncs_plain_text() -> None:
    payload = encode_styled_text(generate_basic_rtf("old words"))
    xml = f"<dict>\n<key>StyledText</key>\n<data>\n{payload}\n</data>\n<key>Text</key>\n<string>old words</string>\n</dict>"
    updated = update_styled_text_in_xml(xml, lambda rtf: rtf.replace("old", "new & shiny"))
    assert "<string>new &amp; shiny words</string>" in updated
    assert payload not in updated


def test_update_without_payload_warns_and_returns_input(caplog: pytest.LogCaptureFixture) -> None:
    xml = "<dict><key>Text</key><string>x</string></dict>"
    with caplog.at_level(logging.WARNING):
        assert update_styled_text_in_xml(xml, str.upper) == xml
    assert "StyledText" in caplog.text
