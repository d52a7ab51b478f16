from __future__ import annotations

import xml.etree.ElementTree as ET

from km_actions.actions import create_insert_text, create_pause
from km_actions.macro import (
    PLIST_FOOTER,
    PLIST_HEADER,
    build_ephemeral_macro_xml,
    create_macro_group_plist,
    wrap_as_km_macros,
)
from km_actions.macro.assembler import ZERO_UID


def _fixed_clock() -> float:
    return 1_700_000_000.5


def _top_array(xml: str) -> ET.Element:
    root = ET.fromstring(xml.split("\n", 2)[2])
    assert root.tag == "plist"
    return root[0]


def test_return_only_macro_holds_exactly_one_action() -> None:
    xml = build_ephemeral_macro_xml([], return_text="%Variable%Result%")
    assert xml.startswith(PLIST_HEADER)
    assert xml.endswith(PLIST_FOOTER)
    array = _top_array(xml)
    assert len(array) == 1
    assert "<string>Return</string>" in xml


def test_ephemeral_macro_keeps_action_order() -> None:
    xml = build_ephemeral_macro_xml([create_pause(), create_insert_text(text="x")])
    assert xml.index("<string>Pause</string>") < xml.index("<string>InsertText</string>")
    assert len(_top_array(xml)) == 2


def test_wrap_as_km_macros_builds_scratch_group() -> None:
    xml = wrap_as_km_macros(create_pause(), "kmjs-test-case", clock=_fixed_clock)
    group = _top_array(xml)[0]
    keys = [child.text for child in group if child.tag == "key"]
    assert keys == ["Activate", "CreationDate", "Macros", "Name", "ToggleMacroUID", "UID"]
    assert xml.count(ZERO_UID) == 2
    assert "<string>1700000000500</string>" in xml
    assert "<key>Triggers</key>\n\t\t\t\t<array/>" in xml


def test_wrap_accepts_prerendered_xml() -> None:
    xml = wrap_as_km_macros(create_pause().to_xml(), "m", "g", clock=_fixed_clock)
    macro_actions = _top_array(xml)[0].find("array/dict/array")
    assert macro_actions is not None and len(macro_actions) == 1


def test_macro_group_plist_uses_fresh_uid_and_timestamp() -> None:
    xml = create_macro_group_plist([create_pause()], "Macro", "Group", clock=_fixed_clock)
    assert "<string>1700000000501</string>" in xml
    assert "<real>1700000000.5</real>" in xml
    assert xml.count(ZERO_UID) == 1
