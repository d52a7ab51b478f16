from __future__ import annotations

from km_actions.plist import Data, PlistArray, PlistDict, Real, escape_xml, number_text, render_document
from km_actions.plist.nodes import reindent_foreign_xml


class _Foreign:
    def to_xml(self) -> str:
        return "\t\t<dict>\n\t\t\t<key>A</key>\n\t\t\t<string>b</string>\n\t\t</dict>"


def test_escape_xml_covers_all_special_characters() -> None:
    assert escape_xml("<a href=\"x\">&'") == "&lt;a href=&quot;x&quot;&gt;&amp;&apos;"


def test_empty_containers_render_self_closing() -> None:
    assert render_document(PlistDict(), 1) == "\t<dict/>"
    assert render_document(PlistArray(), 2) == "\t\t<array/>"
    assert render_document("", 0) == "<string/>"


def test_dict_skips_none_and_keeps_insertion_order() -> None:
    plist = PlistDict().add("Zeta", "z").add("Skipped", None).add("Alpha", 1).add("Flag", True)
    assert plist.keys() == ["Zeta", "Alpha", "Flag"]
    assert render_document(plist, 0).splitlines() == [
        "<dict>",
        "\t<key>Zeta</key>",
        "\t<string>z</string>",
        "\t<key>Alpha</key>",
        "\t<integer>1</integer>",
        "\t<key>Flag</key>",
        "\t<true/>",
        "</dict>",
    ]


def test_scalar_rendering() -> None:
    assert render_document(False, 0) == "<false/>"
    assert render_document(Real(1.5), 0) == "<real>1.5</real>"
    assert render_document(Data("QUJD\nREVG\n"), 1).splitlines() == ["\t<data>", "\tQUJD", "\tREVG", "\t</data>"]


def test_foreign_to_xml_objects_are_reindented() -> None:
    lines = render_document(PlistArray([_Foreign()]), 0).splitlines()
    assert lines == ["<array>", "\t<dict>", "\t\t<key>A</key>", "\t\t<string>b</string>", "\t</dict>", "</array>"]


def test_reindent_at_depth_zero_strips_common_prefix() -> None:
    assert reindent_foreign_xml("\t\t<a/>\n\t\t\t<b/>", 0) == ["<a/>", "\t<b/>"]


def test_number_text_drops_trailing_zero() -> None:
    assert number_text(1.0) == "1"
    assert number_text(0.05) == "0.05"
    assert number_text(3) == "3"
