from __future__ import annotations

from hypothesis import given, strategies as st

from km_actions.actions import create_group, create_insert_text, create_pause
from km_actions.harness import extract_action_dict, normalize_action_xml
from km_actions.macro import PLIST_FOOTER, PLIST_HEADER


def test_action_uids_are_removed_at_every_depth() -> None:
    xml = create_group(name="G", actions=[create_pause(), create_insert_text(text="a")]).to_xml()
    normalized = normalize_action_xml(xml)
    assert "ActionUID" not in normalized
    assert "<string>Pause</string>" in normalized


def test_indentation_and_envelope_do_not_matter() -> None:
    action = create_pause(time=1)
    bare = action.to_xml()
    wrapped = PLIST_HEADER + bare.replace("\t", "    ") + "\n" + PLIST_FOOTER
    assert normalize_action_xml(wrapped) == normalize_action_xml(bare)


def test_uid_values_do_not_matter() -> None:
    first = "<dict><key>ActionUID</key><integer>1</integer><key>MacroActionType</key><string>Pause</string></dict>"
    second = "<dict>\n\t<key>ActionUID</key>\n\t<integer>99</integer>\n\t<key>MacroActionType</key>\n\t<string>Pause</string>\n</dict>"
    assert normalize_action_xml(first) == normalize_action_xml(second)


def test_text_strings_lose_newlines_and_data_is_compacted() -> None:
    exported = (
        "<dict>\n"
        "\t<key>StyledText</key>\n"
        "\t<data>\n\tQUJD\n\tREVG\n\t</data>\n"
        "\t<key>Text</key>\n"
        "\t<string>line one\n\t\tline two</string>\n"
        "</dict>"
    )
    generated = "<dict><key>StyledText</key><data>QUJDREVG</data><key>Text</key><string>line oneline two</string></dict>"
    assert normalize_action_xml(exported) == normalize_action_xml(generated)


def test_other_strings_keep_newlines_without_indent() -> None:
    normalized = normalize_action_xml("<dict><key>Title</key><string>a\n    b</string></dict>")
    assert "<string>a\nb</string>" in normalized


def test_empty_leaves_use_self_closing_form() -> None:
    assert normalize_action_xml("<dict><key>A</key><string></string></dict>") == normalize_action_xml(
        "<dict><key>A</key><string/></dict>"
    )


def test_unparseable_text_falls_back_to_regex() -> None:
    broken = "<dict><key>ActionUID</key><integer>5</integer><key>X</key><string>unterminated"
    assert normalize_action_xml(broken) == "<dict><key>X</key><string>unterminated"


def test_extract_action_dict_leaves_bare_dicts_alone() -> None:
    assert extract_action_dict("<dict/>") == "<dict/>"


safe_text = st.text(alphabet=st.characters(min_codepoint=32, max_codepoint=126), max_size=40)


@given(safe_text, st.sampled_from(["ByTyping", "ByPasting", "DisplayWindow"]))
def test_normalization_is_idempotent(text: str, action: str) -> None:
    once = normalize_action_xml(create_insert_text(text=text, action=action).to_xml())
    assert normalize_action_xml(once) == once
