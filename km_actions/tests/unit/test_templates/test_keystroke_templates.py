from __future__ import annotations

import pytest

from km_actions.exceptions import ActionConfigurationError, UnsupportedKeyError
from km_actions.templates.keystroke import combo_mask, normalize_shortcut, parse_key_token


def test_combo_mask_sums_aliases() -> None:
    assert combo_mask("Cmd+Shift") == 768
    assert combo_mask("Alt + CtrlLeft") == 6144
    assert combo_mask("Meta") == 256


def test_combo_mask_rejects_keys() -> None:
    with pytest.raises(ActionConfigurationError):
        combo_mask("Cmd+A")


@pytest.mark.parametrize(
    "token, code",
    [("KeyCode:7", 7), ("a", 0), ("7", 26), ("Enter", 36), ("100", 100)],
)
def test_parse_key_token(token: str, code: int) -> None:
    assert parse_key_token(token) == code


def test_parse_key_token_out_of_range() -> None:
    with pytest.raises(UnsupportedKeyError):
        parse_key_token("300")


def test_normalize_shortcut_forms() -> None:
    assert normalize_shortcut("Cmd+KeyS") == {256: 1}
    assert normalize_shortcut("Cmd+Option") == {2304: None}
    assert normalize_shortcut(36) == {0: 36}
    assert normalize_shortcut({"512": 0}) == {512: 0}
