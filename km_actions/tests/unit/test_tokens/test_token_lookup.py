from __future__ import annotations

import pytest

from km_actions.exceptions import UnknownTokenError
from km_actions.tokens import resolve_token_preset
from km_actions.tokens.lookup import TokenLookup, humanize_token_name

SMALL_TABLE = {"ARandomUniqueID": "%RandomUUID%", "FrontWindowName": "%FrontWindowName%"}


def test_humanize_splits_camel_case_and_acronyms() -> None:
    assert humanize_token_name("ARandomUniqueID") == "A Random Unique ID"


def test_find_by_any_field() -> None:
    lookup = TokenLookup(SMALL_TABLE)
    by_human = lookup.find("Front Window Name")
    assert by_human is not None
    assert lookup.find("FrontWindowName") == by_human
    assert lookup.find("%FrontWindowName%") == by_human
    assert lookup.find("nothing") is None


def test_lookup_returns_the_other_fields() -> None:
    lookup = TokenLookup(SMALL_TABLE)
    assert lookup.lookup("%RandomUUID%") == {"human": "A Random Unique ID", "pascal": "ARandomUniqueID"}
    assert lookup.lookup("A Random Unique ID", "token") == "%RandomUUID%"
    with pytest.raises(UnknownTokenError):
        lookup.lookup("Missing")
    with pytest.raises(ValueError):
        lookup.lookup("ARandomUniqueID", "colour")


def test_search_is_case_insensitive_and_sorted() -> None:
    lookup = TokenLookup(SMALL_TABLE)
    assert lookup.search("window") == {"Front Window Name": "%FrontWindowName%"}
    assert list(lookup.search("")) == ["A Random Unique ID", "Front Window Name"]


def test_presets() -> None:
    assert resolve_token_preset("keep", None) == "keep"
    assert resolve_token_preset("keep", "delete") == "%Delete%"
    assert resolve_token_preset("keep", "positionCursor") == "%|%"
    assert resolve_token_preset("keep", "ARandomUniqueID") == "%RandomUUID%"
    assert resolve_token_preset("keep", "NotAToken") == "keep"
