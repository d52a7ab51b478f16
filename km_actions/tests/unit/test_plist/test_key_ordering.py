from __future__ import annotations

from hypothesis import given, strategies as st

from km_actions.plist.ordering import CONDITION_FLAG_KEYS, key_order

key_names = st.text(alphabet=st.characters(whitelist_categories=("Lu", "Ll")), min_size=1, max_size=12)


def test_condition_order_puts_discriminant_before_flags() -> None:
    keys = ["IsFront", "Zed", "ConditionType", "IsFrontApplication", "alpha", "IsFrontWindow"]
    assert key_order(keys, "condition") == [
        "alpha",
        "Zed",
        "ConditionType",
        "IsFront",
        "IsFrontApplication",
        "IsFrontWindow",
    ]


def test_action_order_leads_with_type_and_uid() -> None:
    keys = ["Text", "ActionUID", "Action", "MacroActionType"]
    assert key_order(keys, "action") == ["MacroActionType", "ActionUID", "Action", "Text"]


def test_application_order_uses_fixed_keys_first() -> None:
    keys = ["Path", "Extra", "Name", "BundleIdentifier", "Match", "NewFile"]
    assert key_order(keys, "application") == ["BundleIdentifier", "Match", "Name", "NewFile", "Path", "Extra"]


def test_default_order_is_case_insensitive_with_case_tiebreak() -> None:
    assert key_order(["b", "B", "a", "C"]) == ["a", "B", "b", "C"]


@given(st.lists(key_names, max_size=15), st.sampled_from([None, "condition", "action", "application", "other"]))
def test_ordering_is_a_deterministic_permutation(keys, context) -> None:
    original = list(keys)
    first = key_order(keys, context)
    assert keys == original
    assert sorted(first) == sorted(keys)
    assert key_order(list(reversed(keys)), context) == first or len(set(keys)) != len(keys)


@given(st.lists(st.sampled_from(["A", "b", "ConditionType", *CONDITION_FLAG_KEYS]), max_size=10))
def test_condition_flags_always_trail(keys) -> None:
    ordered = key_order(keys, "condition")
    flags = [k for k in ordered if k in CONDITION_FLAG_KEYS]
    assert ordered[len(ordered) - len(flags):] == flags
    assert flags == sorted(flags)
