"""Translate human readable shortcuts into Keyboard Maestro modifier masks and key codes."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Union

from ..exceptions import ActionConfigurationError, UnsupportedKeyError

MAC_MODIFIER_CODES: Dict[str, int] = {
    "Cmd": 256,
    "Shift": 512,
    "Option": 2048,
    "Control": 4096,
}
MODIFIER_SORT_ORDER = ("Cmd", "Option", "Shift", "Control")


def _aliases(canonical: str, *names: str, sided: bool = True) -> Dict[str, str]:
    mapping: Dict[str, str] = {}
    for name in names:
        mapping[name] = canonical
        if sided:
            mapping[f"{name}Left"] = canonical
            mapping[f"{name}Right"] = canonical
    return mapping


MODIFIER_ALIASES: Dict[str, str] = {
    **_aliases("Cmd", "Cmd", "Command", "Meta", "Win", "Windows"),
    **_aliases("Shift", "Shift"),
    **_aliases("Option", "Option", "Opt", "Alt"),
    **_aliases("Control", "Ctrl", "Control"),
    "macControl": "Control",
}

KEY_CODES: Dict[str, int] = {
    # number row
    "Backquote": 50, "Digit1": 18, "Digit2": 19, "Digit3": 20, "Digit4": 21, "Digit5": 23,
    "Digit6": 22, "Digit7": 26, "Digit8": 28, "Digit9": 25, "Digit0": 29, "Minus": 27, "Equal": 24,
    # letters
    "KeyQ": 12, "KeyW": 13, "KeyE": 14, "KeyR": 15, "KeyT": 17, "KeyY": 16, "KeyU": 32,
    "KeyI": 34, "KeyO": 31, "KeyP": 35, "BracketLeft": 33, "BracketRight": 30, "Backslash": 42,
    "KeyA": 0, "KeyS": 1, "KeyD": 2, "KeyF": 3, "KeyG": 5, "KeyH": 4, "KeyJ": 38, "KeyK": 40,
    "KeyL": 37, "Semicolon": 41, "Quote": 39,
    "KeyZ": 6, "KeyX": 7, "KeyC": 8, "KeyV": 9, "KeyB": 11, "KeyN": 45, "KeyM": 46,
    "Comma": 43, "Period": 47, "Slash": 44,
    # editing
    "Space": 49, "Tab": 48, "Enter": 36, "NumpadEnter": 76, "Backspace": 51, "Delete": 51,
    "Escape": 53, "CapsLock": 57,
    # navigation
    "ArrowLeft": 123, "ArrowRight": 124, "ArrowDown": 125, "ArrowUp": 126,
    "Home": 115, "End": 119, "PageUp": 116, "PageDown": 121,
    # function keys
    "F1": 122, "F2": 120, "F3": 99, "F4": 118, "F5": 96, "F6": 97, "F7": 98, "F8": 100,
    "F9": 101, "F10": 109, "F11": 103, "F12": 111, "F13": 105, "F14": 107, "F15": 113,
    "F16": 106, "F17": 64, "F18": 79, "F19": 80, "F20": 90,
    # keypad
    "Numpad0": 82, "Numpad1": 83, "Numpad2": 84, "Numpad3": 85, "Numpad4": 86, "Numpad5": 87,
    "Numpad6": 88, "Numpad7": 89, "Numpad8": 91, "Numpad9": 92, "NumpadMultiply": 67,
    "NumpadAdd": 69, "NumpadSubtract": 78, "NumpadDivide": 75, "NumpadDecimal": 65,
    "NumpadEqual": 81, "NumLock": 71,
    "Insert": 114, "PrintScreen": 114, "Pause": 131,
}

_EXPLICIT_KEYCODE_RE = re.compile(r"^KeyCode:(\d+)$")

Shortcut = Dict[int, Optional[int]]


@dataclass(slots=True, frozen=True)
class ParsedShortcut:
    modifiers: List[str]
    key_token: str


def is_modifier(token: str) -> bool:
    return token in MODIFIER_ALIASES


def sort_modifiers(modifiers: Iterable[str]) -> List[str]:
    return sorted(modifiers, key=MODIFIER_SORT_ORDER.index)


def modifier_mask(modifiers: Iterable[str]) -> int:
    return sum(MAC_MODIFIER_CODES[m] for m in modifiers)


def parse_shortcut(shortcut: str) -> ParsedShortcut:
    """Split ``"Cmd+Shift+A"`` into canonical modifiers and the key token."""

    modifiers: List[str] = []
    key_token = ""
    for part in (p.strip() for p in shortcut.split("+")):
        if not part:
            continue
        if is_modifier(part):
            modifiers.append(MODIFIER_ALIASES[part])
        else:
            key_token = part
    return ParsedShortcut(modifiers=sort_modifiers(modifiers), key_token=key_token)


def parse_key_token(token: str) -> int:
    """Resolve one key token to its key code.

    Resolution order: explicit ``KeyCode:NN``, the key-code table, single
    letters and digits, then multi-digit raw codes in 0..255. A single digit
    is the digit key, never raw code.
    """

    raw = token
    explicit = False
    match = _EXPLICIT_KEYCODE_RE.match(raw)
    if match:
        explicit = True
        raw = match.group(1)
    code: Optional[int] = None
    if not explicit:
        code = KEY_CODES.get(raw)
        if code is None and len(raw) == 1:
            ch = raw.upper()
            if "A" <= ch <= "Z":
                code = KEY_CODES.get(f"Key{ch}")
            elif ch.isdigit():
                code = KEY_CODES.get(f"Digit{ch}")
    if code is None and raw.isdigit() and (explicit or len(raw) > 1):
        numeric = int(raw)
        if 0 <= numeric <= 255:
            code = numeric
    if code is None:
        raise UnsupportedKeyError(f'Unsupported key token: "{token}"')
    return code


def combo_mask(combo: str) -> int:
    tokens = [t.strip() for t in combo.split("+") if t.strip()]
    for token in tokens:
        if not is_modifier(token):
            raise ActionConfigurationError(f'Unknown modifier combination: "{combo}"')
    return modifier_mask(MODIFIER_ALIASES[t] for t in tokens)


def shortcut_to_map(shortcut: str) -> Shortcut:
    parsed = parse_shortcut(shortcut)
    return {modifier_mask(parsed.modifiers): parse_key_token(parsed.key_token)}


def normalize_shortcut(value: Union[int, str, Mapping[int, Optional[int]]]) -> Shortcut:
    """Normalise any accepted keystroke form to a single ``{mask: key}`` entry.

    A modifiers-only string yields ``{mask: None}``.
    """

    if isinstance(value, bool):
        raise ActionConfigurationError(f"Invalid keystroke: {value!r}")
    if isinstance(value, int):
        if not 0 <= value <= 255:
            raise ActionConfigurationError(f"Key code out of range: {value}")
        return {0: value}
    if isinstance(value, Mapping):
        if len(value) == 1:
            (mask, key), = value.items()
            if str(mask).isdigit() and (key is None or isinstance(key, int)):
                return {int(mask): key}
        raise ActionConfigurationError(f"Invalid keystroke mapping: {dict(value)!r}")
    text = str(value)
    parsed = parse_shortcut(text)
    if not parsed.key_token and parsed.modifiers:
        return {modifier_mask(parsed.modifiers): None}
    return shortcut_to_map(text)


def first_modifier_mask(value: Union[int, str, Mapping[int, Optional[int]]]) -> int:
    """Return just the modifier mask of a shortcut or modifier combination."""

    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        parsed = parse_shortcut(value)
        if not parsed.key_token:
            return modifier_mask(parsed.modifiers)
    return next(iter(normalize_shortcut(value)))
