"""
Kitty keyboard protocol decoding.

See: https://sw.kovidgoyal.net/kitty/keyboard-protocol/

Handles CSI-u key reports, functional keys reported with a private-use code
and the ``~`` / letter terminator, and legacy-shaped functional keys that
carry an explicit event type (only sent when event reporting is enabled).
"""
from __future__ import annotations

import re

from .legacy import MOD_ALT, modifier_flags
from .types import KeyEvent, KeyEventType

# ─────────────────────────────────────────────────────────────────────────────
# Modifier bits beyond the xterm set
# ─────────────────────────────────────────────────────────────────────────────

MOD_META = 32
MOD_CAPS_LOCK = 64
MOD_NUM_LOCK = 128

# ─────────────────────────────────────────────────────────────────────────────
# Key codes
# ─────────────────────────────────────────────────────────────────────────────

_PRIVATE_USE_START = 57344
_PRIVATE_USE_END = 63743
_MAX_CODEPOINT = 0x10FFFF

KITTY_KEY_NAMES: dict[int, str] = {
    8: "backspace",
    9: "tab",
    13: "return",
    27: "escape",
    32: "space",
    127: "backspace",
    57344: "escape",
    57345: "return",
    57346: "tab",
    57347: "backspace",
    57348: "insert",
    57349: "delete",
    57350: "left",
    57351: "right",
    57352: "up",
    57353: "down",
    57354: "pageup",
    57355: "pagedown",
    57356: "home",
    57357: "end",
    57358: "capslock",
    57359: "scrolllock",
    57360: "numlock",
    57361: "printscreen",
    57362: "pause",
    57363: "menu",
    **{57364 + i: f"f{i + 1}" for i in range(35)},
    **{57399 + i: f"kp{i}" for i in range(10)},
    57409: "kpdecimal",
    57410: "kpdivide",
    57411: "kpmultiply",
    57412: "kpminus",
    57413: "kpplus",
    57414: "kpenter",
    57415: "kpequal",
    57416: "kpseparator",
    57417: "kpleft",
    57418: "kpright",
    57419: "kpup",
    57420: "kpdown",
    57421: "kppageup",
    57422: "kppagedown",
    57423: "kphome",
    57424: "kpend",
    57425: "kpinsert",
    57426: "kpdelete",
    57427: "kpbegin",
    57428: "mediaplay",
    57429: "mediapause",
    57430: "mediaplaypause",
    57431: "mediareverse",
    57432: "mediastop",
    57433: "mediafastforward",
    57434: "mediarewind",
    57435: "mediatracknext",
    57436: "mediatrackprevious",
    57437: "mediarecord",
    57438: "lowervolume",
    57439: "raisevolume",
    57440: "mutevolume",
    57441: "leftshift",
    57442: "leftctrl",
    57443: "leftalt",
    57444: "leftsuper",
    57445: "lefthyper",
    57446: "leftmeta",
    57447: "rightshift",
    57448: "rightctrl",
    57449: "rightalt",
    57450: "rightsuper",
    57451: "righthyper",
    57452: "rightmeta",
    57453: "isolevel3shift",
    57454: "isolevel5shift",
}

# CSI number ~ keys
_TILDE_KEY_NAMES: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageup",
    6: "pagedown",
    7: "home",
    8: "end",
    11: "f1",
    12: "f2",
    13: "f3",
    14: "f4",
    15: "f5",
    17: "f6",
    18: "f7",
    19: "f8",
    20: "f9",
    21: "f10",
    23: "f11",
    24: "f12",
}

# CSI 1 ; modifier letter keys. F3 is sent as CSI 13 ~ so that it cannot
# collide with a cursor position report.
_LETTER_KEY_NAMES: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "E": "clear",
    "F": "end",
    "H": "home",
    "P": "f1",
    "Q": "f2",
    "S": "f4",
}

# ─────────────────────────────────────────────────────────────────────────────
# Patterns (fullmatch)
# ─────────────────────────────────────────────────────────────────────────────

# CSI code[:shifted[:base]] [; modifiers[:event]] [; text] u
_CSI_U_RE = re.compile(r"\x1b\[(\d+)(?::(\d*))?(?::(\d+))?(?:;(\d*)(?::(\d+))?)?(?:;[\d:]*)?u")
_TILDE_RE = re.compile(r"\x1b\[(\d+)(?:;(\d*)(?::(\d+))?)?~")
_LETTER_RE = re.compile(r"\x1b\[1;(\d*):(\d+)([A-Z])")


def _parse_event_type(s: str | None) -> KeyEventType:
    if not s:
        return "press"
    v = int(s)
    if v == 2:
        return "repeat"
    if v == 3:
        return "release"
    return "press"


def _codepoint_name(cp: int) -> tuple[str, bool, bool]:
    """Return (name, shift, number) for a CSI-u key code."""
    name = KITTY_KEY_NAMES.get(cp)
    if name is not None:
        return name, False, False
    if cp <= 32 or cp > _MAX_CODEPOINT or _PRIVATE_USE_START <= cp <= _PRIVATE_USE_END:
        return "", False, False
    ch = chr(cp)
    if "A" <= ch <= "Z":
        return ch.lower(), True, False
    return ch, False, "0" <= ch <= "9"


def _build_event(
    data: str,
    name: str,
    modifier_field: str | None,
    event_field: str | None,
    *,
    shift: bool = False,
    number: bool = False,
    base_code: int | None = None,
) -> KeyEvent:
    modifier = int(modifier_field or "1") - 1
    fields = modifier_flags(modifier)
    fields["meta"] = bool(modifier & (MOD_ALT | MOD_META))
    fields["shift"] = fields["shift"] or shift
    event_type = _parse_event_type(event_field)
    return KeyEvent(
        name=name,
        number=number,
        sequence=data,
        raw=data,
        event_type=event_type,
        source="kitty",
        caps_lock=bool(modifier & MOD_CAPS_LOCK),
        num_lock=bool(modifier & MOD_NUM_LOCK),
        base_code=base_code,
        repeated=event_type == "repeat",
        **fields,
    )


def parse_kitty(data: str) -> KeyEvent | None:
    """
    Decode *data* as a Kitty keyboard protocol report.

    Returns None when *data* is not shaped like a Kitty sequence, so that the
    caller can fall back to legacy decoding. A Kitty-shaped sequence with an
    unmapped key code still returns an event, with an empty ``name``.
    """
    m = _CSI_U_RE.fullmatch(data)
    if m:
        cp = int(m.group(1))
        base = int(m.group(3)) if m.group(3) else None
        name, shift, number = _codepoint_name(cp)
        return _build_event(
            data, name, m.group(4), m.group(5),
            shift=shift, number=number, base_code=base,
        )

    m = _TILDE_RE.fullmatch(data)
    if m:
        key_num = int(m.group(1))
        if key_num >= _PRIVATE_USE_START:
            return _build_event(data, KITTY_KEY_NAMES.get(key_num, ""), m.group(2), m.group(3))
        # Without an event type this is plain legacy input
        if m.group(3) and key_num in _TILDE_KEY_NAMES:
            return _build_event(data, _TILDE_KEY_NAMES[key_num], m.group(2), m.group(3))
        return None

    m = _LETTER_RE.fullmatch(data)
    if m and m.group(3) in _LETTER_KEY_NAMES:
        return _build_event(data, _LETTER_KEY_NAMES[m.group(3)], m.group(1), m.group(2))

    return None
