"""
Legacy terminal key decoding.

Covers literal characters, C0 control codes, ESC-prefixed (meta) keys, the
xterm / rxvt / SS3 / Cygwin / putty function-key dialects and xterm's
modifyOtherKeys encoding (CSI 27 ; modifier ; charcode ~).
"""
from __future__ import annotations

import re
from typing import Any

from .types import KeyEvent

# ─────────────────────────────────────────────────────────────────────────────
# Modifier bits (xterm: value sent = 1 + bitmask)
# ─────────────────────────────────────────────────────────────────────────────

MOD_SHIFT = 1
MOD_ALT = 2
MOD_CTRL = 4
MOD_SUPER = 8
MOD_HYPER = 16


def modifier_flags(modifier: int) -> dict[str, bool]:
    """Split an xterm modifier bitmask into KeyEvent flags.

    Alt/Option is one physical key, so its bit drives both ``meta`` and
    ``option``.
    """
    return {
        "ctrl": bool(modifier & MOD_CTRL),
        "meta": bool(modifier & MOD_ALT),
        "shift": bool(modifier & MOD_SHIFT),
        "option": bool(modifier & MOD_ALT),
        "super": bool(modifier & MOD_SUPER),
        "hyper": bool(modifier & MOD_HYPER),
    }


# ─────────────────────────────────────────────────────────────────────────────
# Function-key tables
# ─────────────────────────────────────────────────────────────────────────────

KEY_NAMES: dict[str, str] = {
    # xterm/gnome ESC O letter
    "OP": "f1",
    "OQ": "f2",
    "OR": "f3",
    "OS": "f4",
    # xterm/rxvt ESC [ number ~
    "[11~": "f1",
    "[12~": "f2",
    "[13~": "f3",
    "[14~": "f4",
    # Cygwin / libuv
    "[[A": "f1",
    "[[B": "f2",
    "[[C": "f3",
    "[[D": "f4",
    "[[E": "f5",
    # common
    "[15~": "f5",
    "[17~": "f6",
    "[18~": "f7",
    "[19~": "f8",
    "[20~": "f9",
    "[21~": "f10",
    "[23~": "f11",
    "[24~": "f12",
    # xterm ESC [ letter
    "[A": "up",
    "[B": "down",
    "[C": "right",
    "[D": "left",
    "[E": "clear",
    "[F": "end",
    "[H": "home",
    # xterm/gnome ESC O letter
    "OA": "up",
    "OB": "down",
    "OC": "right",
    "OD": "left",
    "OE": "clear",
    "OF": "end",
    "OH": "home",
    # xterm/rxvt ESC [ number ~
    "[1~": "home",
    "[2~": "insert",
    "[3~": "delete",
    "[4~": "end",
    "[5~": "pageup",
    "[6~": "pagedown",
    # putty
    "[[5~": "pageup",
    "[[6~": "pagedown",
    # rxvt
    "[7~": "home",
    "[8~": "end",
    # rxvt with shift
    "[a": "up",
    "[b": "down",
    "[c": "right",
    "[d": "left",
    "[e": "clear",
    "[2$": "insert",
    "[3$": "delete",
    "[5$": "pageup",
    "[6$": "pagedown",
    "[7$": "home",
    "[8$": "end",
    # rxvt with ctrl
    "Oa": "up",
    "Ob": "down",
    "Oc": "right",
    "Od": "left",
    "Oe": "clear",
    "[2^": "insert",
    "[3^": "delete",
    "[5^": "pageup",
    "[6^": "pagedown",
    "[7^": "home",
    "[8^": "end",
    # back-tab
    "[Z": "tab",
}

SHIFT_CODES: frozenset[str] = frozenset([
    "[a", "[b", "[c", "[d", "[e",
    "[2$", "[3$", "[5$", "[6$", "[7$", "[8$",
    "[Z",
])

CTRL_CODES: frozenset[str] = frozenset([
    "Oa", "Ob", "Oc", "Od", "Oe",
    "[2^", "[3^", "[5^", "[6^", "[7^", "[8^",
])

# Every name that does not stand for a printable character
NON_ALPHANUMERIC_KEYS: tuple[str, ...] = tuple(dict.fromkeys([*KEY_NAMES.values(), "backspace"]))

# ─────────────────────────────────────────────────────────────────────────────
# Patterns
# ─────────────────────────────────────────────────────────────────────────────

_MODIFY_OTHER_KEYS_RE = re.compile(r"\x1b\[27;(\d+);(\d+)~")
_META_KEY_RE = re.compile(r"\x1b([a-zA-Z0-9])")
# Anchored at the start only: trailing bytes after the final letter are ignored
_FN_KEY_RE = re.compile(
    r"^(?:\x1b+)(O|N|\[|\[\[)(?:(\d+)(?:;(\d+))?([~^$])|(?:1;)?(\d+)?([a-zA-Z]))"
)

_MODIFY_OTHER_KEYS_NAMES: dict[int, str] = {
    13: "return",
    27: "escape",
    9: "tab",
    32: "space",
    127: "backspace",
    8: "backspace",
}

# (name, meta) for fixed literal inputs; two-byte ESC forms carry meta
_LITERALS: dict[str, tuple[str, bool]] = {
    "\r": ("return", False),
    "\x1b\r": ("return", True),
    "\n": ("linefeed", False),
    "\x1b\n": ("linefeed", True),
    "\t": ("tab", False),
    "\b": ("backspace", False),
    "\x1b\b": ("backspace", True),
    "\x7f": ("backspace", False),
    "\x1b\x7f": ("backspace", True),
    "\x1b": ("escape", False),
    "\x1b\x1b": ("escape", True),
    " ": ("space", False),
    "\x1b ": ("space", True),
}

_MAX_CODEPOINT = 0x10FFFF


def _ctrl_letter(ch: str) -> str:
    """\\x01 → 'a' … \\x1a → 'z'."""
    return chr(ord(ch) + ord("a") - 1)


# ─────────────────────────────────────────────────────────────────────────────
# Decoders
# ─────────────────────────────────────────────────────────────────────────────

def _parse_modify_other_keys(data: str) -> KeyEvent | None:
    m = _MODIFY_OTHER_KEYS_RE.fullmatch(data)
    if not m:
        return None
    modifier = int(m.group(1)) - 1
    char_code = int(m.group(2))
    fields: dict[str, Any] = modifier_flags(modifier)

    name = _MODIFY_OTHER_KEYS_NAMES.get(char_code)
    sequence = data
    if name is None:
        if char_code > _MAX_CODEPOINT:
            return KeyEvent.empty(data)
        name = chr(char_code)
        sequence = name
        fields["number"] = 48 <= char_code <= 57
    return KeyEvent(name=name, sequence=sequence, raw=data, **fields)


def _parse_function_key(data: str) -> KeyEvent | None:
    m = _FN_KEY_RE.match(data)
    if not m:
        return None

    prefix, number, modifier_a, terminator, modifier_b, letter = m.groups()
    code = "".join(part for part in (prefix, number, terminator, letter) if part)
    modifier = int(modifier_a or modifier_b or "1") - 1
    fields: dict[str, Any] = modifier_flags(modifier)

    # Some terminals encode Alt+key as a doubled ESC prefix
    if data.startswith("\x1b\x1b"):
        fields["meta"] = True
        fields["option"] = True

    name = KEY_NAMES.get(code)
    if name is None:
        # Structurally a function key, but not one we know: report it as unknown
        return KeyEvent.empty(data)

    if code in SHIFT_CODES:
        fields["shift"] = True
    if code in CTRL_CODES:
        fields["ctrl"] = True
    return KeyEvent(name=name, sequence=data, raw=data, code=code, **fields)


def parse_legacy(data: str) -> KeyEvent:
    """
    Decode *data* as a classic terminal key encoding.

    Never returns None: input that matches nothing yields an event with an
    empty ``name``. Rules are tried in order and the first match wins.
    """
    event = _parse_modify_other_keys(data)
    if event is not None:
        return event

    literal = _LITERALS.get(data)
    if literal is not None:
        name, meta = literal
        return KeyEvent(name=name, meta=meta, sequence=data, raw=data)

    if data == "\x00":
        return KeyEvent(name="space", ctrl=True, sequence=data, raw=data)

    if len(data) == 1:
        if data <= "\x1a":
            return KeyEvent(name=_ctrl_letter(data), ctrl=True, sequence=data, raw=data)
        if "0" <= data <= "9":
            return KeyEvent(name=data, number=True, sequence=data, raw=data)
        if "A" <= data <= "Z":
            return KeyEvent(name=data.lower(), shift=True, sequence=data, raw=data)
        return KeyEvent(name=data, sequence=data, raw=data)

    m = _META_KEY_RE.fullmatch(data)
    if m:
        ch = m.group(1)
        shift = False
        # Old terminals send ESC F / ESC B for meta+arrow; lowercase is plain meta
        if ch == "F":
            name = "right"
        elif ch == "B":
            name = "left"
        else:
            name = ch
            shift = "A" <= ch <= "Z"
        return KeyEvent(name=name, meta=True, shift=shift, sequence=data, raw=data)

    if len(data) == 2 and data[0] == "\x1b" and data[1] <= "\x1a":
        return KeyEvent(name=_ctrl_letter(data[1]), ctrl=True, meta=True, sequence=data, raw=data)

    event = _parse_function_key(data)
    if event is not None:
        return event

    return KeyEvent.empty(data)
