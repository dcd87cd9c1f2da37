"""
Keyboard input handling — single entry point for decoding terminal input.

Supports both legacy terminal sequences and the Kitty keyboard protocol.
See: https://sw.kovidgoyal.net/kitty/keyboard-protocol/

API:
- parse_keypress(data, options) — decode input into a KeyEvent, or None for
  terminal responses (mouse reports, query replies, paste markers)
- normalize_input(data) — coerce bytes / arbitrary values to the decoded string
- matches_key(event, key_id) — check if an event matches a key identifier
- parse_key_id(key_id) — split "ctrl+shift+a" into its parts
- is_key_release(event) / is_key_repeat(event) — Kitty event type checks
- KEY — helper constants for common keys
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .classifier import classify
from .kitty import parse_kitty
from .legacy import parse_legacy
from .types import KeyEvent, ParseKeypressOptions

logger = logging.getLogger(__name__)

# ─────────────────────────────────────────────────────────────────────────────
# Key identifiers are plain strings: "ctrl+shift+a"
# ─────────────────────────────────────────────────────────────────────────────

KeyId = str

# ─────────────────────────────────────────────────────────────────────────────
# Key helper
# ─────────────────────────────────────────────────────────────────────────────

class _KeyHelper:
    """Helper object for creating key identifier strings with autocomplete."""

    # Special keys
    escape = "escape"
    esc = "esc"
    enter = "enter"
    ret = "return"
    linefeed = "linefeed"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    clear = "clear"
    home = "home"
    end = "end"
    page_up = "pageup"
    page_down = "pagedown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"
    f1 = "f1"
    f2 = "f2"
    f3 = "f3"
    f4 = "f4"
    f5 = "f5"
    f6 = "f6"
    f7 = "f7"
    f8 = "f8"
    f9 = "f9"
    f10 = "f10"
    f11 = "f11"
    f12 = "f12"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def shift(key: str) -> str:
        return f"shift+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"

    @staticmethod
    def ctrl_shift(key: str) -> str:
        return f"ctrl+shift+{key}"

    @staticmethod
    def ctrl_alt(key: str) -> str:
        return f"ctrl+alt+{key}"

    @staticmethod
    def shift_alt(key: str) -> str:
        return f"shift+alt+{key}"


KEY = _KeyHelper()

_KEY_ALIASES: dict[str, str] = {
    "enter": "return",
    "esc": "escape",
}

# ─────────────────────────────────────────────────────────────────────────────
# Input normalization
# ─────────────────────────────────────────────────────────────────────────────

def normalize_input(data: Any = None) -> str:
    """
    Coerce raw input to the string the decoders work on.

    A lone byte with the high bit set is the 8-bit meta convention and
    becomes ESC + the byte with the high bit cleared.
    """
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    if isinstance(data, (bytes, bytearray, memoryview)):
        raw = bytes(data)
        if len(raw) == 1 and raw[0] > 127:
            return "\x1b" + chr(raw[0] - 128)
        return raw.decode("utf-8", errors="replace")
    return str(data)


def _coerce_options(options: ParseKeypressOptions | Mapping[str, Any] | None) -> ParseKeypressOptions:
    if options is None:
        return ParseKeypressOptions()
    if isinstance(options, ParseKeypressOptions):
        return options
    if isinstance(options, Mapping):
        use_kitty = options.get("use_kitty_keyboard", options.get("useKittyKeyboard", False))
        return ParseKeypressOptions(use_kitty_keyboard=bool(use_kitty))
    return ParseKeypressOptions(use_kitty_keyboard=bool(getattr(options, "use_kitty_keyboard", False)))


# ─────────────────────────────────────────────────────────────────────────────
# parse_keypress
# ─────────────────────────────────────────────────────────────────────────────

def parse_keypress(
    data: Any = None,
    options: ParseKeypressOptions | Mapping[str, Any] | None = None,
) -> KeyEvent | None:
    """
    Decode one chunk of terminal input.

    Returns None when the chunk is a terminal response rather than a key
    (this takes priority over the Kitty protocol setting). Otherwise returns a
    KeyEvent; unrecognized input gives an event whose ``name`` is ``""``.
    Empty input is not filtered: it yields an empty event.
    """
    s = normalize_input(data)
    opts = _coerce_options(options)

    kind = classify(s)
    if kind is not None:
        logger.debug("Dropping %s report %r", kind, s)
        return None

    if opts.use_kitty_keyboard:
        kitty = parse_kitty(s)
        if kitty is not None:
            return kitty

    key = parse_legacy(s)
    if s and not key.name:
        logger.debug("Unrecognized key sequence %r", s)
    return key


# ─────────────────────────────────────────────────────────────────────────────
# Key ID matching
# ─────────────────────────────────────────────────────────────────────────────

def parse_key_id(key_id: str) -> tuple[str, bool, bool, bool] | None:
    """Return (key, ctrl, shift, alt) or None."""
    parts = key_id.lower().split("+")
    key = parts[-1] if parts else ""
    if not key:
        return None
    ctrl = "ctrl" in parts[:-1]
    shift = "shift" in parts[:-1]
    alt = "alt" in parts[:-1] or "meta" in parts[:-1] or "option" in parts[:-1]
    return _KEY_ALIASES.get(key, key), ctrl, shift, alt


def matches_key(event: KeyEvent | None, key_id: KeyId) -> bool:
    """
    Check if a decoded *event* matches the given key identifier.

    Names compare case-insensitively, so ``ESC A`` (name "A", shift) matches
    ``alt+shift+a``. ``enter`` and ``esc`` are aliases for ``return`` and
    ``escape``.
    """
    if event is None or not event.name:
        return False
    parsed = parse_key_id(key_id)
    if not parsed:
        return False
    key, ctrl, shift, alt = parsed
    return (
        event.name.lower() == key
        and event.ctrl == ctrl
        and event.shift == shift
        and event.alt == alt
    )


def is_key_release(event: KeyEvent | None) -> bool:
    """Check if *event* is a Kitty key-release event."""
    return event is not None and event.event_type == "release"


def is_key_repeat(event: KeyEvent | None) -> bool:
    """Check if *event* is a Kitty key-repeat event."""
    return event is not None and event.event_type == "repeat"
