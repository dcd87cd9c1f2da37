"""
tui_keypress — keyboard input decoding for terminal user interfaces.

Turns raw terminal input (legacy escape sequences, modifyOtherKeys and the
Kitty keyboard protocol) into KeyEvent values, and drops terminal responses
that share the input stream.
"""
from .classifier import classify, is_terminal_response
from .keys import (
    KEY,
    KeyId,
    is_key_release,
    is_key_repeat,
    matches_key,
    normalize_input,
    parse_key_id,
    parse_keypress,
)
from .kitty import KITTY_KEY_NAMES, parse_kitty
from .legacy import CTRL_CODES, KEY_NAMES, NON_ALPHANUMERIC_KEYS, SHIFT_CODES, parse_legacy
from .types import KeyEvent, KeyEventType, KeySource, ParseKeypressOptions

__all__ = [
    # classifier
    "classify",
    "is_terminal_response",
    # keys
    "KEY",
    "KeyId",
    "is_key_release",
    "is_key_repeat",
    "matches_key",
    "normalize_input",
    "parse_key_id",
    "parse_keypress",
    # kitty
    "KITTY_KEY_NAMES",
    "parse_kitty",
    # legacy
    "CTRL_CODES",
    "KEY_NAMES",
    "NON_ALPHANUMERIC_KEYS",
    "SHIFT_CODES",
    "parse_legacy",
    # types
    "KeyEvent",
    "KeyEventType",
    "KeySource",
    "ParseKeypressOptions",
]
