"""
Terminal response detection.

Terminals answer queries (cursor position, device attributes, colors, ...)
and report mouse events on the same stream as keystrokes. These sequences
must be recognized and dropped before any key decoding is attempted.
"""
from __future__ import annotations

import re

# All patterns are applied with fullmatch()
_SGR_MOUSE_RE = re.compile(r"\x1b\[<\d+;\d+;\d+[Mm]")
_WINDOW_SIZE_RE = re.compile(r"\x1b\[\d+;\d+;\d+t")
_CURSOR_POSITION_RE = re.compile(r"\x1b\[\d+;\d+R")
_DEVICE_ATTRIBUTES_RE = re.compile(r"\x1b\[\?[\d;]+c")
_MODE_REPORT_RE = re.compile(r"\x1b\[\?[\d;]+\$y")
_OSC_RE = re.compile(r"\x1b\][\d;].*(?:\x1b\\|\x07)")

_FOCUS_EVENTS = frozenset(["\x1b[I", "\x1b[O"])
_PASTE_MARKERS = frozenset(["\x1b[200~", "\x1b[201~"])

_REPORT_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("window-size", _WINDOW_SIZE_RE),
    ("cursor-position", _CURSOR_POSITION_RE),
    ("device-attributes", _DEVICE_ATTRIBUTES_RE),
    ("mode-report", _MODE_REPORT_RE),
)


def classify(data: str) -> str | None:
    """Return the kind of terminal response *data* is, or None for key input."""
    if _SGR_MOUSE_RE.fullmatch(data):
        return "sgr-mouse"
    # X10 mouse: ESC [ M followed by three raw bytes
    if data.startswith("\x1b[M") and len(data) >= 6:
        return "x10-mouse"
    for kind, pattern in _REPORT_PATTERNS:
        if pattern.fullmatch(data):
            return kind
    # Only the bare forms; SS3 keys are ESC O <letter>
    if data in _FOCUS_EVENTS:
        return "focus"
    # Unterminated OSC is left to the caller's stdin buffer
    if _OSC_RE.fullmatch(data):
        return "osc"
    if data in _PASTE_MARKERS:
        return "bracketed-paste"
    return None


def is_terminal_response(data: str) -> bool:
    """True when *data* is a mouse report or query reply rather than a key."""
    return classify(data) is not None
