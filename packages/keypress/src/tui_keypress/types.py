"""
Key event types — the value objects produced by parse_keypress().
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

KeyEventType = Literal["press", "repeat", "release"]
KeySource = Literal["raw", "kitty"]


# ─── Options ──────────────────────────────────────────────────────────────────

class ParseKeypressOptions(BaseModel):
    use_kitty_keyboard: bool = False


# ─── Key event ────────────────────────────────────────────────────────────────

class KeyEvent(BaseModel):
    """A single decoded keystroke.

    ``option`` is only set when the encoding carries an explicit Alt modifier
    bit; ``meta`` is also set by a bare ESC prefix. Fields left at ``None``
    were not reported by the encoding that produced the event.
    """

    name: str = ""
    ctrl: bool = False
    meta: bool = False
    shift: bool = False
    option: bool = False
    number: bool = False
    sequence: str = ""
    raw: str = ""
    event_type: KeyEventType = "press"
    source: KeySource = "raw"
    code: str | None = None
    super: bool | None = None
    hyper: bool | None = None
    caps_lock: bool | None = None
    num_lock: bool | None = None
    base_code: int | None = None
    repeated: bool | None = None

    model_config = {"frozen": True}

    @classmethod
    def empty(cls, data: str = "") -> KeyEvent:
        """The unknown event for *data*: no name, no modifiers."""
        return cls(sequence=data, raw=data)

    @property
    def alt(self) -> bool:
        return self.option or self.meta

    @property
    def key_id(self) -> str:
        """Binding identifier such as ``ctrl+alt+up``; ``""`` for unknown keys."""
        if not self.name:
            return ""
        mods: list[str] = []
        if self.super:
            mods.append("super")
        if self.ctrl:
            mods.append("ctrl")
        if self.alt:
            mods.append("alt")
        if self.shift:
            mods.append("shift")
        return "+".join(mods + [self.name.lower()])
