"""
Root conftest.py — shared fixtures for the tui_keypress tests.

Fixtures:
  kitty   — ParseKeypressOptions with the Kitty keyboard protocol enabled
  decode  — parse_keypress() that asserts the result is not filtered
"""
from __future__ import annotations

from typing import Any, Callable

import pytest

from tui_keypress import KeyEvent, ParseKeypressOptions, parse_keypress


@pytest.fixture
def kitty() -> ParseKeypressOptions:
    return ParseKeypressOptions(use_kitty_keyboard=True)


@pytest.fixture
def decode() -> Callable[..., KeyEvent]:
    def _decode(data: Any = None, options: Any = None) -> KeyEvent:
        key = parse_keypress(data, options)
        assert key is not None, f"{data!r} was filtered as a terminal response"
        return key

    return _decode
