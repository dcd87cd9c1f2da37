"""Tests for tui_keypress.legacy — classic terminal encodings"""
import string

import pytest

from tui_keypress import CTRL_CODES, KEY_NAMES, NON_ALPHANUMERIC_KEYS, SHIFT_CODES, parse_legacy


def _flags(key):
    return {
        "ctrl": key.ctrl,
        "meta": key.meta,
        "shift": key.shift,
        "option": key.option,
        "super": key.super,
        "hyper": key.hyper,
    }


class TestSingleCharacters:
    def test_lowercase_letter(self):
        key = parse_legacy("q")
        assert key.name == "q"
        assert not key.shift

    @pytest.mark.parametrize("letter", string.ascii_uppercase)
    def test_uppercase_letter_is_shift(self, letter):
        key = parse_legacy(letter)
        assert key.name == letter.lower()
        assert key.shift
        assert not key.ctrl
        assert key.sequence == letter

    @pytest.mark.parametrize("code", range(0x01, 0x1b))
    def test_c0_ctrl_letter(self, code):
        key = parse_legacy(chr(code))
        # \t, \n, \r and \b are decoded by name before the ctrl+letter rule
        if chr(code) in "\t\n\r\b":
            return
        assert key.name == chr(code + 96)
        assert key.ctrl

    def test_bel_is_ctrl_g(self):
        key = parse_legacy("\x07")
        assert key.name == "g"
        assert key.ctrl

    @pytest.mark.parametrize("digit", string.digits)
    def test_digit(self, digit):
        key = parse_legacy(digit)
        assert key.name == digit
        assert key.number
        assert key.sequence == digit

    @pytest.mark.parametrize("ch", ["!", "@", "$", "^", "~", "é"])
    def test_other_character_passthrough(self, ch):
        key = parse_legacy(ch)
        assert key.name == ch
        assert not key.shift
        assert not key.number


class TestLiterals:
    @pytest.mark.parametrize("data,name,meta", [
        ("\r", "return", False),
        ("\x1b\r", "return", True),
        ("\n", "linefeed", False),
        ("\x1b\n", "linefeed", True),
        ("\t", "tab", False),
        ("\b", "backspace", False),
        ("\x1b\b", "backspace", True),
        ("\x7f", "backspace", False),
        ("\x1b\x7f", "backspace", True),
        ("\x1b", "escape", False),
        ("\x1b\x1b", "escape", True),
        (" ", "space", False),
        ("\x1b ", "space", True),
    ])
    def test_literal(self, data, name, meta):
        key = parse_legacy(data)
        assert key.name == name
        assert key.meta is meta
        assert not key.option
        assert not key.ctrl
        assert key.sequence == data

    def test_ctrl_space(self):
        key = parse_legacy("\x00")
        assert key.name == "space"
        assert key.ctrl
        assert not key.meta

    def test_literals_carry_no_modifier_fields(self):
        key = parse_legacy("\r")
        assert key.super is None
        assert key.hyper is None
        assert key.code is None


class TestMetaKeys:
    def test_meta_lowercase(self):
        key = parse_legacy("\x1ba")
        assert key.name == "a"
        assert key.meta
        assert not key.option
        assert not key.shift

    def test_meta_uppercase_keeps_case(self):
        key = parse_legacy("\x1bU")
        assert key.name == "U"
        assert key.meta
        assert key.shift
        assert not key.option

    def test_meta_digit(self):
        key = parse_legacy("\x1b5")
        assert key.name == "5"
        assert key.meta
        assert not key.number

    @pytest.mark.parametrize("data,name", [("\x1bF", "right"), ("\x1bB", "left")])
    def test_uppercase_f_and_b_are_arrows(self, data, name):
        key = parse_legacy(data)
        assert key.name == name
        assert key.meta
        assert not key.shift
        assert key.sequence == data

    @pytest.mark.parametrize("data,name", [("\x1bf", "f"), ("\x1bb", "b"), ("\x1bP", "P"), ("\x1bN", "N")])
    def test_other_letters_are_not_arrows(self, data, name):
        assert parse_legacy(data).name == name

    @pytest.mark.parametrize("code", range(0x01, 0x1b))
    def test_meta_ctrl_letter(self, code):
        data = "\x1b" + chr(code)
        # ESC + \r, \n, \b are named literals
        if chr(code) in "\n\r\b":
            return
        key = parse_legacy(data)
        assert key.name == chr(code + 96)
        assert key.ctrl
        assert key.meta
        assert not key.option


class TestFunctionKeys:
    @pytest.mark.parametrize("code,name", sorted(KEY_NAMES.items()))
    def test_every_table_entry(self, code, name):
        key = parse_legacy("\x1b" + code)
        assert key.name == name
        assert key.code == code
        assert key.shift is (code in SHIFT_CODES)
        assert key.ctrl is (code in CTRL_CODES)

    @pytest.mark.parametrize("modifier", range(2, 17))
    def test_modifier_bits(self, modifier):
        key = parse_legacy(f"\x1b[1;{modifier}A")
        bits = modifier - 1
        assert key.name == "up"
        assert key.code == "[A"
        assert _flags(key) == {
            "ctrl": bool(bits & 4),
            "meta": bool(bits & 2),
            "shift": bool(bits & 1),
            "option": bool(bits & 2),
            "super": bool(bits & 8),
            "hyper": bool(bits & 16),
        }

    def test_hyper_bit(self):
        key = parse_legacy("\x1b[1;17A")
        assert key.hyper
        assert not key.super
        assert not key.ctrl

    def test_unmodified_arrow(self):
        key = parse_legacy("\x1b[A")
        assert _flags(key) == {
            "ctrl": False, "meta": False, "shift": False,
            "option": False, "super": False, "hyper": False,
        }

    @pytest.mark.parametrize("data,flags", [
        ("\x1b[3;2~", {"shift": True}),
        ("\x1b[3;3~", {"meta": True, "option": True}),
        ("\x1b[3;5~", {"ctrl": True}),
        ("\x1b[3;4~", {"shift": True, "meta": True, "option": True}),
        ("\x1b[3;7~", {"ctrl": True, "meta": True, "option": True}),
    ])
    def test_modified_delete(self, data, flags):
        key = parse_legacy(data)
        expected = {"ctrl": False, "meta": False, "shift": False, "option": False, "super": False, "hyper": False}
        expected.update(flags)
        assert key.name == "delete"
        assert key.code == "[3~"
        assert key.sequence == data
        assert _flags(key) == expected

    @pytest.mark.parametrize("data,name", [
        ("\x1b[11;5~", "f1"),
        ("\x1b[24;2~", "f12"),
        ("\x1b[1;5H", "home"),
        ("\x1b[5;3~", "pageup"),
    ])
    def test_modified_function_keys(self, data, name):
        assert parse_legacy(data).name == name

    def test_super_function_key(self):
        key = parse_legacy("\x1b[11;9~")
        assert key.name == "f1"
        assert key.super
        assert not key.meta
        assert not key.option

    def test_rxvt_shift_override(self):
        key = parse_legacy("\x1b[a")
        assert key.name == "up"
        assert key.shift
        assert not key.ctrl

    def test_rxvt_ctrl_override(self):
        key = parse_legacy("\x1bOa")
        assert key.name == "up"
        assert key.ctrl
        assert not key.shift

    def test_overrides_combine_with_modifier(self):
        key = parse_legacy("\x1b[2;5$")
        assert key.name == "insert"
        assert key.code == "[2$"
        assert key.shift
        assert key.ctrl

    def test_back_tab(self):
        key = parse_legacy("\x1b[Z")
        assert key.name == "tab"
        assert key.shift

    def test_doubled_escape_is_alt(self):
        key = parse_legacy("\x1b\x1b[A")
        assert key.name == "up"
        assert key.code == "[A"
        assert key.meta
        assert key.option

    def test_doubled_escape_keeps_modifier_bits(self):
        key = parse_legacy("\x1b\x1b[1;5C")
        assert key.name == "right"
        assert key.ctrl
        assert key.meta
        assert key.option

    def test_ss2_prefix_is_structural_only(self):
        key = parse_legacy("\x1bNA")
        assert key.name == ""
        assert key.code is None

    def test_trailing_bytes_ignored(self):
        key = parse_legacy("\x1b[Axyz")
        assert key.name == "up"
        assert key.raw == "\x1b[Axyz"

    @pytest.mark.parametrize("data", ["\x1b[99~", "\x1b[1;5X", "\x1bOz", "\x1b[27;5u"])
    def test_unknown_code_resets(self, data):
        key = parse_legacy(data)
        assert key.name == ""
        assert key.code is None
        assert not key.ctrl
        assert key.super is None
        assert key.raw == data
        assert key.sequence == data


class TestModifyOtherKeys:
    @pytest.mark.parametrize("char_code,name", [
        (13, "return"),
        (27, "escape"),
        (9, "tab"),
        (32, "space"),
        (127, "backspace"),
        (8, "backspace"),
    ])
    def test_named_keys(self, char_code, name):
        data = f"\x1b[27;5;{char_code}~"
        key = parse_legacy(data)
        assert key.name == name
        assert key.ctrl
        assert not key.shift
        assert key.sequence == data

    @pytest.mark.parametrize("modifier,flags", [
        (2, {"shift": True}),
        (3, {"meta": True, "option": True}),
        (5, {"ctrl": True}),
        (6, {"shift": True, "ctrl": True}),
        (4, {"shift": True, "meta": True, "option": True}),
        (7, {"ctrl": True, "meta": True, "option": True}),
        (8, {"shift": True, "ctrl": True, "meta": True, "option": True}),
    ])
    def test_enter_modifiers(self, modifier, flags):
        key = parse_legacy(f"\x1b[27;{modifier};13~")
        expected = {"ctrl": False, "meta": False, "shift": False, "option": False, "super": False, "hyper": False}
        expected.update(flags)
        assert key.name == "return"
        assert _flags(key) == expected
        assert key.event_type == "press"
        assert key.source == "raw"

    def test_digit_collapses_sequence(self):
        key = parse_legacy("\x1b[27;2;49~")
        assert key.name == "1"
        assert key.shift
        assert key.number
        assert key.sequence == "1"
        assert key.raw == "\x1b[27;2;49~"

    def test_letter_collapses_sequence(self):
        key = parse_legacy("\x1b[27;5;97~")
        assert key.name == "a"
        assert key.ctrl
        assert not key.number
        assert key.sequence == "a"

    def test_out_of_range_code_is_unknown(self):
        key = parse_legacy("\x1b[27;5;99999999~")
        assert key.name == ""
        assert not key.ctrl


class TestUnknown:
    @pytest.mark.parametrize("data", ["\x1b]11;rgb:0000", "\x1b[<0;10", "xyz", "\x1bé"])
    def test_unknown(self, data):
        key = parse_legacy(data)
        assert key.name == ""
        assert key.raw == data
        assert key.source == "raw"
        assert key.event_type == "press"


class TestNonAlphanumericKeys:
    def test_contents(self):
        for name in ("up", "down", "left", "right", "f1", "backspace", "tab"):
            assert name in NON_ALPHANUMERIC_KEYS

    def test_no_duplicates(self):
        assert len(set(NON_ALPHANUMERIC_KEYS)) == len(NON_ALPHANUMERIC_KEYS)
