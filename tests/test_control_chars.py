"""Tests for the control character table and plain formatting."""

from serialcomm.core.control_chars import (
    CONTROL_TABLE,
    format_plain,
    is_control,
    token_for,
    tokenize,
)


def test_table_covers_c0_and_del():
    assert sorted(CONTROL_TABLE) == list(range(32)) + [127]
    assert CONTROL_TABLE[0] == "[NUL]"
    assert CONTROL_TABLE[2] == "[STX]"
    assert CONTROL_TABLE[3] == "[ETX]"
    assert CONTROL_TABLE[10] == "[LF]"
    assert CONTROL_TABLE[13] == "[CR]"
    assert CONTROL_TABLE[27] == "[ESC]"
    assert CONTROL_TABLE[31] == "[US]"
    assert CONTROL_TABLE[127] == "[DEL]"


def test_every_byte_has_a_rendering():
    for code in range(256):
        rendered = format_plain(bytes([code]))
        if code < 32 or code == 127:
            assert rendered == CONTROL_TABLE[code]
            assert is_control(code)
        else:
            assert rendered == chr(code)
            assert not is_control(code)
        assert token_for(code) == rendered


def test_space_is_literal():
    assert format_plain(b"A B") == "A B"


def test_response_line():
    assert format_plain(b"\x02OK 230.1V\x03\r\n") == "[STX]OK 230.1V[ETX][CR][LF]"


def test_accepts_text():
    assert format_plain("x\ty") == "x[HT]y"


def test_empty_input():
    assert format_plain(b"") == ""
    assert list(tokenize(b"")) == []


def test_tokenize_groups_printable_runs():
    assert list(tokenize(b"AB\r\nC")) == [
        ("AB", False),
        ("[CR]", True),
        ("[LF]", True),
        ("C", False),
    ]
