"""Tests for the POSIX key reader against a pseudo-terminal."""

import os
import select
import sys

import pytest

from serialcomm.ui.keyboard import KEY_BACKSPACE, KEY_ENTER, KEY_ESCAPE, KeyReader

pytestmark = pytest.mark.skipif(sys.platform == 'win32', reason="POSIX terminal handling")

if sys.platform != 'win32':
    import termios


@pytest.fixture
def terminal():
    """Yield (master_fd, slave stream) for a fresh pty."""
    master, slave = os.openpty()
    stream = os.fdopen(slave, 'r')
    yield master, stream
    stream.close()
    os.close(master)


def type_keys(master, stream, data: bytes) -> None:
    os.write(master, data)
    r, _, _ = select.select([stream.fileno()], [], [], 2.0)
    assert r, "pty did not deliver input"


def read_all(reader, limit=20):
    keys = []
    for _ in range(limit):
        key = reader.read_key()
        if key is None:
            break
        keys.append(key)
    return keys


def test_no_input_returns_none(terminal):
    _, stream = terminal
    with KeyReader(stream) as reader:
        assert reader.read_key() is None


def test_lone_escape(terminal):
    master, stream = terminal
    with KeyReader(stream) as reader:
        type_keys(master, stream, b'\x1b')
        assert reader.read_key() == KEY_ESCAPE


def test_arrow_key_is_swallowed_whole(terminal):
    master, stream = terminal
    with KeyReader(stream) as reader:
        type_keys(master, stream, b'\x1b[A')
        assert reader.read_key() is None
        assert reader.read_key() is None


def test_keys_after_arrow_survive(terminal):
    master, stream = terminal
    with KeyReader(stream) as reader:
        type_keys(master, stream, b'\x1b[1;5CX')
        assert reader.read_key() is None
        assert reader.read_key() == 'X'


def test_enter_and_backspace(terminal):
    master, stream = terminal
    with KeyReader(stream) as reader:
        type_keys(master, stream, b'A\x7fT\n')
        assert read_all(reader) == ['A', KEY_BACKSPACE, 'T', KEY_ENTER]


def test_pasted_line_is_read_in_full(terminal):
    master, stream = terminal
    with KeyReader(stream) as reader:
        type_keys(master, stream, b'AT+CSQ\r')
        assert read_all(reader) == ['A', 'T', '+', 'C', 'S', 'Q', KEY_ENTER]


def test_multibyte_character(terminal):
    master, stream = terminal
    with KeyReader(stream) as reader:
        type_keys(master, stream, 'é'.encode('utf-8'))
        assert reader.read_key() == 'é'


def test_terminal_mode_restored_on_exit(terminal):
    _, stream = terminal
    fd = stream.fileno()
    before = termios.tcgetattr(fd)
    assert before[3] & termios.ICANON

    with KeyReader(stream):
        inside = termios.tcgetattr(fd)
        assert not inside[3] & termios.ICANON
        assert not inside[3] & termios.ECHO

    assert termios.tcgetattr(fd) == before


def test_terminal_mode_restored_after_error(terminal):
    _, stream = terminal
    fd = stream.fileno()
    before = termios.tcgetattr(fd)
    with pytest.raises(RuntimeError):
        with KeyReader(stream):
            raise RuntimeError("boom")
    assert termios.tcgetattr(fd) == before
