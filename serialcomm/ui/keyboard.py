"""Non-blocking single key input for the interactive session."""

from __future__ import annotations

import codecs
import os
import sys
from typing import Optional

# Platform-specific keyboard handling
_IS_WINDOWS = sys.platform == 'win32'
if _IS_WINDOWS:
    import msvcrt
else:
    import select
    import termios
    import tty

KEY_ESCAPE = 'ESCAPE'
KEY_ENTER = 'ENTER'
KEY_BACKSPACE = 'BACKSPACE'

_NAMED_KEYS = {
    '\x1b': KEY_ESCAPE,
    '\r': KEY_ENTER,
    '\n': KEY_ENTER,
    '\x08': KEY_BACKSPACE,
    '\x7f': KEY_BACKSPACE,
}


class KeyReader:
    """Reads keys one at a time without waiting for Enter.

    Use as a context manager: on POSIX the terminal is switched to cbreak
    mode on entry and restored on exit.
    """

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self._saved_attrs = None
        self._decoder = codecs.getincrementaldecoder('utf-8')(errors='replace')

    def __enter__(self) -> 'KeyReader':
        if not _IS_WINDOWS and self.stream.isatty():
            fd = self.stream.fileno()
            self._saved_attrs = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._saved_attrs is not None:
            termios.tcsetattr(self.stream.fileno(), termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

    def read_key(self) -> Optional[str]:
        """Return the next key, or None if none is pending.

        Named keys come back as ``KEY_ESCAPE``, ``KEY_ENTER`` or
        ``KEY_BACKSPACE``. Arrow and function keys are swallowed.
        """
        ch = self._getch()
        if ch is None:
            return None
        if _IS_WINDOWS and ch in ('\x00', '\xe0'):
            msvcrt.getwch()  # extended key scan code
            return None
        if ch == '\x1b' and self._pending(0.01):
            self._skip_sequence()
            return None
        if ch in _NAMED_KEYS:
            return _NAMED_KEYS[ch]
        if not ch.isprintable():
            return None
        return ch

    def _getch(self) -> Optional[str]:
        if _IS_WINDOWS:
            return msvcrt.getwch() if msvcrt.kbhit() else None
        # Raw bytes from the descriptor; a buffered text read would hide
        # the rest of a paste or an escape sequence from select().
        while self._pending():
            byte = os.read(self.stream.fileno(), 1)
            if not byte:
                return None
            ch = self._decoder.decode(byte)
            if ch:
                return ch
        return None

    def _pending(self, timeout: float = 0.0) -> bool:
        if _IS_WINDOWS:
            return msvcrt.kbhit()
        r, _, _ = select.select([self.stream.fileno()], [], [], timeout)
        return bool(r)

    def _skip_sequence(self) -> None:
        """Consume the rest of an arrow or function key sequence after ESC."""
        intro = self._getch()
        if intro == 'O':
            self._getch()
        elif intro == '[':
            # CSI parameters run until a final byte in '@'..'~'
            while True:
                ch = self._getch()
                if ch is None or '@' <= ch <= '~':
                    break
