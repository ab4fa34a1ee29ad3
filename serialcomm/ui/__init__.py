"""Terminal UI package for SerialComm."""

from .console import ConsoleRenderer
from .keyboard import KeyReader, KEY_ESCAPE, KEY_ENTER, KEY_BACKSPACE
from .theme import ConsoleTheme, DEFAULT_THEME, PLAIN_THEME

__all__ = [
    "ConsoleRenderer",
    "KeyReader",
    "KEY_ESCAPE",
    "KEY_ENTER",
    "KEY_BACKSPACE",
    "ConsoleTheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
]
