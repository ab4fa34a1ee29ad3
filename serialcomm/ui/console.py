"""Terminal rendering of serial traffic and status messages."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Optional, TextIO, Union

import colorama

from ..core.control_chars import LINE_FEED_TOKEN, tokenize
from ..version import APP_NAME
from .theme import DEFAULT_THEME, PLAIN_THEME, ConsoleTheme

if TYPE_CHECKING:
    from ..core.settings import SerialSettings

PROMPT = "> "


class ConsoleRenderer:
    """Writes colored output to a terminal stream.

    Printable characters and control mnemonics are drawn in different
    colors, and a line break follows every ``[LF]`` so the device's own
    line structure stays visible.
    """

    def __init__(self, stream: Optional[TextIO] = None, color: bool = True):
        self.stream = stream or sys.stdout
        is_tty = hasattr(self.stream, 'isatty') and self.stream.isatty()
        if color and is_tty:
            colorama.just_fix_windows_console()
        self.theme: ConsoleTheme = DEFAULT_THEME if color and is_tty else PLAIN_THEME
        self._is_tty = is_tty
        # True while the cursor is not at the start of a line
        self._mid_line = False
        self._prompt_active = False

    def banner(self, settings: 'SerialSettings', version: str) -> None:
        t = self.theme
        self._write(f"{t.banner}{settings.title or APP_NAME} v{version}{t.reset}\n")
        self._write(f"{t.info}{settings.summary()}{t.reset}\n")
        if settings.log_file:
            self._write(f"{t.info}Logging to {settings.log_file}{t.reset}\n")

    def info(self, message: str) -> None:
        self._line(f"{self.theme.info}{message}{self.theme.reset}")

    def error(self, message: str) -> None:
        self._line(f"{self.theme.error}Error: {message}{self.theme.reset}")

    def sent(self, text: str) -> None:
        """Show an outbound command as it was typed."""
        self._line(f"{self.theme.sent_text}>> {text}{self.theme.reset}")

    def received(self, data: Union[bytes, str]) -> None:
        """Show inbound data with control characters as mnemonics."""
        if not data:
            return
        if self._prompt_active:
            self._write("\n")
            self._prompt_active = False
        self._write(self.render(data))
        self.stream.flush()

    def render(self, data: Union[bytes, str]) -> str:
        """Console rendering of ``data`` including color codes."""
        t = self.theme
        out = []
        for text, control in tokenize(data):
            if control:
                out.append(f"{t.control_token}{text}{t.reset}")
                if text == LINE_FEED_TOKEN:
                    out.append("\n")
            else:
                out.append(f"{t.received_text}{text}{t.reset}")
        return "".join(out)

    def prompt(self, line: str = "") -> None:
        """Draw the input prompt followed by any partially typed line."""
        if self._mid_line:
            self._write("\n")
        self._write(f"{self.theme.prompt}{PROMPT}{self.theme.reset}{line}")
        self._prompt_active = True
        self.stream.flush()

    def echo(self, char: str) -> None:
        self._write(char)
        self.stream.flush()

    def erase(self) -> None:
        """Remove the last echoed character."""
        self._write("\b \b")
        self.stream.flush()

    def newline(self) -> None:
        self._prompt_active = False
        self._write("\n")
        self.stream.flush()

    def set_title(self, title: str) -> None:
        """Set the terminal window title, where the terminal supports it."""
        if sys.platform == 'win32':
            import ctypes
            ctypes.windll.kernel32.SetConsoleTitleW(title)
        elif self._is_tty:
            self.stream.write(f"\x1b]0;{title}\x07")
            self.stream.flush()

    def _line(self, text: str) -> None:
        if self._mid_line:
            self._write("\n")
        self._prompt_active = False
        self._write(text + "\n")
        self.stream.flush()

    def _write(self, text: str) -> None:
        if not text:
            return
        self.stream.write(text)
        self._mid_line = not text.endswith("\n")
