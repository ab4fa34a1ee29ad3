"""Interactive manual entry mode."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from ..core.escapes import encode_command
from ..export.transcript import INFO, SENT
from ..serial.config import SerialConfig
from ..ui.keyboard import KEY_BACKSPACE, KEY_ENTER, KEY_ESCAPE, KeyReader
from .base import PollLoop

logger = logging.getLogger(__name__)


class InputState(Enum):
    PROMPTING = "prompting"  # empty line, waiting for input
    ECHOING = "echoing"      # characters accumulated


class InteractiveSession(PollLoop):
    """Line editor multiplexed with the serial receive path.

    Each tick drains pending input from the device, redraws the prompt if
    output has scrolled it away, then handles at most one key. Escape ends
    the session; Enter sends the accumulated line.
    """

    interval = SerialConfig.INTERACTIVE_TICK
    name = "interactive"

    def __init__(self, *args, keyboard: KeyReader, **kwargs):
        super().__init__(*args, **kwargs)
        self.keyboard = keyboard
        self.line = ""
        self._prompt_shown = False

    @property
    def state(self) -> InputState:
        return InputState.ECHOING if self.line else InputState.PROMPTING

    def on_start(self) -> None:
        self.line = ""
        self._prompt_shown = False
        self.console.info("Interactive mode: type a command and press Enter, Esc to leave")
        self.transcript.append(INFO, "Interactive session started")

    def poll(self) -> None:
        if self.channel.bytes_waiting() and self.drain():
            self._prompt_shown = False

        if not self._prompt_shown:
            self.console.prompt(self.line)
            self._prompt_shown = True

        self.handle_key(self.keyboard.read_key())

    def handle_key(self, key: Optional[str]) -> None:
        if key is None:
            return
        if key == KEY_ESCAPE:
            self.console.newline()
            self.console.info("Interactive session ended")
            self.transcript.append(INFO, "Interactive session ended")
            self.stop()
        elif key == KEY_ENTER:
            if self.line:
                self.console.newline()
                self.send(self.line)
                self.line = ""
                self._prompt_shown = False
        elif key == KEY_BACKSPACE:
            if self.line:
                self.line = self.line[:-1]
                self.console.erase()
        else:
            self.line += key
            self.console.echo(key)

    def send(self, text: str) -> None:
        payload = encode_command(text)
        self.channel.write(payload)
        self.transcript.append(SENT, text, payload)
