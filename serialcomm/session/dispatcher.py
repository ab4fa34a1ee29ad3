"""Run mode selection."""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from ..core.settings import SerialSettings
from ..export.transcript import TranscriptLogger
from ..serial.handler import SerialPortHandler
from ..ui.console import ConsoleRenderer
from ..ui.keyboard import KeyReader
from .command_file import CommandFilePlayer, load_commands
from .interactive import InteractiveSession
from .listen import ListenLoop

logger = logging.getLogger(__name__)


class ModeDispatcher:
    """Runs the modes selected by the settings, in order.

    Commands already read from the command file can be passed in as
    ``commands``; otherwise the file is read when playback starts.

    A command file (if any) plays first, then the interactive session (if
    requested), and everything ends in listen mode. A recursive command
    file never returns, so nothing after it runs.
    """

    def __init__(self, settings: SerialSettings, channel: SerialPortHandler,
                 console: ConsoleRenderer, transcript: TranscriptLogger,
                 sleep: Callable[[float], None] = time.sleep,
                 keyboard_factory: Callable[[], KeyReader] = KeyReader,
                 commands: Optional[List[str]] = None):
        self.settings = settings
        self.channel = channel
        self.console = console
        self.transcript = transcript
        self._sleep = sleep
        self._keyboard_factory = keyboard_factory
        self._commands = commands

    def plan(self) -> List[str]:
        """Names of the modes that :meth:`run` will enter, in order."""
        modes = []
        if self.settings.command_file:
            modes.append("command file")
            if self.settings.recursive:
                return modes
        if self.settings.interactive:
            modes.append("interactive")
        modes.append("listen")
        return modes

    def run(self) -> None:
        s = self.settings
        logger.info(f"Mode plan: {' -> '.join(self.plan())}")
        if s.command_file:
            player = CommandFilePlayer(
                *self._loop_args(),
                commands=self._load_commands(),
                delay=s.delay_seconds,
                recursive=s.recursive,
                sleep=self._sleep,
            )
            player.run()

        if s.interactive:
            with self._keyboard_factory() as keyboard:
                InteractiveSession(*self._loop_args(), keyboard=keyboard, sleep=self._sleep).run()

        ListenLoop(*self._loop_args(), sleep=self._sleep).run()

    def _load_commands(self) -> List[str]:
        if self._commands is None:
            self._commands = load_commands(self.settings.command_file)
        return self._commands

    def _loop_args(self):
        return self.channel, self.console, self.transcript
