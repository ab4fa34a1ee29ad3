"""Scripted playback of a command file."""

from __future__ import annotations

import logging
from typing import Iterable, List

from ..core.errors import ConfigurationError
from ..core.escapes import encode_command
from ..export.transcript import INFO, SENT
from .base import PollLoop

logger = logging.getLogger(__name__)

COMMENT_PREFIX = '#'


def filter_commands(lines: Iterable[str]) -> List[str]:
    """Drop blank lines and ``#`` comments, keep the rest verbatim.

    Trailing newlines are removed; other whitespace inside a command is
    part of the payload and left alone.
    """
    commands = []
    for line in lines:
        line = line.rstrip('\r\n')
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue
        commands.append(line)
    return commands


def load_commands(path: str) -> List[str]:
    """Read a UTF-8 command file and return its commands in order.

    Raises:
        ConfigurationError: If the file cannot be read or is not UTF-8.
    """
    try:
        with open(path, 'r', encoding='utf-8-sig') as f:
            return filter_commands(f)
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"Command file {path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read command file {path}: {e}") from e


class CommandFilePlayer(PollLoop):
    """Sends each command, waits the delay, then shows any response.

    In recursive mode the file is replayed forever; otherwise it is played
    once and :meth:`run` returns.
    """

    interval = 0.0
    name = "command file"

    def __init__(self, *args, commands: List[str], delay: float,
                 recursive: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        self.commands = list(commands)
        self.delay = delay
        self.recursive = recursive
        self.cycles = 0
        self._index = 0

    def on_start(self) -> None:
        self._index = 0
        self.cycles = 0
        if not self.commands:
            self.console.info("Command file contains no commands")
            self.transcript.append(INFO, "Command file contains no commands")
            self.stop()

    def poll(self) -> None:
        if self._index >= len(self.commands):
            self.cycles += 1
            if not self.recursive:
                self.console.info(f"Command file finished ({len(self.commands)} commands)")
                self.transcript.append(INFO, "Command file finished")
                self.stop()
                return
            self._index = 0
            self.console.info(f"Restarting command file (cycle {self.cycles + 1})")
            self.transcript.append(INFO, f"Restarting command file, cycle {self.cycles + 1}")

        command = self.commands[self._index]
        self._index += 1
        self.send(command)
        self._sleep(self.delay)
        self.drain()

    def send(self, command: str) -> None:
        """Expand, transmit, then show and log the command as written."""
        payload = encode_command(command)
        self.channel.write(payload)
        self.console.sent(command)
        self.transcript.append(SENT, command, payload)
        logger.debug(f"Command {self._index}/{len(self.commands)} sent")
