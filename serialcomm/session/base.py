"""Shared polling loop for all run modes.

Every mode is a single-threaded loop around the one open channel: call
:meth:`PollLoop.poll`, sleep for :attr:`PollLoop.interval`, repeat until
:meth:`PollLoop.stop` is called. The sleeps are the only places the
program yields, so sent and received traffic is shown in the order the
loop observes it.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from ..export.transcript import RECV, TranscriptLogger
from ..serial.handler import SerialPortHandler
from ..ui.console import ConsoleRenderer

logger = logging.getLogger(__name__)


class PollLoop:
    """Base class for the command file, interactive and listen modes.

    Subclasses implement :meth:`poll` and set :attr:`interval`.
    """

    interval: float = 1.0
    name = "poll"

    def __init__(self, channel: SerialPortHandler, console: ConsoleRenderer,
                 transcript: TranscriptLogger,
                 sleep: Callable[[float], None] = time.sleep):
        self.channel = channel
        self.console = console
        self.transcript = transcript
        self._sleep = sleep
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def run(self) -> None:
        """Poll until stopped. Channel errors propagate to the caller."""
        logger.info(f"Entering {self.name} mode")
        self._running = True
        self.on_start()
        while self._running:
            self.poll()
            if self._running and self.interval > 0:
                self._sleep(self.interval)
        logger.info(f"Leaving {self.name} mode")

    def stop(self) -> None:
        self._running = False

    def on_start(self) -> None:
        """Hook run once before the first poll."""

    def poll(self) -> None:
        raise NotImplementedError

    def drain(self) -> bool:
        """Show and log whatever the channel has received.

        Returns:
            True if any bytes were received, False on timeout.
        """
        data = self.channel.read_available()
        if not data:
            return False
        self.console.received(data)
        self.transcript.append(RECV, f"{len(data)} bytes", data)
        return True
