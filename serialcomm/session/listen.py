"""Passive listen mode."""

from __future__ import annotations

from ..export.transcript import INFO
from ..serial.config import SerialConfig
from .base import PollLoop


class ListenLoop(PollLoop):
    """Shows everything the device sends until interrupted."""

    interval = SerialConfig.LISTEN_TICK
    name = "listen"

    def on_start(self) -> None:
        self.console.info(f"Listening on {self.channel.port} (Ctrl+C to quit)")
        self.transcript.append(INFO, "Listening")

    def poll(self) -> None:
        self.drain()
