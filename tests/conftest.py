"""Shared fakes for the SerialComm tests."""

from __future__ import annotations

import io
from collections import deque

import pytest

from serialcomm.core.errors import ChannelError
from serialcomm.export.transcript import TranscriptLogger
from serialcomm.ui.console import ConsoleRenderer


class FakeChannel:
    """Stands in for SerialPortHandler.

    ``responses`` is consumed one item per read; ``None`` items model a
    read timeout.
    """

    def __init__(self, responses=(), port="FAKE0"):
        self.port = port
        self.responses = deque(responses)
        self.writes = []
        self.fail_reads = False
        self.closed = False

    def write(self, data: bytes) -> None:
        self.writes.append(data)

    def bytes_waiting(self) -> int:
        if self.responses and self.responses[0]:
            return len(self.responses[0])
        return 0

    def read_available(self):
        if self.fail_reads:
            raise ChannelError("device unplugged")
        if not self.responses:
            return None
        return self.responses.popleft()

    def close(self) -> None:
        self.closed = True


class FakeKeyboard:
    """Returns scripted keys, then None forever."""

    def __init__(self, keys=()):
        self.keys = deque(keys)
        self.entered = False
        self.exited = False

    def __enter__(self):
        self.entered = True
        return self

    def __exit__(self, exc_type, exc, tb):
        self.exited = True

    def read_key(self):
        return self.keys.popleft() if self.keys else None


class RecordingSleep:
    """Records sleep durations and can run a hook on each call."""

    def __init__(self, hook=None):
        self.calls = []
        self.hook = hook

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        if self.hook:
            self.hook(seconds)


class StopLoop(Exception):
    """Raised from a sleep hook to break out of an endless loop."""


@pytest.fixture
def channel():
    return FakeChannel()


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def console(output):
    return ConsoleRenderer(stream=output, color=False)


@pytest.fixture
def transcript(tmp_path):
    logger = TranscriptLogger(str(tmp_path / "session.log"), max_size_mb=10)
    logger.initialize("Port: FAKE0")
    yield logger
    logger.close()


def read_log(logger: TranscriptLogger) -> str:
    logger.flush()
    with open(logger.path, encoding="utf-8") as f:
        return f.read()
