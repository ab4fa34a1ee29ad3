"""Exception hierarchy for SerialComm.

Read timeouts have no exception type: a poll that finds no data gets
``None`` back from the channel.
"""

from __future__ import annotations


class SerialCommError(Exception):
    """Base class for all fatal SerialComm errors."""


class ConfigurationError(SerialCommError):
    """Invalid port name, baud rate, framing value or preset."""


class PortError(SerialCommError):
    """Serial port could not be opened (busy, missing, no permission)."""


class ChannelError(SerialCommError):
    """Read or write failure on an already-open channel."""


class LoggingError(SerialCommError):
    """Transcript file could not be created at startup."""
