"""Core configuration, formatting and error types for SerialComm."""

from .errors import (
    SerialCommError,
    ConfigurationError,
    PortError,
    ChannelError,
    LoggingError,
)
from .escapes import expand_escapes, encode_command, escape_controls
from .control_chars import CONTROL_TABLE, tokenize, format_plain
from .settings import SerialSettings, PRESETS

__all__ = [
    'SerialCommError',
    'ConfigurationError',
    'PortError',
    'ChannelError',
    'LoggingError',
    'expand_escapes',
    'encode_command',
    'escape_controls',
    'CONTROL_TABLE',
    'tokenize',
    'format_plain',
    'SerialSettings',
    'PRESETS',
]
