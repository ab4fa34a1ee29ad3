"""SerialComm application package."""

from .version import __version__, __version_info__, APP_NAME
from .core import SerialSettings, PRESETS, SerialCommError
from .serial import SerialPortHandler, SerialConfig
from .export import TranscriptLogger
from .session import ModeDispatcher

__all__ = [
    "__version__",
    "__version_info__",
    "APP_NAME",
    "SerialSettings",
    "PRESETS",
    "SerialCommError",
    "SerialPortHandler",
    "SerialConfig",
    "TranscriptLogger",
    "ModeDispatcher",
]
