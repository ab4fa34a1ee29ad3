"""Serial communication package for SerialComm."""

from .config import SerialConfig
from .handler import SerialPortHandler
from .discovery import PortDiscovery

__all__ = [
    "SerialConfig",
    "SerialPortHandler",
    "PortDiscovery",
]
