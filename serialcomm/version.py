"""SerialComm version information."""

__version__ = "1.2.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

APP_NAME = "SerialComm"
DESCRIPTION = "Terminal serial port communication utility"
LICENSE = "Apache-2.0"
