"""Serial port configuration constants for SerialComm."""

from __future__ import annotations

import sys

import serial


class SerialConfig:
    """Configuration constants for serial port connection."""
    DEFAULT_PORT = 'COM1' if sys.platform == 'win32' else '/dev/ttyUSB0'
    DEFAULT_BAUD = 9600
    DEFAULT_DATA_BITS = 8
    DEFAULT_PARITY = 'none'
    DEFAULT_STOP_BITS = 'one'
    DEFAULT_TIMEOUT = 0.5  # seconds, bounds every read
    WRITE_TIMEOUT = 2.0
    READ_CHUNK = 4096  # max bytes taken per read

    DEFAULT_DELAY_MS = 1000
    DEFAULT_MAX_LOG_MB = 10.0

    INTERACTIVE_TICK = 0.1
    LISTEN_TICK = 1.0

    PARITIES = {
        'none': serial.PARITY_NONE,
        'even': serial.PARITY_EVEN,
        'odd': serial.PARITY_ODD,
        'mark': serial.PARITY_MARK,
        'space': serial.PARITY_SPACE,
    }

    STOP_BITS = {
        'one': serial.STOPBITS_ONE,
        'onepointfive': serial.STOPBITS_ONE_POINT_FIVE,
        'two': serial.STOPBITS_TWO,
    }

    # Numeric spellings accepted on the command line
    STOP_BITS_ALIASES = {
        '1': 'one',
        '1.5': 'onepointfive',
        '2': 'two',
    }

    DATA_BITS = {
        5: serial.FIVEBITS,
        6: serial.SIXBITS,
        7: serial.SEVENBITS,
        8: serial.EIGHTBITS,
    }
