"""Low-level serial port handler."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Optional

import serial

from ..core.errors import ChannelError, ConfigurationError, PortError
from ..core.escapes import escape_controls
from .config import SerialConfig

if TYPE_CHECKING:
    from ..core.settings import SerialSettings

logger = logging.getLogger(__name__)


class SerialPortHandler:
    """Owns the single serial connection used by every run mode."""

    def __init__(self, settings: 'SerialSettings'):
        self.settings = settings
        self._ser: Optional[serial.SerialBase] = None

    @property
    def port(self) -> str:
        return self.settings.port

    @property
    def is_open(self) -> bool:
        """Check if port is open."""
        return self._ser is not None and self._ser.is_open

    def open(self) -> None:
        """Open the port with the configured framing.

        Raises:
            ConfigurationError: If the driver rejects a framing value.
            PortError: If the device is missing, busy or not accessible.
        """
        s = self.settings
        try:
            # serial_for_url also accepts pyserial URLs such as loop://
            self._ser = serial.serial_for_url(
                s.port,
                baudrate=s.baud_rate,
                bytesize=SerialConfig.DATA_BITS[s.data_bits],
                parity=SerialConfig.PARITIES[s.parity],
                stopbits=SerialConfig.STOP_BITS[s.stop_bits],
                timeout=s.read_timeout,
                write_timeout=SerialConfig.WRITE_TIMEOUT,
            )
        except (KeyError, ValueError) as e:
            raise ConfigurationError(f"Unsupported port settings for {s.port}: {e}") from e
        except (serial.SerialException, OSError) as e:
            raise PortError(f"Cannot open {s.port}: {e}") from e

        time.sleep(0.1)  # Let port stabilize
        self._ser.reset_input_buffer()
        logger.info(f"Opened {s.port} at {s.framing()}")

    def write(self, data: bytes) -> None:
        """Write a payload and wait until it has left the output buffer."""
        ser = self._require_open()
        try:
            ser.write(data)
            ser.flush()
        except (serial.SerialException, OSError) as e:
            raise ChannelError(f"Write to {self.port} failed: {e}") from e
        logger.debug(f"TX {len(data)} bytes: {escape_controls(data)}")

    def bytes_waiting(self) -> int:
        """Number of received bytes ready to read, without blocking."""
        ser = self._require_open()
        try:
            return ser.in_waiting
        except (serial.SerialException, OSError) as e:
            raise ChannelError(f"Status read on {self.port} failed: {e}") from e

    def read_available(self) -> Optional[bytes]:
        """Read whatever has arrived, waiting at most one read timeout.

        Returns:
            The received bytes, or ``None`` if the timeout elapsed with
            nothing received.

        Raises:
            ChannelError: On any failure other than a timeout.
        """
        ser = self._require_open()
        try:
            waiting = ser.in_waiting
            data = ser.read(min(waiting, SerialConfig.READ_CHUNK) or 1)
            if data and ser.in_waiting:
                data += ser.read(min(ser.in_waiting, SerialConfig.READ_CHUNK))
        except serial.SerialTimeoutException:
            return None
        except (serial.SerialException, OSError) as e:
            raise ChannelError(f"Read from {self.port} failed: {e}") from e

        if not data:
            return None
        logger.debug(f"RX {len(data)} bytes")
        return bytes(data)

    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._ser:
            try:
                if self._ser.is_open:
                    self._ser.close()
                    logger.info(f"Closed {self.port}")
            except (serial.SerialException, OSError) as e:
                logger.warning(f"Error closing {self.port}: {e}")
            self._ser = None

    def _require_open(self) -> serial.SerialBase:
        if not self.is_open:
            raise ChannelError(f"Port {self.port} is not open")
        return self._ser
