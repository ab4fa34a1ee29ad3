"""Serial port discovery utilities."""

from __future__ import annotations

import logging
import re
from typing import List, Tuple

from serial.tools import list_ports
from serial.tools.list_ports_common import ListPortInfo

logger = logging.getLogger(__name__)


class PortDiscovery:
    """Lists serial ports available on this machine.

    USB-to-serial adapters are recognized by vendor id or by the usual
    chip names so they can be listed ahead of built-in ports.
    """

    USB_MARKERS = ['USB', 'ACM', 'FTDI', 'CP210', 'CH340', 'PL2303']
    DEVICE_PATTERN = re.compile(r'ttyUSB|ttyACM|ttyAMA|cu\.usb|COM\d+', re.I)

    @classmethod
    def get_ports(cls) -> List[Tuple[str, str]]:
        """Get list of available serial ports.

        Returns:
            List of tuples (device_name, description), USB devices first.
        """
        result = []
        try:
            ports = list_ports.comports()
        except (TypeError, ValueError, OSError) as e:
            # Enumeration is unreliable in sandboxed environments
            logger.warning(f"Error listing serial ports: {e}")
            return result

        for port in sorted(ports, key=lambda p: not cls._is_usb_device(p)):
            try:
                desc = port.description or port.hwid or 'Unknown'
                result.append((port.device, desc))
            except (TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Error processing port {getattr(port, 'device', 'unknown')}: {e}")
                continue
        return result

    @classmethod
    def _is_usb_device(cls, port: ListPortInfo) -> bool:
        if getattr(port, 'vid', None) is not None:
            return True
        text = f"{port.description or ''} {port.hwid or ''}".upper()
        return any(m in text for m in cls.USB_MARKERS) or bool(cls.DEVICE_PATTERN.search(port.device))

    @classmethod
    def describe(cls) -> str:
        """Human-readable list of ports, one per line."""
        ports = cls.get_ports()
        if not ports:
            return "  (no serial ports found)"
        return "\n".join(f"  {device} - {desc}" for device, desc in ports)
