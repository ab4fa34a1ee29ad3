"""Resolved run configuration and serial presets."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Dict, Optional

from ..serial.config import SerialConfig
from .errors import ConfigurationError


# Framing bundles selectable with --preset. Values override explicit flags.
PRESETS: Dict[str, Dict[str, object]] = {
    'Default': {'baud_rate': 9600, 'data_bits': 8, 'parity': 'none', 'stop_bits': 'one'},
    'Sniffer': {'baud_rate': 115200, 'data_bits': 8, 'parity': 'none', 'stop_bits': 'one'},
    'EnergyMeter': {'baud_rate': 9600, 'data_bits': 7, 'parity': 'even', 'stop_bits': 'one'},
    'RFEgypt': {'baud_rate': 19200, 'data_bits': 8, 'parity': 'none', 'stop_bits': 'one'},
}


@dataclass
class SerialSettings:
    """Serial framing plus the options that select and drive a run mode."""
    # Port
    port: str = SerialConfig.DEFAULT_PORT
    baud_rate: int = SerialConfig.DEFAULT_BAUD
    parity: str = SerialConfig.DEFAULT_PARITY
    data_bits: int = SerialConfig.DEFAULT_DATA_BITS
    stop_bits: str = SerialConfig.DEFAULT_STOP_BITS
    read_timeout: float = SerialConfig.DEFAULT_TIMEOUT

    # Modes
    command_file: Optional[str] = None
    delay_ms: int = SerialConfig.DEFAULT_DELAY_MS
    interactive: bool = False
    recursive: bool = False
    preset: Optional[str] = None

    # Transcript
    log_file: Optional[str] = None
    max_log_size_mb: float = SerialConfig.DEFAULT_MAX_LOG_MB

    # Console
    title: Optional[str] = None
    color: bool = True

    @classmethod
    def from_args(cls, args) -> 'SerialSettings':
        """Build settings from a parsed argparse namespace.

        Attributes missing from ``args`` or set to ``None`` keep their
        defaults. The preset, if any, is applied last.
        """
        instance = cls()
        for f in fields(instance):
            value = getattr(args, f.name, None)
            if value is not None:
                setattr(instance, f.name, value)
        instance.normalize()
        if instance.preset:
            instance.apply_preset(instance.preset)
        return instance

    def normalize(self) -> None:
        """Lower-case enum names and map numeric stop-bit spellings."""
        self.parity = str(self.parity).strip().lower()
        stop = str(self.stop_bits).strip().lower()
        self.stop_bits = SerialConfig.STOP_BITS_ALIASES.get(stop, stop)

    def apply_preset(self, name: str) -> None:
        """Override framing fields with a named preset.

        Raises:
            ConfigurationError: If the preset name is unknown.
        """
        key = resolve_preset_name(name)
        self.preset = key
        for field_name, value in PRESETS[key].items():
            setattr(self, field_name, value)

    def validate(self) -> None:
        """Check every field before anything is opened.

        Raises:
            ConfigurationError: On the first invalid value found.
        """
        if not self.port or not str(self.port).strip():
            raise ConfigurationError("Port name must not be empty")
        if not isinstance(self.baud_rate, int) or self.baud_rate <= 0:
            raise ConfigurationError(f"Invalid baud rate: {self.baud_rate}")
        if self.parity not in SerialConfig.PARITIES:
            raise ConfigurationError(
                f"Invalid parity '{self.parity}' "
                f"(expected one of: {', '.join(SerialConfig.PARITIES)})"
            )
        if self.data_bits not in SerialConfig.DATA_BITS:
            raise ConfigurationError(f"Invalid data bits: {self.data_bits} (expected 5-8)")
        if self.stop_bits not in SerialConfig.STOP_BITS:
            raise ConfigurationError(
                f"Invalid stop bits '{self.stop_bits}' "
                f"(expected one of: {', '.join(SerialConfig.STOP_BITS)})"
            )
        if self.read_timeout <= 0:
            raise ConfigurationError(f"Invalid read timeout: {self.read_timeout}")
        if self.delay_ms < 0:
            raise ConfigurationError(f"Invalid delay: {self.delay_ms} ms")
        if self.max_log_size_mb <= 0:
            raise ConfigurationError(f"Invalid max log size: {self.max_log_size_mb} MB")
        if self.command_file and not os.path.isfile(self.command_file):
            raise ConfigurationError(f"Command file not found: {self.command_file}")

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0

    def framing(self) -> str:
        """Short framing label, e.g. ``9600 7E1``."""
        stop = {'one': '1', 'onepointfive': '1.5', 'two': '2'}.get(self.stop_bits, '?')
        return f"{self.baud_rate} {self.data_bits}{self.parity[:1].upper()}{stop}"

    def summary(self) -> str:
        """One-line configuration summary for the transcript header."""
        parts = [
            f"Port: {self.port}",
            f"Baud: {self.baud_rate}",
            f"Parity: {self.parity.capitalize()}",
            f"DataBits: {self.data_bits}",
            f"StopBits: {self.stop_bits.capitalize()}",
        ]
        if self.preset:
            parts.append(f"Preset: {self.preset}")
        if self.command_file:
            parts.append(f"CommandFile: {self.command_file}")
            parts.append(f"Delay: {self.delay_ms} ms")
        return ", ".join(parts)


def resolve_preset_name(name: str) -> str:
    """Map a case-insensitive preset name to its canonical spelling.

    Raises:
        ConfigurationError: If no preset matches.
    """
    for key in PRESETS:
        if key.lower() == str(name).strip().lower():
            return key
    raise ConfigurationError(
        f"Unknown preset '{name}' (expected one of: {', '.join(PRESETS)})"
    )
