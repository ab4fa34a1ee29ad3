"""Console color palette for SerialComm."""

from __future__ import annotations
from dataclasses import dataclass

from colorama import Fore, Style


@dataclass
class ConsoleTheme:
    """ANSI color codes for each kind of console output."""
    # Traffic
    received_text: str
    control_token: str
    sent_text: str
    prompt: str

    # Status
    info: str
    error: str
    banner: str

    reset: str


DEFAULT_THEME = ConsoleTheme(
    received_text=Fore.GREEN,
    control_token=Fore.YELLOW,
    sent_text=Fore.CYAN,
    prompt=Fore.WHITE + Style.BRIGHT,
    info=Fore.MAGENTA,
    error=Fore.RED + Style.BRIGHT,
    banner=Fore.CYAN + Style.BRIGHT,
    reset=Style.RESET_ALL,
)

# Used with --no-color and when output is not a terminal
PLAIN_THEME = ConsoleTheme(
    received_text="",
    control_token="",
    sent_text="",
    prompt="",
    info="",
    error="",
    banner="",
    reset="",
)
