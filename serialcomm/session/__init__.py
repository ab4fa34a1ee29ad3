"""Run modes for SerialComm: command file, interactive and listen."""

from .base import PollLoop
from .command_file import CommandFilePlayer, filter_commands, load_commands
from .interactive import InteractiveSession, InputState
from .listen import ListenLoop
from .dispatcher import ModeDispatcher

__all__ = [
    "PollLoop",
    "CommandFilePlayer",
    "filter_commands",
    "load_commands",
    "InteractiveSession",
    "InputState",
    "ListenLoop",
    "ModeDispatcher",
]
