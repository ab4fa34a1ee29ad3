"""Transcript export for SerialComm."""

from .transcript import TranscriptLogger, SENT, RECV, INFO, ERROR

__all__ = [
    "TranscriptLogger",
    "SENT",
    "RECV",
    "INFO",
    "ERROR",
]
