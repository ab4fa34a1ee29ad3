"""Session transcript file with size-based rotation.

Entries are buffered in memory and written in batches. Before every batch
the file size is checked against the limit; an oversized file is renamed to
``<name>.<YYYYMMDD_HHMMSS>.bak`` and a new file is started under the
original name. The limit is therefore soft: a file can grow past it by at
most one batch.

Only :meth:`TranscriptLogger.initialize` raises. After startup every disk
error is reported through :mod:`logging` and the pending batch is dropped.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import List, Optional, Union

from ..core.control_chars import format_plain
from ..core.errors import LoggingError
from ..version import APP_NAME

logger = logging.getLogger(__name__)

SENT = 'SENT'
RECV = 'RECV'
INFO = 'INFO'
ERROR = 'ERROR'

DIRECTIONS = (SENT, RECV, INFO, ERROR)


def _now(fmt: str = '%Y-%m-%d %H:%M:%S') -> str:
    return datetime.now().strftime(fmt)


class TranscriptLogger:
    """Buffered, rotating transcript writer.

    A logger created without a path is disabled: every method returns
    immediately, so callers never need to check.
    """

    DEFAULT_FLUSH_THRESHOLD = 20
    BYTES_PER_MB = 1024 * 1024

    def __init__(self, path: Optional[str], max_size_mb: float = 10.0,
                 flush_threshold: int = DEFAULT_FLUSH_THRESHOLD):
        self.path = path
        self.max_bytes = int(max_size_mb * self.BYTES_PER_MB)
        self.flush_threshold = max(1, flush_threshold)
        self._buffer: List[str] = []
        self._open = False

    @property
    def enabled(self) -> bool:
        return bool(self.path)

    @property
    def pending(self) -> int:
        """Number of buffered entries not yet on disk."""
        return len(self._buffer)

    def initialize(self, summary: str) -> None:
        """Start a fresh transcript, replacing any previous content.

        Args:
            summary: Configuration line written under the header.

        Raises:
            LoggingError: If the directory or file cannot be created.
        """
        if not self.enabled:
            return
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                f.write(self._banner('Started'))
                f.write(summary + '\n')
        except OSError as e:
            raise LoggingError(f"Cannot create log file {self.path}: {e}") from e
        self._buffer = []
        self._open = True
        logger.info(f"Transcript started: {self.path}")

    def append(self, direction: str, message: str,
               raw_data: Optional[Union[bytes, str]] = None) -> None:
        """Buffer one entry, flushing when the batch is full.

        Args:
            direction: One of ``SENT``, ``RECV``, ``INFO``, ``ERROR``.
            message: Short human-readable text.
            raw_data: Optional payload, written on the following line with
                control characters shown as mnemonics.

        Raises:
            ValueError: If ``direction`` is not one of the tags above.
        """
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown transcript direction: {direction!r}")
        if not self._open:
            return
        ts = _now('%Y-%m-%d %H:%M:%S.%f')[:-3]
        entry = f"[{ts}] [{direction}] {message}\n"
        if raw_data:
            entry += format_plain(raw_data) + '\n'
        self._buffer.append(entry)
        if len(self._buffer) >= self.flush_threshold:
            self.flush()

    def flush(self) -> None:
        """Write all buffered entries in one append and clear the buffer."""
        if not self._open or not self._buffer:
            return
        self.check_rotation()
        try:
            with open(self.path, 'a', encoding='utf-8') as f:
                f.write(''.join(self._buffer))
        except OSError as e:
            logger.warning(f"Transcript write failed, dropping {len(self._buffer)} entries: {e}")
        self._buffer = []

    def check_rotation(self) -> None:
        """Rotate the file if it has grown past the size limit."""
        if not self._open:
            return
        try:
            if os.path.getsize(self.path) <= self.max_bytes:
                return
        except OSError:
            # Missing file: the next append recreates it
            return

        backup = self._backup_name()
        try:
            os.replace(self.path, backup)
            with open(self.path, 'w', encoding='utf-8') as f:
                f.write(self._banner('Continued'))
        except OSError as e:
            logger.warning(f"Transcript rotation failed: {e}")
            return
        logger.info(f"Transcript rotated to {backup}")

    def close(self) -> None:
        """Flush and write the end marker. Safe to call more than once."""
        if not self._open:
            return
        self.flush()
        try:
            with open(self.path, 'a', encoding='utf-8') as f:
                f.write(self._banner('Ended'))
        except OSError as e:
            logger.warning(f"Could not write transcript end marker: {e}")
        self._open = False

    def _backup_name(self) -> str:
        base = f"{self.path}.{_now('%Y%m%d_%H%M%S')}"
        candidate = f"{base}.bak"
        counter = 1
        while os.path.exists(candidate):
            candidate = f"{base}-{counter}.bak"
            counter += 1
        return candidate

    @staticmethod
    def _banner(event: str) -> str:
        return f"===== {APP_NAME} Log - {event} at {_now()} =====\n"
