"""Thread-safe append-only log writer with an fsync after every record."""

import logging
import os
import threading
from enum import Enum

from filelog.config import Config
from filelog.errors import (
    ShortWriteError,
    WriterClosedError,
    WriterNotOpenError,
    WriterStateError,
)
from filelog.severity import Severity, check_encoding, format_line

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o755
_OPEN_FLAGS = os.O_WRONLY | os.O_APPEND | os.O_CREAT


class WriterState(Enum):
    UNOPENED = "unopened"
    OPEN = "open"
    CLOSED = "closed"


class LogWriter:
    """Single-destination log file shared by any number of threads.

    Lifecycle is ``open -> write* -> close``. Every write and the close hold
    the same lock, so records land in the file whole and in lock order, and a
    write that returns has been fsynced.
    """

    def __init__(self, mode: int = DEFAULT_FILE_MODE, encoding: str = "utf-8"):
        self._mode = mode
        self._encoding = check_encoding(encoding)
        self._lock = threading.Lock()
        self._fd = None
        self._path = None
        self._state = WriterState.UNOPENED

    @classmethod
    def from_config(cls, config: Config) -> "LogWriter":
        """Build a writer from *config* and open ``config.log_path``."""
        if config.create_dirs:
            parent = os.path.dirname(config.log_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
        writer = cls(mode=config.file_mode, encoding=config.encoding)
        writer.open(config.log_path)
        return writer

    @property
    def state(self) -> WriterState:
        return self._state

    @property
    def path(self) -> str | None:
        return self._path

    @property
    def encoding(self) -> str:
        return self._encoding

    def open(self, path) -> None:
        """Open *path* for appending, creating it if absent.

        OS errors propagate unchanged and leave the writer unopened.
        """
        path = os.fspath(path)
        if not path:
            raise ValueError("log path must not be empty")

        with self._lock:
            self._check_unopened()
            self._fd = os.open(path, _OPEN_FLAGS, self._mode)
            self._path = path
            self._state = WriterState.OPEN
        logger.info("Opened log file %s", path)

    def write(self, message: str | bytes, severity: Severity = Severity.STATUS) -> None:
        """Append one record and fsync it before returning.

        Raises the OS error from the write or the fsync as-is, or
        ShortWriteError when the OS took only part of the record. The writer
        stays usable after any of these. State is checked before the message
        is encoded.
        """
        with self._lock:
            self._check_open()
            line = format_line(message, severity, self._encoding)
            try:
                count = os.write(self._fd, line)
            except OSError as e:
                logger.error("Write to %s failed: %s", self._path, e)
                raise
            if count < len(line):
                logger.error(
                    "Short write to %s: %d of %d bytes", self._path, count, len(line)
                )
                raise ShortWriteError(count, len(line))

            try:
                os.fsync(self._fd)
            except OSError as e:
                logger.error("Sync of %s failed: %s", self._path, e)
                raise

    def close(self) -> None:
        """Close the file. The writer is closed afterwards even if this raises."""
        with self._lock:
            self._check_open()
            fd, self._fd = self._fd, None
            self._state = WriterState.CLOSED
            try:
                os.close(fd)
            except OSError as e:
                logger.warning("Close of %s reported an error: %s", self._path, e)
                raise
        logger.info("Closed log file %s", self._path)

    def _check_unopened(self):
        if self._state is WriterState.OPEN:
            raise WriterStateError(f"log file {self._path} is already open")
        if self._state is WriterState.CLOSED:
            raise WriterClosedError("log writer is closed")

    def _check_open(self):
        if self._state is WriterState.UNOPENED:
            raise WriterNotOpenError("log writer has not been opened")
        if self._state is WriterState.CLOSED:
            raise WriterClosedError("log writer is closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._state is WriterState.OPEN:
            self.close()
