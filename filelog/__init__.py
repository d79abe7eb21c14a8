"""filelog — thread-safe append-only log file writer."""

from filelog.config import Config, load_config, load_yaml_config
from filelog.errors import (
    LogWriterError,
    ShortWriteError,
    WriterClosedError,
    WriterNotOpenError,
    WriterStateError,
)
from filelog.severity import Severity, check_encoding, format_line
from filelog.writer import LogWriter, WriterState

__all__ = [
    "Config",
    "LogWriter",
    "LogWriterError",
    "Severity",
    "ShortWriteError",
    "WriterClosedError",
    "WriterNotOpenError",
    "WriterState",
    "WriterStateError",
    "check_encoding",
    "format_line",
    "load_config",
    "load_yaml_config",
]
