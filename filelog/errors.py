"""Errors raised by the log writer itself.

OS failures (open, write, fsync, close) are not wrapped: the original
``OSError`` reaches the caller so ``errno`` stays inspectable.
"""


class LogWriterError(Exception):
    """Base class for conditions detected by the writer rather than the OS."""


class ShortWriteError(LogWriterError):
    """Raised when the OS accepts fewer bytes than the formatted record."""

    def __init__(self, written: int, expected: int):
        self.written = written
        self.expected = expected
        super().__init__(
            "The number of bytes written to the file does not match the "
            f"message length (wrote {written} of {expected} bytes)"
        )


class WriterStateError(LogWriterError):
    """Raised when an operation is not valid in the writer's current state."""


class WriterNotOpenError(WriterStateError):
    """Raised when the writer is used before open()."""


class WriterClosedError(WriterStateError):
    """Raised when the writer is used after close()."""
