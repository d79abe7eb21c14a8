"""Severity levels and the line formatter."""

import codecs
from enum import IntEnum


class Severity(IntEnum):
    STATUS = 0
    WARNING = 1
    ERROR = 2


_PREFIXES = {
    Severity.STATUS: b"",
    Severity.WARNING: b"WARNING: ",
    Severity.ERROR: b"ERROR: ",
}
_ASCII_SAMPLE = "WARNING: ERROR: \n"


def check_encoding(encoding: str) -> str:
    """Return *encoding* if it writes the prefixes and newline as plain ASCII.

    Prefixes are stored as ASCII bytes, so a codec that encodes them
    differently (utf-16, utf-8-sig and other BOM or wide encodings) would mix
    two encodings in one record. Raises ValueError for such codecs and for
    unknown names.
    """
    try:
        codecs.lookup(encoding)
        encoded = _ASCII_SAMPLE.encode(encoding)
    except (LookupError, TypeError):
        raise ValueError(f"unknown text encoding {encoding!r}") from None
    if encoded != _ASCII_SAMPLE.encode("ascii"):
        raise ValueError(f"encoding {encoding!r} is not ASCII-compatible")
    return encoding


def format_line(message: str | bytes, severity: Severity = Severity.STATUS,
                encoding: str = "utf-8") -> bytes:
    """Build the bytes for one log record: severity prefix, message, newline.

    ``str`` messages are encoded with *encoding*, which must pass
    check_encoding; ``bytes`` pass through untouched. The message is not
    sanitised, so embedded newlines or control characters are written as given.
    """
    if isinstance(message, str):
        message = message.encode(encoding)
    return _PREFIXES[Severity(severity)] + message + b"\n"
