"""Tests for severity levels and line formatting."""

import pytest

from filelog.severity import Severity, check_encoding, format_line


class TestSeverity:
    def test_values(self):
        assert Severity.STATUS == 0
        assert Severity.WARNING == 1
        assert Severity.ERROR == 2

    def test_length(self):
        assert len(Severity) == 3


class TestFormatLine:
    def test_status(self):
        assert format_line("hello", Severity.STATUS) == b"hello\n"

    def test_warning(self):
        assert format_line("oops", Severity.WARNING) == b"WARNING: oops\n"

    def test_error(self):
        assert format_line("bad", Severity.ERROR) == b"ERROR: bad\n"

    def test_default_is_status(self):
        assert format_line("x") == b"x\n"

    def test_int_severity_accepted(self):
        assert format_line("warn", 1) == b"WARNING: warn\n"

    def test_unknown_severity_rejected(self):
        with pytest.raises(ValueError):
            format_line("what", 7)

    def test_empty_message(self):
        assert format_line("", Severity.ERROR) == b"ERROR: \n"

    def test_exactly_one_newline_appended(self):
        assert format_line("line\n") == b"line\n\n"

    def test_bytes_pass_through(self):
        assert format_line(b"\x00\xff", Severity.WARNING) == b"WARNING: \x00\xff\n"

    def test_encoding(self):
        assert format_line("é", encoding="utf-8") == b"\xc3\xa9\n"
        assert format_line("é", encoding="latin-1") == b"\xe9\n"

    def test_unencodable_raises(self):
        with pytest.raises(UnicodeEncodeError):
            format_line("✓", encoding="ascii")


class TestCheckEncoding:
    @pytest.mark.parametrize("encoding", ["utf-8", "UTF8", "ascii", "latin-1", "cp1252"])
    def test_ascii_compatible_accepted(self, encoding):
        assert check_encoding(encoding) == encoding

    @pytest.mark.parametrize("encoding", ["utf-16", "utf-16-be", "utf-32", "utf-8-sig", "cp500"])
    def test_incompatible_rejected(self, encoding):
        with pytest.raises(ValueError, match="not ASCII-compatible"):
            check_encoding(encoding)

    @pytest.mark.parametrize("encoding", ["no-such-codec", "rot13", 42])
    def test_unknown_rejected(self, encoding):
        with pytest.raises(ValueError, match="unknown text encoding"):
            check_encoding(encoding)
