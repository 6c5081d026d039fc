"""Tests for handlertest.stream module."""

import pytest

from handlertest.errors import ProtocolError
from handlertest.stream import DEFAULT_REMOTE_ADDR, MockStream, SizedReader


class TestMockStream:
    """Tests for MockStream."""

    def test_read(self):
        """Test reads come from the initial data."""
        stream = MockStream(b"hello world")
        assert stream.read(5) == b"hello"
        assert stream.read() == b" world"
        assert stream.read() == b""

    def test_readline(self):
        """Test readline splits on LF."""
        stream = MockStream(b"a\r\nb\r\n")
        assert stream.readline() == b"a\r\n"
        assert stream.readline() == b"b\r\n"

    def test_write_is_separate_from_read(self):
        """Test writes do not show up in reads."""
        stream = MockStream(b"in")
        assert stream.write(b"out") == 3
        stream.flush()
        assert stream.read() == b"in"
        assert stream.written() == b"out"

    def test_peer_addr(self):
        """Test default and custom peer addresses."""
        assert MockStream().peer_addr() == DEFAULT_REMOTE_ADDR == ("127.0.0.1", 3000)
        assert MockStream(peer_addr=("10.0.0.1", 1)).peer_addr() == ("10.0.0.1", 1)

    def test_timeouts_are_noops(self):
        """Test timeout setters accept values."""
        stream = MockStream()
        stream.set_read_timeout(1.0)
        stream.set_write_timeout(None)

    def test_close(self):
        """Test close marks the stream closed."""
        stream = MockStream()
        stream.close()
        assert stream.closed


class TestSizedReader:
    """Tests for SizedReader."""

    def test_read_stops_at_length(self):
        """Test nothing past the declared length is returned."""
        reader = SizedReader(MockStream(b"hello world"), 5)
        assert reader.read() == b"hello"
        assert reader.read() == b""
        assert reader.remaining == 0

    def test_read_in_chunks(self):
        """Test partial reads track the remainder."""
        reader = SizedReader(MockStream(b"abcdef"), 6)
        assert reader.read(4) == b"abcd"
        assert reader.remaining == 2
        assert reader.read(4) == b"ef"

    def test_read_none_reads_all(self):
        """Test read(None) behaves like read()."""
        assert SizedReader(MockStream(b"abc"), 3).read(None) == b"abc"

    def test_read_exact(self):
        """Test read_exact returns exactly n bytes."""
        reader = SizedReader(MockStream(b"abcdef"), 6)
        assert reader.read_exact(3) == b"abc"

    def test_read_exact_eof_raises(self):
        """Test a short stream raises ProtocolError."""
        reader = SizedReader(MockStream(b"abc"), 10)
        with pytest.raises(ProtocolError, match="Unexpected EOF"):
            reader.read_exact(10)

    def test_readline_bounded(self):
        """Test readline does not cross the length limit."""
        reader = SizedReader(MockStream(b"line one\nline two\n"), 4)
        assert reader.readline() == b"line"
        assert reader.readline() == b""

    def test_iteration(self):
        """Test iterating yields lines."""
        reader = SizedReader(MockStream(b"a\nb\nc"), 5)
        assert list(reader) == [b"a\n", b"b\n", b"c"]

    def test_zero_length(self):
        """Test an empty body reads as empty."""
        reader = SizedReader(MockStream(b"ignored"), 0)
        assert reader.read() == b""
        assert reader.readline() == b""
