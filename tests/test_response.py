"""Tests for handlertest.response module."""

import pytest

from handlertest.compression import encode_body
from handlertest.models import Response
from handlertest.request import get
from handlertest.response import extract_body_to_bytes, extract_body_to_string

from tests.handlers import HelloWorldHandler


class TestExtractBody:
    """Tests for the body extraction helpers."""

    def test_extract_body_to_string(self):
        """Test a handler response drains to a string."""
        response = get("http://localhost:3000", HelloWorldHandler())
        assert extract_body_to_string(response) == "Hello, world!"

    def test_extract_body_to_bytes(self):
        """Test a handler response drains to bytes."""
        response = get("http://localhost:3000", HelloWorldHandler())
        assert extract_body_to_bytes(response) == b"Hello, world!"

    def test_no_body(self):
        """Test a response without body gives empty bytes."""
        assert extract_body_to_bytes(Response(204)) == b""
        assert extract_body_to_string(Response(204)) == ""

    def test_streamed_body(self):
        """Test chunked bodies are drained."""
        response = Response(200, (chunk for chunk in [b"a", b"b", b"c"]))
        assert extract_body_to_bytes(response) == b"abc"

    def test_invalid_utf8_raises(self):
        """Test string extraction does not paper over bad UTF-8."""
        with pytest.raises(UnicodeDecodeError):
            extract_body_to_string(Response(200, b"\xff\xfe"))

    def test_no_decompress_by_default(self):
        """Test compressed bodies are returned raw unless asked."""
        raw = encode_body(b"hello", "gzip")
        response = Response(200, raw, headers=[("Content-Encoding", "gzip")])
        assert extract_body_to_bytes(response) == raw

    @pytest.mark.parametrize("encoding", ["gzip", "deflate", "br"])
    def test_decompress(self, encoding):
        """Test decompress=True honours Content-Encoding."""
        response = Response(
            200,
            encode_body("héllo".encode("utf-8"), encoding),
            headers=[("Content-Encoding", encoding)],
        )
        assert extract_body_to_string(response, decompress=True) == "héllo"

    def test_decompress_without_header(self):
        """Test decompress=True is a no-op without Content-Encoding."""
        assert extract_body_to_bytes(Response(200, b"plain"), decompress=True) == b"plain"
