"""
Content-Encoding handling for handler responses.

Handlers that compress their output (gzip, deflate, br) can be checked
against the decoded body; ``encode_body`` builds such responses in tests and
examples.
"""

from __future__ import annotations

import gzip
import zlib

import brotli

SUPPORTED_ENCODINGS = ("gzip", "deflate", "br")


def decode_body(body: bytes, content_encoding: str) -> bytes:
    """
    Decode a response body according to its Content-Encoding header.

    Multiple encodings ("gzip, br") are undone in reverse order. Unknown
    encodings are left as-is; a body that fails to decode raises, since a
    handler that lies about its encoding is a bug the test should see.
    """
    if not content_encoding or not body:
        return body

    encodings = [e.strip() for e in content_encoding.lower().split(",") if e.strip()]
    result = body
    for enc in reversed(encodings):
        result = _decode_single(result, enc)
    return result


def _decode_single(body: bytes, encoding: str) -> bytes:
    if encoding == "gzip":
        return gzip.decompress(body)
    if encoding == "deflate":
        try:
            # Raw deflate first (no header)
            return zlib.decompress(body, -zlib.MAX_WBITS)
        except zlib.error:
            return zlib.decompress(body)
    if encoding == "br":
        return brotli.decompress(body)
    # identity, or something we do not know
    return body


def encode_body(body: bytes, encoding: str) -> bytes:
    """Compress ``body`` with a single encoding from SUPPORTED_ENCODINGS."""
    encoding = encoding.lower().strip()
    if encoding == "gzip":
        return gzip.compress(body)
    if encoding == "deflate":
        return zlib.compress(body)
    if encoding == "br":
        return brotli.compress(body)
    raise ValueError(f"Unsupported content encoding: {encoding}")
