from __future__ import annotations

from .compression import decode_body
from .models import Response


def extract_body_to_bytes(response: Response, decompress: bool = False) -> bytes:
    """
    Drain a response body into bytes. A response without a body yields b"".

    With ``decompress=True`` the body is decoded according to the response's
    Content-Encoding header.
    """
    body = b"".join(response.iter_bytes())
    if decompress:
        body = decode_body(body, response.headers.get("content-encoding", ""))
    return body


def extract_body_to_string(response: Response, decompress: bool = False) -> str:
    """Drain a response body and decode it as UTF-8. Invalid UTF-8 raises."""
    return extract_body_to_bytes(response, decompress=decompress).decode("utf-8")
