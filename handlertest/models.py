from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from http import HTTPStatus
from typing import Any, Callable, Protocol, Union, runtime_checkable

from .headers import Headers
from .stream import DEFAULT_REMOTE_ADDR, SizedReader
from .utils import parse_url

ResponseBody = Union[bytes, str, Iterable[bytes], None]


class Request:
    """
    Synthetic HTTP request handed to a handler under test.

    ``body`` is a reader over the request payload; call ``read()`` to get it
    all at once. ``extensions`` is free-form storage for middleware and
    routers, empty on construction.
    """

    def __init__(
        self,
        method: str,
        url: str,
        headers: Headers,
        body: SizedReader,
        local_addr: tuple[str, int] = DEFAULT_REMOTE_ADDR,
        remote_addr: tuple[str, int] = DEFAULT_REMOTE_ADDR,
    ) -> None:
        parsed, host, port, path = parse_url(url)
        self.method = method.upper()
        self.url = url
        self.scheme = parsed.scheme
        self.host = host
        self.port = port
        self.path = parsed.path or "/"
        self.query = parsed.query
        self.target = path
        self.headers = headers
        self.body = body
        self.local_addr = local_addr
        self.remote_addr = remote_addr
        self.extensions: dict[Any, Any] = {}

    def read(self) -> bytes:
        return self.body.read()

    def __repr__(self) -> str:
        return f"<Request [{self.method}] {self.url}>"


class Response:
    """
    Response produced by a handler. Preserves header order while exposing
    convenient helpers.

    ``body`` may be bytes, a str (encoded as UTF-8), an iterable of byte
    chunks drained on first access, or None for no body at all.
    """

    def __init__(
        self,
        status_code: int = 200,
        body: ResponseBody = None,
        headers: Iterable[tuple[str, str]] | dict[str, str] | None = None,
        reason: str | None = None,
        http_version: str = "1.1",
    ) -> None:
        self.status_code = status_code
        if reason is None:
            try:
                reason = HTTPStatus(status_code).phrase
            except ValueError:
                reason = ""
        self.reason = reason
        self.http_version = http_version
        if isinstance(headers, dict):
            headers = headers.items()
        self.raw_headers: list[tuple[str, str]] = list(headers or [])
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._body = body

    @property
    def headers(self) -> dict[str, str]:
        # Last-write wins while keeping access case-insensitive for callers.
        out: dict[str, str] = {}
        for name, value in self.raw_headers:
            out[name.lower()] = value
        return out

    @property
    def has_body(self) -> bool:
        return self._body is not None

    def iter_bytes(self) -> Iterator[bytes]:
        if self._body is None:
            return
        if isinstance(self._body, (bytes, bytearray)):
            yield bytes(self._body)
            return
        chunks = []
        for chunk in self._body:
            chunks.append(chunk)
            yield chunk
        # A generator can only be walked once; keep what it produced.
        self._body = b"".join(chunks)

    @property
    def content(self) -> bytes:
        return b"".join(self.iter_bytes())

    @property
    def text(self) -> str:
        encoding = "utf-8"
        ctype = self.headers.get("content-type")
        if ctype and "charset=" in ctype:
            encoding = ctype.split("charset=")[-1].split(";")[0].strip() or encoding
        try:
            return self.content.decode(encoding, errors="replace")
        except LookupError:
            return self.content.decode("utf-8", errors="replace")

    def json(self) -> object:
        return json.loads(self.text)

    def __repr__(self) -> str:
        if isinstance(self._body, (bytes, bytearray)):
            return f"<Response [{self.status_code}] {len(self._body)} bytes>"
        if self._body is None:
            return f"<Response [{self.status_code}] no body>"
        return f"<Response [{self.status_code}] streaming>"


@runtime_checkable
class Handler(Protocol):
    """Anything with a ``handle(request) -> Response`` method."""

    def handle(self, request: Request) -> Response: ...


HandlerLike = Union[Handler, Callable[[Request], Response]]
