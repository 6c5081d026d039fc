from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Union

from .body import BodyLike, coerce_body
from .headers import Headers
from .models import HandlerLike, Request, Response
from .multipart import MultipartBody, MultipartPayload
from .stream import DEFAULT_REMOTE_ADDR, MockStream, SizedReader
from .utils import host_header, parse_url, resolve_url

logger = logging.getLogger(__name__)

USER_AGENT = "handlertest"
DEFAULT_BASE_URL = "http://localhost:3000"

HeadersLike = Union[Headers, Mapping[str, str], Iterable[tuple[str, str]], None]


def _call_handler(handler: HandlerLike, req: Request) -> Response:
    handle = getattr(handler, "handle", None)
    if callable(handle):
        return handle(req)
    if callable(handler):
        return handler(req)
    raise TypeError(f"{handler!r} is neither callable nor has a handle() method")


def request(
    method: str,
    url: str,
    handler: HandlerLike,
    headers: HeadersLike = None,
    body: BodyLike = None,
    user_agent: str = USER_AGENT,
    remote_addr: tuple[str, int] = DEFAULT_REMOTE_ADDR,
) -> Response:
    """
    Build a synthetic request and pass it straight to ``handler``.

    Args:
        method: HTTP method (GET, POST, etc.)
        url: Absolute http(s) URL; anything else raises InvalidURLError
        handler: Object with ``handle(request)`` or a plain callable
        headers: Request headers; the caller's collection is not modified
        body: RequestBody, str, bytes, dict (urlencoded) or None
        user_agent: User-Agent sent unless ``headers`` already has one
        remote_addr: Address reported as both peer and local address

    Returns:
        Whatever the handler returns. Exceptions from the handler propagate.
    """
    parsed, host, port, _ = parse_url(url)
    request_body = coerce_body(body)
    final_headers = Headers(headers)

    payload = request_body.render()
    request_body.apply_headers(final_headers)

    final_headers.setdefault("Host", host_header(host, port, parsed.scheme))
    final_headers.setdefault("User-Agent", user_agent)
    final_headers.set("Content-Length", str(len(payload)))

    stream = MockStream(payload, peer_addr=remote_addr)
    reader = SizedReader(stream, len(payload))
    addr = stream.peer_addr()

    req = Request(
        method,
        url,
        final_headers,
        reader,
        local_addr=addr,
        remote_addr=addr,
    )
    logger.debug("dispatching %s %s (%d body bytes)", req.method, url, len(payload))
    return _call_handler(handler, req)


def get(url: str, handler: HandlerLike, headers: HeadersLike = None) -> Response:
    return request("GET", url, handler, headers=headers)


def post(
    url: str, handler: HandlerLike, body: BodyLike = None, headers: HeadersLike = None
) -> Response:
    return request("POST", url, handler, headers=headers, body=body)


def post_multipart(
    url: str,
    handler: HandlerLike,
    body: MultipartBody | MultipartPayload,
    headers: HeadersLike = None,
) -> Response:
    """POST a multipart/form-data body. A MultipartBody is finalized here."""
    if not isinstance(body, (MultipartBody, MultipartPayload)):
        raise TypeError("post_multipart expects a MultipartBody or MultipartPayload")
    return request("POST", url, handler, headers=headers, body=body)


def put(
    url: str, handler: HandlerLike, body: BodyLike = None, headers: HeadersLike = None
) -> Response:
    return request("PUT", url, handler, headers=headers, body=body)


def patch(
    url: str, handler: HandlerLike, body: BodyLike = None, headers: HeadersLike = None
) -> Response:
    return request("PATCH", url, handler, headers=headers, body=body)


def delete(url: str, handler: HandlerLike, headers: HeadersLike = None) -> Response:
    return request("DELETE", url, handler, headers=headers)


def options(url: str, handler: HandlerLike, headers: HeadersLike = None) -> Response:
    return request("OPTIONS", url, handler, headers=headers)


def head(url: str, handler: HandlerLike, headers: HeadersLike = None) -> Response:
    return request("HEAD", url, handler, headers=headers)


class HandlerClient:
    """
    Binds a handler to a base URL and default headers so tests can issue
    requests with relative paths.

    Args:
        handler: Handler under test
        base_url: Prefix for relative paths (default: http://localhost:3000)
        headers: Headers sent with every request; per-call headers win
        user_agent: User-Agent for requests that do not set one
        remote_addr: Peer address reported to the handler

    Example:
        client = HandlerClient(app)
        response = client.get("/users/1")
        assert response.status_code == 200
    """

    def __init__(
        self,
        handler: HandlerLike,
        base_url: str = DEFAULT_BASE_URL,
        headers: HeadersLike = None,
        user_agent: str = USER_AGENT,
        remote_addr: tuple[str, int] = DEFAULT_REMOTE_ADDR,
    ) -> None:
        parse_url(base_url)
        self.handler = handler
        self.base_url = base_url
        self.headers = Headers(headers)
        self.user_agent = user_agent
        self.remote_addr = remote_addr

    def request(
        self,
        method: str,
        url: str,
        headers: HeadersLike = None,
        body: BodyLike = None,
    ) -> Response:
        merged = self.headers.copy()
        if headers is not None:
            merged.update(headers)
        return request(
            method,
            resolve_url(self.base_url, url),
            self.handler,
            headers=merged,
            body=body,
            user_agent=self.user_agent,
            remote_addr=self.remote_addr,
        )

    def get(self, url: str, headers: HeadersLike = None) -> Response:
        return self.request("GET", url, headers=headers)

    def post(self, url: str, body: BodyLike = None, headers: HeadersLike = None) -> Response:
        return self.request("POST", url, headers=headers, body=body)

    def post_multipart(
        self,
        url: str,
        body: MultipartBody | MultipartPayload,
        headers: HeadersLike = None,
    ) -> Response:
        if not isinstance(body, (MultipartBody, MultipartPayload)):
            raise TypeError("post_multipart expects a MultipartBody or MultipartPayload")
        return self.request("POST", url, headers=headers, body=body)

    def put(self, url: str, body: BodyLike = None, headers: HeadersLike = None) -> Response:
        return self.request("PUT", url, headers=headers, body=body)

    def patch(self, url: str, body: BodyLike = None, headers: HeadersLike = None) -> Response:
        return self.request("PATCH", url, headers=headers, body=body)

    def delete(self, url: str, headers: HeadersLike = None) -> Response:
        return self.request("DELETE", url, headers=headers)

    def options(self, url: str, headers: HeadersLike = None) -> Response:
        return self.request("OPTIONS", url, headers=headers)

    def head(self, url: str, headers: HeadersLike = None) -> Response:
        return self.request("HEAD", url, headers=headers)

    def __repr__(self) -> str:
        return f"<HandlerClient {self.base_url} -> {self.handler!r}>"
