from __future__ import annotations

import urllib.parse
from collections.abc import Mapping
from typing import Protocol, Union, runtime_checkable

from .headers import Headers
from .multipart import MultipartBody, MultipartPayload


@runtime_checkable
class RequestBody(Protocol):
    """
    A request payload. Dispatch calls ``render()`` and then
    ``apply_headers()``, once each per request.
    """

    def render(self) -> bytes: ...

    def apply_headers(self, headers: Headers) -> None: ...


class StringBody:
    """A plain text body. Adds no headers."""

    def __init__(self, text: str = "", encoding: str = "utf-8") -> None:
        self.text = text
        self.encoding = encoding

    def render(self) -> bytes:
        return self.text.encode(self.encoding)

    def apply_headers(self, headers: Headers) -> None:
        pass

    def __repr__(self) -> str:
        return f"<StringBody {self.text!r}>"


class BytesBody:
    """A raw byte body. Adds no headers."""

    def __init__(self, data: bytes = b"") -> None:
        self.data = bytes(data)

    def render(self) -> bytes:
        return self.data

    def apply_headers(self, headers: Headers) -> None:
        pass

    def __repr__(self) -> str:
        return f"<BytesBody {len(self.data)} bytes>"


class FormBody:
    """application/x-www-form-urlencoded body built from a mapping."""

    content_type = "application/x-www-form-urlencoded; charset=utf-8"

    def __init__(self, fields: Mapping[str, str]) -> None:
        self.fields = dict(fields)

    def render(self) -> bytes:
        return urllib.parse.urlencode(self.fields).encode("utf-8")

    def apply_headers(self, headers: Headers) -> None:
        headers.setdefault("Content-Type", self.content_type)

    def __repr__(self) -> str:
        return f"<FormBody {self.fields!r}>"


BodyLike = Union[
    RequestBody, MultipartBody, MultipartPayload, str, bytes, Mapping[str, str], None
]


def coerce_body(body: BodyLike) -> RequestBody:
    if body is None:
        return StringBody("")
    if isinstance(body, str):
        return StringBody(body)
    if isinstance(body, (bytes, bytearray)):
        return BytesBody(body)
    if isinstance(body, Mapping):
        return FormBody(body)
    if hasattr(body, "render") and hasattr(body, "apply_headers"):
        return body
    raise TypeError(f"Unsupported request body type: {type(body).__name__}")
