"""
multipart/form-data request bodies for handler tests.

Build a body with ``write``/``upload`` and hand it to ``post_multipart``::

    body = MultipartBody()
    body.write("title", "my song")
    body.upload("track", "/tmp/song.mp3")
    response = post_multipart("http://localhost:3000/songs", handler, body)

``finalize()`` closes the body and returns an immutable ``MultipartPayload``;
the builder refuses any further use afterwards.
"""

from __future__ import annotations

import abc
import logging
import os
import random
import string
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import BodyFinalizedError, InvalidPathError, UploadError

if TYPE_CHECKING:
    from .headers import Headers

logger = logging.getLogger(__name__)

BOUNDARY_LENGTH = 32
BOUNDARY_ALPHABET = string.ascii_letters + string.digits
CRLF = b"\r\n"

_default_rng = random.Random()


def generate_boundary(
    rng: random.Random | None = None, length: int = BOUNDARY_LENGTH
) -> str:
    """Random boundary token. Not cryptographic; only has to avoid collisions."""
    rng = rng or _default_rng
    return "".join(rng.choice(BOUNDARY_ALPHABET) for _ in range(length))


class MultipartEntry(abc.ABC):
    """
    One part of a multipart body. Subclasses render their own
    Content-Disposition header and payload.
    """

    key: str

    @abc.abstractmethod
    def headers(self) -> str: ...

    @abc.abstractmethod
    def value(self) -> bytes: ...

    def write_headers(self, body: MultipartBody, headers: str | None = None) -> None:
        headers = self.headers() if headers is None else headers
        body.parts.append(body.full_boundary().encode("ascii"))
        body.parts.append(headers.encode("utf-8"))

    def write_value(self, body: MultipartBody, value: bytes | None = None) -> None:
        body.parts.append(self.value() if value is None else value)


@dataclass(frozen=True)
class TextEntry(MultipartEntry):
    key: str
    text: str

    def headers(self) -> str:
        return f'Content-Disposition: form-data; name="{self.key}"\r\n'

    def value(self) -> bytes:
        return self.text.encode("utf-8")


@dataclass(frozen=True)
class FileEntry(MultipartEntry):
    key: str
    path: str | os.PathLike[str]

    @property
    def filename(self) -> str:
        name = os.path.basename(os.path.normpath(os.fspath(self.path)))
        if name in ("", ".", ".."):
            raise InvalidPathError(f"Upload path has no filename: {self.path!r}")
        return name

    def headers(self) -> str:
        return (
            f'Content-Disposition: form-data; name="{self.key}"; '
            f'filename="{self.filename}"\r\n'
        )

    def value(self) -> bytes:
        try:
            with open(self.path, "rb") as f:
                data = f.read()
        except OSError as exc:
            raise UploadError(
                f"Could not read upload {os.fspath(self.path)!r}: {exc}"
            ) from exc
        logger.debug("read %d bytes for upload %s", len(data), self.path)
        return data


@dataclass(frozen=True)
class MultipartPayload:
    """Finalized multipart body: wire bytes plus the boundary they use."""

    boundary: str
    content: bytes

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    def render(self) -> bytes:
        return self.content

    def apply_headers(self, headers: Headers) -> None:
        headers.set("Content-Type", self.content_type)

    def __len__(self) -> int:
        return len(self.content)


class MultipartBody:
    """
    Accumulates multipart entries in call order.

    Every entry adds three segments to ``parts``: the ``--boundary`` marker,
    its header line and its value. ``finalize`` appends the closing marker and
    joins the segments with CRLF. Header lines end in their own CRLF, so the
    join leaves the blank line between headers and value.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.boundary = generate_boundary(rng)
        self.parts: list[bytes] = []
        self._payload: MultipartPayload | None = None

    @property
    def finalized(self) -> bool:
        return self._payload is not None

    def write(self, key: str, value: str) -> None:
        """Add a text field."""
        self._check_open()
        entry = TextEntry(key, value)
        entry.write_headers(self)
        entry.write_value(self)

    def upload(self, key: str, path: str | os.PathLike[str]) -> None:
        """
        Add a file field read from ``path``. The file is read before anything
        is appended, so a failed upload leaves the body untouched.
        """
        self._check_open()
        entry = FileEntry(key, path)
        headers = entry.headers()
        data = entry.value()
        entry.write_headers(self, headers)
        entry.write_value(self, data)

    def full_boundary(self) -> str:
        return f"--{self.boundary}"

    def finalize(self) -> MultipartPayload:
        self._check_open()
        self.parts.append(f"{self.full_boundary()}--".encode("ascii"))
        self._payload = MultipartPayload(self.boundary, CRLF.join(self.parts))
        logger.debug(
            "finalized multipart body boundary=%s parts=%d bytes=%d",
            self.boundary,
            len(self.parts),
            len(self._payload),
        )
        return self._payload

    def apply_content_type_header(self, headers: Headers) -> None:
        headers.set("Content-Type", f"multipart/form-data; boundary={self.boundary}")

    # RequestBody
    def render(self) -> bytes:
        return self.finalize().render()

    def apply_headers(self, headers: Headers) -> None:
        self.apply_content_type_header(headers)

    def _check_open(self) -> None:
        if self._payload is not None:
            raise BodyFinalizedError(
                f"Multipart body {self.boundary} was already finalized"
            )

    def __repr__(self) -> str:
        state = "finalized" if self.finalized else f"{len(self.parts) // 3} entries"
        return f"<MultipartBody boundary={self.boundary} {state}>"
