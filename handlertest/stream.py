from __future__ import annotations

import io
from collections.abc import Iterator

from .errors import ProtocolError

DEFAULT_REMOTE_ADDR: tuple[str, int] = ("127.0.0.1", 3000)


class MockStream:
    """
    In-memory duplex byte stream standing in for a client socket.

    Reads come from the request bytes given at construction, writes are
    collected separately so a handler that talks back over the stream can be
    inspected with ``written()``.
    """

    def __init__(
        self,
        data: bytes = b"",
        peer_addr: tuple[str, int] = DEFAULT_REMOTE_ADDR,
    ) -> None:
        self._inbound = io.BytesIO(data)
        self._outbound = bytearray()
        self._peer_addr = peer_addr
        self.closed = False

    def peer_addr(self) -> tuple[str, int]:
        return self._peer_addr

    def read(self, n: int = -1) -> bytes:
        return self._inbound.read(n)

    def readline(self, limit: int = -1) -> bytes:
        return self._inbound.readline(limit)

    def write(self, data: bytes) -> int:
        self._outbound.extend(data)
        return len(data)

    def flush(self) -> None:
        pass

    def written(self) -> bytes:
        return bytes(self._outbound)

    # No socket underneath, so timeouts have nothing to act on.
    def set_read_timeout(self, timeout: float | None) -> None:
        pass

    def set_write_timeout(self, timeout: float | None) -> None:
        pass

    def close(self) -> None:
        self.closed = True

    def __repr__(self) -> str:
        return f"<MockStream peer={self._peer_addr[0]}:{self._peer_addr[1]}>"


class SizedReader:
    """
    Request body reader bounded by Content-Length.

    Never reads past ``length`` bytes of the underlying stream, the same way a
    server hands a handler exactly the declared body.
    """

    def __init__(self, stream: MockStream, length: int) -> None:
        self._stream = stream
        self._remaining = length
        self.length = length

    @property
    def remaining(self) -> int:
        return self._remaining

    def read(self, n: int = -1) -> bytes:
        if self._remaining <= 0:
            return b""
        if n is None or n < 0 or n > self._remaining:
            n = self._remaining
        data = self._stream.read(n)
        self._remaining -= len(data)
        return data

    def read_exact(self, n: int) -> bytes:
        remaining = n
        chunks: list[bytes] = []
        while remaining > 0:
            chunk = self.read(remaining)
            if not chunk:
                raise ProtocolError("Unexpected EOF while reading body")
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    def readline(self) -> bytes:
        if self._remaining <= 0:
            return b""
        line = self._stream.readline(self._remaining)
        self._remaining -= len(line)
        return line

    def __iter__(self) -> Iterator[bytes]:
        while True:
            line = self.readline()
            if not line:
                break
            yield line

    def __repr__(self) -> str:
        return f"<SizedReader {self._remaining}/{self.length} bytes left>"
