from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Response


class HandlerTestError(Exception):
    """Base error for handlertest."""


class InvalidURLError(HandlerTestError, ValueError):
    """Raised when a request URL cannot be used to build a request."""


class MultipartError(HandlerTestError):
    """Base error for the multipart body encoder."""


class UploadError(MultipartError, OSError):
    """Raised when a file queued for upload cannot be read."""


class InvalidPathError(MultipartError, ValueError):
    """Raised when an upload path has no filename component."""


class BodyFinalizedError(MultipartError):
    """Raised when a multipart body is used after it was finalized."""


class ProtocolError(HandlerTestError):
    """Raised when a request body stream ends before its declared length."""


class ProjectBuildError(HandlerTestError):
    """Raised when a fixture project cannot be written to disk."""


class HandlerError(HandlerTestError):
    """
    Raised by handlers to signal failure. May carry the response the
    handler would have produced.
    """

    def __init__(self, message: str = "", response: Response | None = None) -> None:
        super().__init__(message)
        self.response = response
