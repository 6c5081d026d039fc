from handlertest.body import BytesBody, FormBody, RequestBody, StringBody
from handlertest.errors import (
    BodyFinalizedError,
    HandlerError,
    HandlerTestError,
    InvalidPathError,
    InvalidURLError,
    MultipartError,
    ProjectBuildError,
    ProtocolError,
    UploadError,
)
from handlertest.headers import Headers
from handlertest.models import Handler, Request, Response
from handlertest.multipart import (
    FileEntry,
    MultipartBody,
    MultipartEntry,
    MultipartPayload,
    TextEntry,
    generate_boundary,
)
from handlertest.project import ProjectBuilder
from handlertest.request import (
    HandlerClient,
    delete,
    get,
    head,
    options,
    patch,
    post,
    post_multipart,
    put,
    request,
)
from handlertest.response import extract_body_to_bytes, extract_body_to_string
from handlertest.stream import MockStream, SizedReader

__version__ = "0.3.0"

__all__ = [
    "BodyFinalizedError",
    "BytesBody",
    "FileEntry",
    "FormBody",
    "Handler",
    "HandlerClient",
    "HandlerError",
    "HandlerTestError",
    "Headers",
    "InvalidPathError",
    "InvalidURLError",
    "MockStream",
    "MultipartBody",
    "MultipartEntry",
    "MultipartError",
    "MultipartPayload",
    "ProjectBuildError",
    "ProjectBuilder",
    "ProtocolError",
    "Request",
    "RequestBody",
    "Response",
    "SizedReader",
    "StringBody",
    "TextEntry",
    "UploadError",
    "delete",
    "extract_body_to_bytes",
    "extract_body_to_string",
    "generate_boundary",
    "get",
    "head",
    "options",
    "patch",
    "post",
    "post_multipart",
    "put",
    "request",
]
