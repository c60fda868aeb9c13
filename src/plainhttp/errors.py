"""Errors raised while executing a request."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from plainhttp.request import HttpRequest


class PlainHttpError(Exception):
    """Base class for plainhttp errors."""


class OperationCancelledError(PlainHttpError):
    """Raised when a cancellation token fires while a request is in flight."""


class HttpRequestError(PlainHttpError):
    """Raised when a request fails (connection error, cancellation, I/O error, etc.).

    Carries the originating request and the underlying error so callers can
    log or retry with full context.
    """

    def __init__(self, request: "HttpRequest", cause: BaseException, message: Optional[str] = None):
        super().__init__(message or f"Request {request} failed: {cause!r}")
        self.request = request
        self.cause = cause


class HttpRequestTimeoutError(HttpRequestError):
    """Raised when a request did not complete before its timeout elapsed."""

    def __init__(self, request: "HttpRequest", cause: BaseException):
        super().__init__(request, cause, message=f"Request {request} timed out")
