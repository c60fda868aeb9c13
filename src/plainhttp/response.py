"""Uniform result of an executed request."""

import json
from typing import TYPE_CHECKING, Any, Optional

import httpx

if TYPE_CHECKING:
    from plainhttp.request import HttpRequest


class HttpResponse:
    """Wraps the HTTP response information.

    ``body`` holds the decoded text of the response, or None when the body
    was streamed to ``request.download_file_name``.
    """

    def __init__(self, request: "HttpRequest", message: httpx.Response, body: Optional[str] = None):
        self.request = request
        self.message = message
        self.body = body

    @property
    def status_code(self) -> int:
        return self.message.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.message.headers

    @property
    def succeeded(self) -> bool:
        return 200 <= self.message.status_code <= 299

    def get_single_header(self, name: str) -> Optional[str]:
        """Return the first value of the named header, or None if absent."""
        values = self.message.headers.get_list(name)
        return values[0] if values else None

    def json(self) -> Any:
        """Parse the buffered body as JSON."""
        if self.body is None:
            raise ValueError(f"Response of {self.request} has no buffered body")
        return json.loads(self.body)

    def __repr__(self) -> str:
        return f"<HttpResponse [{self.status_code}] {self.request}>"
