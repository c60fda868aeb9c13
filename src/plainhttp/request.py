"""Declarative description of an HTTP request."""

import os
from datetime import timedelta
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

import httpx
from requests.structures import CaseInsensitiveDict

from plainhttp._protocols import ClientProvider
from plainhttp.client_factory import HttpClientFactory
from plainhttp.content import ContentType

if TYPE_CHECKING:
    from plainhttp.cancellation import CancellationToken
    from plainhttp.response import HttpResponse
    from plainhttp.testing import ExecutionContext


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"


class HttpRequest:
    """A wrapper for making HTTP requests simpler.

    Handles payload serialization, proxy, timeout and file download. Build
    the request, then await ``send()``:

        request = HttpRequest("https://example.com/items", method=HttpMethod.POST)
        request.payload = {"name": "apa"}
        request.timeout = timedelta(seconds=5)
        response = await request.send()

    ``client_factory`` is shared by all requests unless overridden on an
    instance; swap it for another ClientProvider to change pooling or to
    inject a test transport.
    """

    client_factory: ClientProvider = HttpClientFactory()

    def __init__(
        self,
        uri: Union[str, httpx.URL, None] = None,
        *,
        method: HttpMethod = HttpMethod.GET,
        headers: Optional[Mapping[str, str]] = None,
        proxy: Union[str, httpx.URL, None] = None,
        payload: Any = None,
        content_type: ContentType = ContentType.JSON,
        timeout: Union[timedelta, float, None] = None,
        download_file_name: Union[str, os.PathLike, None] = None,
        response_encoding: Optional[str] = None,
    ):
        self.uri = uri
        self.method = HttpMethod(method)
        self.headers: CaseInsensitiveDict = CaseInsensitiveDict(headers or {})
        self.proxy = proxy
        self.payload = payload
        self.content_type = ContentType(content_type)
        self.timeout = timeout
        self.download_file_name = download_file_name
        self.response_encoding = response_encoding
        # The transport-level request built by the last send(); None in testing mode
        self.message: Optional[httpx.Request] = None

    @property
    def timeout_seconds(self) -> Optional[float]:
        """The timeout in seconds, or None when no explicit timeout is set."""
        if self.timeout is None:
            return None
        seconds = self.timeout.total_seconds() if isinstance(self.timeout, timedelta) else float(self.timeout)
        return seconds or None

    async def send(
        self,
        cancellation: Optional["CancellationToken"] = None,
        context: Optional["ExecutionContext"] = None,
    ) -> "HttpResponse":
        """Execute the request. See plainhttp.executor.execute."""
        from plainhttp.executor import execute

        return await execute(self, cancellation, context)

    def __str__(self) -> str:
        return f"{self.method.value} {self.uri}"

    def __repr__(self) -> str:
        return f"<HttpRequest {self}>"
