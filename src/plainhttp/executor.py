"""Executor - sends an HttpRequest through the transport and wraps the result.

The pipeline: pick a pooled client (direct or proxied), build the httpx
request with headers and serialized payload, link the caller's cancellation
with the request timeout, dispatch, and materialize the response. In testing
mode the pipeline short-circuits to the next canned response.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Awaitable, Optional, TypeVar

import httpx

from plainhttp.cancellation import CancellationToken, CancellationTokenSource
from plainhttp.content import content_type_header, serialize
from plainhttp.errors import HttpRequestError, HttpRequestTimeoutError, OperationCancelledError
from plainhttp.materialize import materialize
from plainhttp.response import HttpResponse
from plainhttp.testing import ExecutionContext, current_context

if TYPE_CHECKING:
    from plainhttp.request import HttpRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def execute(
    request: "HttpRequest",
    cancellation: Optional[CancellationToken] = None,
    context: Optional[ExecutionContext] = None,
) -> HttpResponse:
    """Execute request and return the wrapped response.

    Args:
        request: The request description
        cancellation: Optional caller cancellation token
        context: Explicit execution context; defaults to the one bound with set_testing_mode

    Raises:
        HttpRequestTimeoutError: If the request timeout elapsed before completion
        HttpRequestError: For any other failure, including caller cancellation
    """
    context = context or current_context()
    if context.testing_mode is not None:
        return await _mocked_response(request, context)

    client = _select_client(request)

    linked = CancellationTokenSource.create_linked(cancellation)
    timeout = request.timeout_seconds
    if timeout:
        linked.cancel_after(timeout)

    try:
        message = build_message(client, request)
        request.message = message
        logger.debug(f"Sending {request}")
        return await _run_cancellable(_send(client, request, message), linked.token)
    except Exception as e:
        caller_cancelled = cancellation is not None and cancellation.is_cancellation_requested
        if isinstance(e, (OperationCancelledError, httpx.TimeoutException)) and not caller_cancelled:
            logger.warning(f"Request {request} timed out")
            raise HttpRequestTimeoutError(request, e) from e
        raise HttpRequestError(request, e) from e
    finally:
        linked.close()


def _select_client(request: "HttpRequest") -> httpx.AsyncClient:
    if request.proxy is not None:
        return request.client_factory.get_proxied_client(request.proxy)
    return request.client_factory.get_client(request.uri)


def build_message(client: httpx.AsyncClient, request: "HttpRequest") -> httpx.Request:
    """Build the transport request: method, URI, headers as given, serialized payload.

    Client defaults (User-Agent, timeout) are merged into the request; the
    client itself is left untouched.
    """
    headers = [(name, value) for name, value in request.headers.items()]
    content = None
    if request.payload is not None:
        content, media_type = serialize(request.payload, request.content_type)
        if media_type is not None:
            # The payload media type replaces any Content-Type set by the caller
            headers = [(name, value) for name, value in headers if name.lower() != "content-type"]
            headers.append(("Content-Type", content_type_header(media_type)))
    return client.build_request(request.method.value, request.uri, headers=headers, content=content)


async def _send(client: httpx.AsyncClient, request: "HttpRequest", message: httpx.Request) -> HttpResponse:
    response = await client.send(message, stream=True)
    return await materialize(request, response)


async def _run_cancellable(awaitable: Awaitable[T], token: CancellationToken) -> T:
    """Await awaitable unless token is cancelled first, in which case it is aborted."""
    work = asyncio.ensure_future(awaitable)
    cancelled = asyncio.ensure_future(token.wait())
    try:
        await asyncio.wait({work, cancelled}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        cancelled.cancel()
        if not work.done():
            work.cancel()
            await asyncio.gather(work, return_exceptions=True)
    if work.cancelled():
        raise OperationCancelledError("The operation was cancelled")
    return work.result()


async def _mocked_response(request: "HttpRequest", context: ExecutionContext) -> HttpResponse:
    response = context.testing_mode.dequeue()
    logger.debug(f"Serving canned response {response.status_code} for {request}")
    try:
        return await materialize(request, response)
    except Exception as e:
        raise HttpRequestError(request, e) from e
