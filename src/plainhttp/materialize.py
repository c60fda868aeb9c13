"""Turning raw transport responses into HttpResponse wrappers."""

import logging
from typing import TYPE_CHECKING

import anyio
import httpx

from plainhttp.response import HttpResponse

if TYPE_CHECKING:
    from plainhttp.request import HttpRequest

logger = logging.getLogger(__name__)


async def materialize(request: "HttpRequest", response: httpx.Response) -> HttpResponse:
    """Read the response body as text, or stream it to the request's download file."""
    try:
        if request.download_file_name is None:
            return await _read_text(request, response)
        return await _download(request, response)
    finally:
        await response.aclose()


async def _read_text(request: "HttpRequest", response: httpx.Response) -> HttpResponse:
    content = await response.aread()
    if request.response_encoding is not None:
        # Undecodable bytes become U+FFFD, as in httpx's own text decoding
        body = content.decode(request.response_encoding, errors="replace")
    else:
        body = response.text
    return HttpResponse(request, response, body)


async def _download(request: "HttpRequest", response: httpx.Response) -> HttpResponse:
    written = 0
    async with await anyio.open_file(request.download_file_name, "wb") as f:
        async for chunk in response.aiter_bytes():
            await f.write(chunk)
            written += len(chunk)
    logger.debug(f"Wrote {written} bytes from {request} to {request.download_file_name}")
    return HttpResponse(request, response)
