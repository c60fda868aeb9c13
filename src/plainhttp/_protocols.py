"""Protocol definitions for pluggable client providers."""

from typing import Protocol, Union, runtime_checkable

import httpx


@runtime_checkable
class ClientProvider(Protocol):
    """Protocol for objects handing out reusable transport clients.

    Identical keys should return the same (pooled) client.
    """

    def get_client(self, uri: Union[str, httpx.URL]) -> httpx.AsyncClient:
        raise NotImplementedError

    def get_proxied_client(self, proxy: Union[str, httpx.URL]) -> httpx.AsyncClient:
        raise NotImplementedError
