"""Pooled httpx clients, keyed by destination or by proxy."""

import logging
import os
import threading
from typing import Dict, Optional, Tuple, Union

import httpx

from plainhttp._user_agent import get_user_agent
from plainhttp.config import ClientSettings, load_client_settings

logger = logging.getLogger(__name__)


def _destination_key(uri: Union[str, httpx.URL]) -> Tuple[str, str, Optional[int]]:
    url = httpx.URL(uri)
    return url.scheme, url.host, url.port


class HttpClientFactory:
    """Hands out reusable ``httpx.AsyncClient`` instances.

    Clients for plain requests are pooled by (scheme, host, port) of the
    destination, proxied clients by proxy URL. Identical keys always return
    the same client, so connections are reused across requests. Clients are
    shared between concurrent requests and are never mutated per request.

    Example:
        factory = HttpClientFactory()
        client = factory.get_client("https://example.com/path")
        ...
        await factory.aclose()
    """

    def __init__(self, settings: Optional[ClientSettings] = None):
        self.settings = settings or ClientSettings()
        self._clients: Dict[tuple, httpx.AsyncClient] = {}
        self._proxied_clients: Dict[str, httpx.AsyncClient] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, path: Union[str, os.PathLike] = "") -> "HttpClientFactory":
        """Create a factory from a settings file (see load_client_settings)."""
        settings = load_client_settings(path) if path else load_client_settings()
        return cls(settings)

    def get_client(self, uri: Union[str, httpx.URL]) -> httpx.AsyncClient:
        key = _destination_key(uri)
        with self._lock:
            client = self._clients.get(key)
            if client is None:
                logger.debug(f"Creating client for {key[0]}://{key[1]}:{key[2]}")
                client = self._create_client()
                self._clients[key] = client
        return client

    def get_proxied_client(self, proxy: Union[str, httpx.URL]) -> httpx.AsyncClient:
        key = str(proxy)
        with self._lock:
            client = self._proxied_clients.get(key)
            if client is None:
                logger.debug(f"Creating client for proxy {key}")
                client = self._create_client(proxy=key)
                self._proxied_clients[key] = client
        return client

    def _create_client(self, proxy: Optional[str] = None) -> httpx.AsyncClient:
        settings = self.settings
        limits = httpx.Limits(
            max_connections=settings.max_connections,
            max_keepalive_connections=settings.max_keepalive_connections,
        )
        transport = httpx.AsyncHTTPTransport(
            retries=settings.connect_retries,
            limits=limits,
            verify=settings.verify,
            proxy=proxy,
        )
        return httpx.AsyncClient(
            transport=transport,
            timeout=settings.timeout,
            follow_redirects=settings.follow_redirects,
            headers={"User-Agent": get_user_agent(settings.client_name)},
        )

    async def aclose(self) -> None:
        """Close every pooled client and empty the pools."""
        with self._lock:
            clients = list(self._clients.values()) + list(self._proxied_clients.values())
            self._clients.clear()
            self._proxied_clients.clear()
        for client in clients:
            await client.aclose()
