"""Default User-Agent header for pooled clients."""

import sys
from typing import Optional

import httpx

from plainhttp import __version__

_PY_VERSION = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"


def get_user_agent(client_name: Optional[str] = None) -> str:
    """User-Agent naming this package, the interpreter and httpx.

    A non-empty client_name is appended, e.g.
    "plainhttp/0.1.0 python/3.12.1 python-httpx/0.27.0 billing-service".
    """
    agent = f"plainhttp/{__version__} python/{_PY_VERSION} python-httpx/{httpx.__version__}"
    return f"{agent} {client_name}" if client_name else agent
