import logging
import os
from logging import NullHandler
from pathlib import Path

logging.getLogger(__name__).addHandler(NullHandler())

__version__ = "0.1.0"

DEFAULT_SETTINGS_FILE_PATH = (
    Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "plainhttp" / "settings.json"
)

from plainhttp.cancellation import CancellationToken, CancellationTokenSource  # noqa: E402
from plainhttp.client_factory import HttpClientFactory  # noqa: E402
from plainhttp.content import ContentType  # noqa: E402
from plainhttp.errors import HttpRequestError, HttpRequestTimeoutError, PlainHttpError  # noqa: E402
from plainhttp.request import HttpMethod, HttpRequest  # noqa: E402
from plainhttp.response import HttpResponse  # noqa: E402
from plainhttp.testing import ExecutionContext, TestingMode, set_testing_mode  # noqa: E402

__all__ = [
    "CancellationToken",
    "CancellationTokenSource",
    "ContentType",
    "ExecutionContext",
    "HttpClientFactory",
    "HttpMethod",
    "HttpRequest",
    "HttpRequestError",
    "HttpRequestTimeoutError",
    "HttpResponse",
    "PlainHttpError",
    "TestingMode",
    "set_testing_mode",
]
