import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Union

from plainhttp import DEFAULT_SETTINGS_FILE_PATH

ENV_TIMEOUT = "PLAINHTTP_TIMEOUT"
ENV_CLIENT_NAME = "PLAINHTTP_CLIENT_NAME"


@dataclass
class ClientSettings:
    """Settings applied to every pooled transport client.

    ``timeout`` is the transport's own ceiling per request, in seconds. Request
    level timeouts are layered on top of it by the executor.
    """

    timeout: Optional[float] = 100.0
    connect_retries: int = 0
    follow_redirects: bool = True
    max_connections: Optional[int] = 100
    max_keepalive_connections: Optional[int] = 20
    client_name: Optional[str] = None
    verify: bool = True


def load_client_settings(path: Union[str, os.PathLike] = DEFAULT_SETTINGS_FILE_PATH) -> ClientSettings:
    """Load client settings from a JSON file. Returns defaults if the file doesn't exist.

    Values from the environment (PLAINHTTP_TIMEOUT, PLAINHTTP_CLIENT_NAME) take
    precedence over the file.
    """
    expanded = Path(path).expanduser()
    data = json.loads(expanded.read_text()) if expanded.exists() else {}

    known = {f.name for f in fields(ClientSettings)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown settings {sorted(unknown)} in {expanded}")

    timeout = os.environ.get(ENV_TIMEOUT)
    if timeout:
        try:
            data["timeout"] = float(timeout)
        except ValueError as e:
            raise ValueError(f"Invalid {ENV_TIMEOUT}: {timeout!r}") from e
    client_name = os.environ.get(ENV_CLIENT_NAME)
    if client_name:
        data["client_name"] = client_name

    return ClientSettings(**data)
