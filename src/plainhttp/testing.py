"""Testing mode: serve canned responses instead of calling the transport.

Install a ``TestingMode`` for the current logical execution context (the
current asyncio task and every task spawned from it), then execute requests
as usual:

    set_testing_mode(TestingMode([httpx.Response(200, text="first"), httpx.Response(404)]))
    first = await HttpRequest("https://example.com").send()
    second = await HttpRequest("https://example.com").send()

Alternatively pass an ``ExecutionContext`` explicitly to ``send()``/``execute()``.
In testing mode no client is selected, no payload is serialized, and proxy
and timeout settings have no effect.
"""

import threading
from collections import deque
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Deque, Iterable, Optional

import httpx


class TestingMode:
    """FIFO queue of canned transport responses."""

    __test__ = False  # not a pytest test class

    def __init__(self, responses: Iterable[httpx.Response] = ()):
        self._queue: Deque[httpx.Response] = deque(responses)
        self._lock = threading.Lock()

    def enqueue(self, response: httpx.Response) -> None:
        with self._lock:
            self._queue.append(response)

    def dequeue(self) -> httpx.Response:
        """Remove and return the oldest queued response.

        Raises:
            IndexError: If the queue is exhausted
        """
        with self._lock:
            if not self._queue:
                raise IndexError("No canned responses left in testing mode")
            return self._queue.popleft()

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)


@dataclass(frozen=True)
class ExecutionContext:
    testing_mode: Optional[TestingMode] = None


_EMPTY_CONTEXT = ExecutionContext()

_current_context: ContextVar[ExecutionContext] = ContextVar("plainhttp_execution_context", default=_EMPTY_CONTEXT)


def set_testing_mode(testing_mode: Optional[TestingMode]) -> None:
    """Bind testing_mode to the current execution context and its descendants.

    Pass None to go back to real transport calls.
    """
    _current_context.set(ExecutionContext(testing_mode=testing_mode))


def current_context() -> ExecutionContext:
    return _current_context.get()
