"""Cooperative cancellation tokens for request execution.

A ``CancellationTokenSource`` owns the cancelled state; the
``CancellationToken`` handed to callees is a read-only view on it. Sources
can be linked to other tokens so that any of them cancels the new source,
and a timer can be armed to cancel the source after a delay. This keeps
timeouts and caller cancellation as two producers feeding one consumer.

Example:
    source = CancellationTokenSource()
    task = asyncio.create_task(request.send(source.token))
    ...
    source.cancel()
"""

import asyncio
from datetime import timedelta
from typing import Callable, List, Optional, Union

Delay = Union[float, timedelta]


def _seconds(delay: Delay) -> float:
    if isinstance(delay, timedelta):
        return delay.total_seconds()
    return float(delay)


class CancellationToken:
    """Read-only view on a CancellationTokenSource."""

    def __init__(self, source: "CancellationTokenSource"):
        self._source = source

    @property
    def is_cancellation_requested(self) -> bool:
        return self._source.is_cancellation_requested

    async def wait(self) -> None:
        """Suspend until cancellation is requested."""
        await self._source._event.wait()

    def register(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Invoke callback on cancellation (immediately if already cancelled).

        Returns a function that removes the registration.
        """
        return self._source._register(callback)


class CancellationTokenSource:
    def __init__(self):
        self._event = asyncio.Event()
        self._callbacks: List[Callable[[], None]] = []
        self._timer: Optional[asyncio.TimerHandle] = None
        self._unlink: List[Callable[[], None]] = []

    @classmethod
    def create_linked(cls, *tokens: Optional[CancellationToken]) -> "CancellationTokenSource":
        """Create a source that is cancelled when any of the given tokens is."""
        source = cls()
        for token in tokens:
            if token is not None:
                source._unlink.append(token.register(source.cancel))
        return source

    @property
    def token(self) -> CancellationToken:
        return CancellationToken(self)

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        if self._event.is_set():
            return
        self._event.set()
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def cancel_after(self, delay: Delay) -> None:
        """Arm a timer that cancels this source after delay (seconds or timedelta).

        Must be called from a running event loop. Re-arming replaces the timer.
        """
        loop = asyncio.get_running_loop()
        if self._timer is not None:
            self._timer.cancel()
        self._timer = loop.call_later(_seconds(delay), self.cancel)

    def close(self) -> None:
        """Disarm the timer and detach from linked tokens."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        for unlink in self._unlink:
            unlink()
        self._unlink = []

    def _register(self, callback: Callable[[], None]) -> Callable[[], None]:
        if self._event.is_set():
            callback()
            return lambda: None
        self._callbacks.append(callback)

        def unregister() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unregister

    def __enter__(self) -> "CancellationTokenSource":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
