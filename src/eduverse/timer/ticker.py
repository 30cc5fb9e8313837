"""Periodic tick sources driving the timer."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Protocol


class Ticker(Protocol):
    """Source of once-per-second callbacks."""

    def start(self, callback: Callable[[], None]) -> None:
        """Begin invoking ``callback`` periodically."""
        ...

    def cancel(self) -> None:
        """Stop invoking the callback. Safe to call when not started."""
        ...


class AsyncioTicker:
    """Ticker backed by a task on the running event loop."""

    def __init__(self, interval: float = 1.0) -> None:
        self._interval = interval
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, callback: Callable[[], None]) -> None:
        """Schedule ``callback`` every ``interval`` seconds.

        Raises:
            RuntimeError: If called outside a running event loop.
        """
        self.cancel()
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(callback))

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self, callback: Callable[[], None]) -> None:
        while True:
            await asyncio.sleep(self._interval)
            callback()


__all__ = ["Ticker", "AsyncioTicker"]
