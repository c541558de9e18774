"""
Clock and cancellation primitives for the status poller.

The poller never calls ``asyncio.sleep`` directly; it asks a Clock, so tests
can substitute one that returns immediately and records requested delays.
"""

import asyncio
from typing import Protocol


class Clock(Protocol):
    async def sleep(self, seconds: float) -> None:
        ...


class AsyncioClock:
    """Real clock: suspends the current task without blocking the loop."""

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class CancellationToken:
    """Cooperative cancellation flag shared between a run and whoever started it."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled
