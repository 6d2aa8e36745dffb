"""Deferred calls for the computer's thinking delay.

The engine only needs ``schedule(delay, callback)`` returning a handle
with ``cancel()``. Two implementations are provided: a manual queue that
the host drains explicitly, and a thin wrapper over an asyncio loop.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback later and let it be cancelled."""

    def schedule(self, delay: float, callback: Callable[[], object]) -> Handle: ...


@dataclass
class ScheduledCall:
    """A queued callback in a :class:`ManualScheduler`.

    Attributes:
        delay: Requested delay in seconds (informational).
        callback: The function to run.
        cancelled: Set by ``cancel()``; cancelled calls never run.
    """

    delay: float
    callback: Callable[[], object]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """Queue of deferred calls run in order when the host asks.

    Nothing runs on its own; ``run_pending`` fires what was queued before
    the call, ``run_all`` keeps going until the queue stays empty. Used by
    tests and the console front end.
    """

    queue: list[ScheduledCall] = field(default_factory=list)

    def schedule(self, delay: float, callback: Callable[[], object]) -> ScheduledCall:
        call = ScheduledCall(delay, callback)
        self.queue.append(call)
        return call

    def pending(self) -> int:
        """Return how many live calls are waiting."""
        return sum(1 for call in self.queue if not call.cancelled)

    def run_pending(self) -> int:
        """Run every call queued so far. Returns how many ran."""
        batch, self.queue = self.queue, []
        ran = 0
        for call in batch:
            if not call.cancelled:
                call.callback()
                ran += 1
        return ran

    def run_all(self, limit: int = 1000) -> int:
        """Drain the queue, including calls scheduled while draining.

        Raises:
            RuntimeError: If more than *limit* rounds are needed.
        """
        total = 0
        for _ in range(limit):
            if not self.queue:
                return total
            total += self.run_pending()
        raise RuntimeError(f"Scheduler still busy after {limit} rounds.")


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop with ``call_later``.

    The loop is bound at construction: either the one passed in or the
    loop running at that moment.

    Raises:
        RuntimeError: If no loop is given and none is running.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop if loop is not None else asyncio.get_running_loop()

    def schedule(
        self, delay: float, callback: Callable[[], object]
    ) -> asyncio.TimerHandle:
        return self._loop.call_later(delay, callback)
