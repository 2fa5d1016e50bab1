"""Deferred-step schedulers that run work after the host's next UI update."""

import asyncio
from collections import deque
from typing import Callable, Protocol

from popover.logging import get_logger

_log = get_logger(__name__)

Task = Callable[[], None]


class Scheduler(Protocol):
    """Single-threaded queue for work that must wait for the next render pass."""

    def next_tick(self, task: Task) -> None:
        """Queue ``task`` to run after the current synchronous batch."""
        ...


class ManualScheduler:
    """FIFO task queue drained explicitly by the host.

    A host render loop calls ``flush()`` once its layout pass is committed.
    Tasks queued while flushing run in the same flush, after the ones
    already waiting.
    """

    def __init__(self) -> None:
        self._queue: deque[Task] = deque()

    def next_tick(self, task: Task) -> None:
        self._queue.append(task)

    @property
    def pending(self) -> int:
        """Number of queued tasks."""
        return len(self._queue)

    def flush(self) -> int:
        """Run queued tasks in order and return how many ran.

        If a task raises, the exception propagates and the tasks behind it
        stay queued for the next flush.
        """
        ran = 0
        while self._queue:
            task = self._queue.popleft()
            task()
            ran += 1
        if ran:
            _log.debug("scheduler_flushed", task_count=ran)
        return ran

    def clear(self) -> None:
        """Drop every queued task without running it."""
        self._queue.clear()


class AsyncioScheduler:
    """Run deferred tasks on an asyncio event loop via ``call_soon``.

    ``call_soon`` callbacks run in FIFO order once the currently running
    callback yields, which matches the "after the current synchronous batch"
    contract. Exceptions raised by a task reach the loop's exception handler.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def next_tick(self, task: Task) -> None:
        self._get_loop().call_soon(task)
