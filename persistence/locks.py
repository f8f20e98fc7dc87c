from __future__ import annotations

import asyncio
import threading
from pathlib import Path
from typing import Any, Awaitable, Callable, TypeVar

T = TypeVar("T")


class SerializationLock:
    """
    FIFO exclusive-execution primitive for async work.

    Each call to run_exclusive() is chained behind the previously submitted
    one, so operations run one at a time in submission order. A failing
    operation releases its slot like a successful one; its exception reaches
    only the caller that submitted it.

    The operation runs in its own task: a caller that is cancelled while
    waiting does not remove the operation from the queue, it still runs to
    completion in its turn. There is no timeout.
    """

    def __init__(self) -> None:
        self._tail: asyncio.Future[Any] | None = None
        self._pending = 0

    @property
    def pending(self) -> int:
        """Operations submitted but not yet finished (including the one in flight)."""
        return self._pending

    def run_exclusive(self, operation: Callable[[], Awaitable[T]]) -> Awaitable[T]:
        # Must be called with a running event loop.
        loop = asyncio.get_running_loop()
        previous = self._tail
        task = loop.create_task(self._run_after(previous, operation))
        self._tail = task
        self._pending += 1
        return asyncio.shield(task)

    async def _run_after(self, previous: asyncio.Future[Any] | None, operation: Callable[[], Awaitable[T]]) -> T:
        try:
            # A finished predecessor may belong to an event loop that is gone.
            if previous is not None and not previous.done():
                await asyncio.wait([previous])
            return await operation()
        finally:
            self._pending -= 1


class PathLockRegistry:
    """
    Provides a stable SerializationLock per normalized file path, so every
    repository pointed at the same file shares one queue.

    In-process only: nothing here protects against another process writing
    the same file.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, SerializationLock] = {}

    def lock_for(self, path: Path) -> SerializationLock:
        key = str(path.resolve())
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = SerializationLock()
                self._locks[key] = lock
            return lock


GLOBAL_PATH_LOCKS = PathLockRegistry()
