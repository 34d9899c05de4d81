"""Single-process FIFO task queue with bounded concurrency.

Heavy maintenance jobs (user data deletion) are serialized through a queue
with concurrency 1 so that two cascades never interleave. Tasks may be plain
callables or coroutine functions; :meth:`TaskQueue.add` resolves with the
task's result or re-raises its error.
"""

import asyncio
import contextvars
import inspect
from collections import deque
from collections.abc import Awaitable, Callable
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class TaskAborted(Exception):
    """A queued task was aborted before it started."""


class TaskQueue:
    def __init__(self, concurrency: int = 1) -> None:
        self.concurrency = max(1, concurrency)
        self.active = 0
        self._waiting: deque = deque()
        self._running: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._waiting)

    async def add(self, task: Callable[[], Any], abort: asyncio.Event | None = None) -> Any:
        """Enqueue ``task`` and wait for its outcome.

        If ``abort`` is set by the time the task reaches the head of the
        queue, the task is skipped and :class:`TaskAborted` is raised.
        """
        future = asyncio.get_running_loop().create_future()
        self._waiting.append((task, abort, future, contextvars.copy_context()))
        self._drain()
        return await future

    def _drain(self) -> None:
        while self.active < self.concurrency and self._waiting:
            task, abort, future, context = self._waiting.popleft()

            if abort is not None and abort.is_set():
                if not future.done():
                    future.set_exception(TaskAborted("Task aborted"))
                continue

            self.active += 1
            runner = asyncio.get_running_loop().create_task(self._run(task, future), context=context)
            self._running.add(runner)
            runner.add_done_callback(self._running.discard)

    async def _run(self, task: Callable[[], Any], future: asyncio.Future) -> None:
        try:
            result = task()
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            if not future.done():
                future.set_exception(exc)
        else:
            if not future.done():
                future.set_result(result)
        finally:
            self.active -= 1
            self._drain()


async def with_retry(
    operation: Callable[[], Any | Awaitable[Any]],
    attempts: int = 3,
    base_delay: float = 0.2,
    label: str | None = None,
) -> Any:
    """Run ``operation`` with exponential backoff, re-raising the last error."""
    for attempt in range(1, attempts + 1):
        try:
            result = operation()
            if inspect.isawaitable(result):
                result = await result
            return result
        except Exception as exc:
            if attempt == attempts:
                logger.error("Operation failed after retries", operation=label, attempts=attempts, error=str(exc))
                raise

            delay = base_delay * 2 ** (attempt - 1)
            logger.warning("Retrying operation", operation=label, attempt=attempt, delay=delay, error=str(exc))
            await asyncio.sleep(delay)


# Serializes user deletion cascades
user_deletion_queue = TaskQueue(concurrency=1)
