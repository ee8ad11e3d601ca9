"""Debounced call scheduling on the running asyncio loop."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any


class Debouncer:
    """Delays a coroutine call until input has paused.

    Every ``call`` cancels the pending timer and restarts the delay, so only
    the arguments of the last call in a burst ever reach the callback. Once
    the delay has elapsed the callback is no longer cancelled by new calls;
    ``shutdown`` is the only way to stop a callback already running.
    """

    def __init__(self, delay: float, callback: Callable[..., Awaitable[Any]]):
        """Initialize the debouncer.

        Args:
            delay: Quiet period in seconds
            callback: Coroutine function invoked after the quiet period
        """
        self.delay = delay
        self.callback = callback
        self._timer: asyncio.Task | None = None
        self._running: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        """True while a timer is counting down."""
        return self._timer is not None and not self._timer.done()

    @property
    def busy(self) -> bool:
        """True while a timer is counting down or a callback is running."""
        return self.pending or bool(self._running)

    def call(self, *args: Any) -> None:
        """Schedule the callback, replacing any pending timer."""
        self.cancel()
        self._timer = asyncio.create_task(self._delayed_call(*args))

    def cancel(self) -> None:
        """Drop the pending timer, if any."""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def wait(self) -> None:
        """Wait until no timer is pending and no callback is running."""
        while self.busy:
            tasks = set(self._running)
            if self._timer is not None:
                tasks.add(self._timer)
            await asyncio.wait(tasks)

    async def shutdown(self) -> None:
        """Cancel the timer and any running callback, then wait for them."""
        self.cancel()
        running = set(self._running)
        for task in running:
            task.cancel()
        if running:
            await asyncio.wait(running)

    async def _delayed_call(self, *args: Any) -> None:
        await asyncio.sleep(self.delay)

        task = asyncio.current_task()
        if self._timer is task:
            self._timer = None
        self._running.add(task)
        try:
            await self.callback(*args)
        finally:
            self._running.discard(task)
