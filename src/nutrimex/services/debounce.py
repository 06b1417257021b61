"""Single-slot debounce timer for asyncio controllers."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

_logger = logging.getLogger(__name__)


class DebounceTimer:
    """Runs the most recently scheduled action after a quiet period.

    Scheduling replaces any action that is still waiting. An action that has
    already started keeps running; only the waiting slot is cancellable.
    """

    def __init__(self) -> None:
        self._pending: asyncio.Task[None] | None = None
        self._running: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> bool:
        """True while an action is waiting for its delay to elapse."""
        return self._pending is not None and not self._pending.done()

    def schedule(self, delay: float, action: Callable[[], Awaitable[None]]) -> None:
        """Replace the waiting action with ``action`` after ``delay`` seconds."""
        self.cancel()
        self._pending = asyncio.get_running_loop().create_task(
            self._fire(delay, action)
        )

    def cancel(self) -> None:
        """Drop the waiting action, if any."""
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def wait(self) -> None:
        """Wait until no action is waiting or running."""
        while True:
            tasks = list(self._running)
            if self._pending is not None:
                tasks.append(self._pending)
            if not tasks:
                return
            await asyncio.gather(*tasks, return_exceptions=True)
            if self._pending is not None and self._pending.done():
                self._pending = None

    async def _fire(self, delay: float, action: Callable[[], Awaitable[None]]) -> None:
        await asyncio.sleep(delay)
        task = asyncio.current_task()
        if self._pending is task:
            self._pending = None
        if task is not None:
            self._running.add(task)
        try:
            await action()
        except Exception:
            _logger.exception("Debounced action failed")
        finally:
            if task is not None:
                self._running.discard(task)
