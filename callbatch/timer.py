"""One-shot flush timer for batched calls."""

import asyncio
import time
from typing import Callable, Optional


class FlushTimer:
    """Deferred callback that fires once after a delay unless cancelled."""

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.start_time: Optional[float] = None
        self._task: Optional[asyncio.Task] = None
        self._cancelled = False

    def start(self, on_fire: Callable[[], None]) -> None:
        """
        Arm the timer on the running event loop.

        Args:
            on_fire: Called once when the delay elapses

        Raises:
            RuntimeError: If no event loop is running
        """
        loop = asyncio.get_running_loop()
        self.cancel()

        self._cancelled = False
        self.start_time = time.monotonic()
        self._task = loop.create_task(self._wait_and_fire(on_fire))

    def cancel(self) -> None:
        """Disarm the timer. The callback will not run afterwards."""
        self._cancelled = True

        if self._task:
            self._task.cancel()
            self._task = None

        self.start_time = None

    async def _wait_and_fire(self, on_fire: Callable[[], None]) -> None:
        """Sleep for the delay then call the callback."""
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            return

        if self._cancelled:
            return

        # Idle before firing so a cancel() from inside on_fire is a no-op
        self._task = None
        self.start_time = None
        on_fire()

    def get_remaining(self) -> float:
        """Get remaining seconds."""
        if self.start_time is None:
            return self.delay
        elapsed = time.monotonic() - self.start_time
        return max(0.0, self.delay - elapsed)

    @property
    def is_running(self) -> bool:
        """Check if timer is currently armed."""
        return self._task is not None and not self._cancelled
