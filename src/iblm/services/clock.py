"""Session clock for iblm.

Runs the once-per-second session duration tick as a cancellable task
tied to the session lifetime.
"""

import asyncio

from iblm.logging import get_logger
from iblm.services.metrics import BehaviorMetrics

__all__ = [
    "SessionClock",
]

logger = get_logger(__name__)


class SessionClock:
    """Periodically advances the session duration.

    Example:
        clock = SessionClock(metrics)
        clock.start()
        ...
        await clock.stop()
    """

    def __init__(self, metrics: BehaviorMetrics, interval_seconds: float = 1.0) -> None:
        self._metrics = metrics
        self._interval = interval_seconds
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking. Must be called from a running event loop."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run(), name="iblm-session-clock")

    async def stop(self) -> None:
        """Cancel the ticking task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.debug("session_clock_stopped", session_duration=self._metrics.session_duration)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self._metrics.tick()
