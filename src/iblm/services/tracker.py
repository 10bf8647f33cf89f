"""Interaction tracker for iblm.

This module records the start and end of each unit of attention and
keeps the rolling window of durations the attention span is derived from.
"""

import time
from collections import deque
from collections.abc import Callable

import numpy as np

from iblm.logging import get_logger
from iblm.models.interaction import Interaction
from iblm.services.metrics import BehaviorMetrics

__all__ = [
    "HISTORY_WINDOW",
    "InteractionTracker",
    "monotonic_ms",
]

logger = get_logger(__name__)

# Number of most recent durations the attention span averages over
HISTORY_WINDOW = 5


def monotonic_ms() -> float:
    """Default clock: monotonic time in milliseconds."""
    return time.monotonic() * 1000


class InteractionTracker:
    """Tracks the active interaction and recent durations.

    At most one interaction is live at a time. Pairing start/end calls
    is the caller's responsibility; starting a new interaction while
    one is active overwrites it and its elapsed time is discarded.

    Example:
        tracker = InteractionTracker(metrics)
        tracker.start_interaction("card-1", "feed")
        ...
        tracker.end_interaction(success=True)
    """

    def __init__(
        self,
        metrics: BehaviorMetrics,
        clock: Callable[[], float] = monotonic_ms,
        window: int = HISTORY_WINDOW,
    ) -> None:
        """Initialize tracker.

        Args:
            metrics: Metrics state updated on every completed interaction
            clock: Callable returning the current time in milliseconds
            window: Number of durations kept for the rolling mean
        """
        self._metrics = metrics
        self._clock = clock
        self._history: deque[float] = deque(maxlen=window)
        self._active: Interaction | None = None

    @property
    def active(self) -> Interaction | None:
        return self._active

    @property
    def history(self) -> tuple[float, ...]:
        """Recorded durations, oldest first."""
        return tuple(self._history)

    def start_interaction(self, item_id: str, interaction_type: str = "feed") -> None:
        """Begin a new interaction on a content unit."""
        if self._active is not None:
            logger.warning(
                "interaction_overwritten",
                discarded_id=self._active.item_id,
                item_id=item_id,
            )
        self._active = Interaction(
            item_id=item_id,
            start_time=self._clock(),
            interaction_type=interaction_type,
        )

    def end_interaction(self, success: bool) -> float | None:
        """Close the active interaction and update the metrics.

        Args:
            success: Whether the interaction completed successfully

        Returns:
            Duration in milliseconds, or None if no interaction was active
        """
        active = self._active
        if active is None:
            return None

        duration = max(0.0, self._clock() - active.start_time)
        self._history.append(duration)
        attention_span = float(np.mean(self._history))

        self._metrics.apply_interaction(duration, attention_span, success)
        self._active = None

        logger.debug(
            "interaction_ended",
            item_id=active.item_id,
            interaction_type=active.interaction_type,
            duration_ms=duration,
            attention_span=attention_span,
            success=success,
        )
        return duration

    def clear_history(self) -> None:
        self._history.clear()
