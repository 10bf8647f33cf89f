"""Behavioral metrics state for iblm.

This module holds the single mutable behavioral profile of a session.
It is mutated only by the interaction tracker, by explicit
frustration/success signals and by the session clock.
"""

from iblm.logging import get_logger
from iblm.models.metrics import (
    BASELINE_ATTENTION_SPAN_MS,
    BASELINE_TOPIC_STICKINESS,
    MAX_FRUSTRATION,
    MAX_TOPIC_STICKINESS,
    CuriosityType,
    EnergyLevel,
    MetricsSnapshot,
)

__all__ = [
    "COMPLETION_RELIEF",
    "HIGH_ENERGY_THRESHOLD_MS",
    "LONG_INTERACTION_MS",
    "SUCCESS_RELIEF",
    "BehaviorMetrics",
]

logger = get_logger(__name__)

# Mean duration below which the child is considered restless
HIGH_ENERGY_THRESHOLD_MS = 4000
# A single interaction longer than this counts as sticking with the topic
LONG_INTERACTION_MS = 10000
# Frustration removed by an explicit success signal
SUCCESS_RELIEF = 2
# Frustration removed by a successfully completed interaction
COMPLETION_RELIEF = 1


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


class BehaviorMetrics:
    """Mutable behavioral profile for one session.

    All bounded fields are clamped on every mutation, so a snapshot
    always satisfies the ranges declared on MetricsSnapshot.

    Example:
        metrics = BehaviorMetrics()
        metrics.report_frustration(4)
        snapshot = metrics.snapshot()
    """

    def __init__(self) -> None:
        self._session_duration = 0
        self._restore_baseline()

    def _restore_baseline(self) -> None:
        self._attention_span: float = float(BASELINE_ATTENTION_SPAN_MS)
        self._frustration_level = 0
        self._curiosity_type = CuriosityType.VISUAL
        self._energy_level = EnergyLevel.CALM
        self._topic_stickiness = BASELINE_TOPIC_STICKINESS

    @property
    def attention_span(self) -> float:
        return self._attention_span

    @property
    def frustration_level(self) -> int:
        return self._frustration_level

    @property
    def energy_level(self) -> EnergyLevel:
        return self._energy_level

    @property
    def topic_stickiness(self) -> int:
        return self._topic_stickiness

    @property
    def session_duration(self) -> int:
        return self._session_duration

    def snapshot(self) -> MetricsSnapshot:
        """Return an immutable copy of the current profile."""
        return MetricsSnapshot(
            attention_span=self._attention_span,
            frustration_level=self._frustration_level,
            curiosity_type=self._curiosity_type,
            energy_level=self._energy_level,
            session_duration=self._session_duration,
            topic_stickiness=self._topic_stickiness,
        )

    def report_frustration(self, amount: int = 1) -> None:
        """Add a negative signal, capped at MAX_FRUSTRATION.

        Args:
            amount: Non-negative frustration increment

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"frustration amount must be non-negative, got {amount}")
        self._frustration_level = _clamp(
            self._frustration_level + amount, 0, MAX_FRUSTRATION
        )
        logger.debug("frustration_reported", amount=amount, level=self._frustration_level)

    def report_success(self) -> None:
        """Relieve frustration after an explicit success signal."""
        self._frustration_level = _clamp(
            self._frustration_level - SUCCESS_RELIEF, 0, MAX_FRUSTRATION
        )
        logger.debug("success_reported", level=self._frustration_level)

    def apply_interaction(self, duration_ms: float, attention_span: float, success: bool) -> None:
        """Fold one completed interaction into the profile.

        Args:
            duration_ms: Duration of the interaction that just ended
            attention_span: Rolling mean of recent durations, this one included
            success: Whether the interaction completed successfully
        """
        self._attention_span = attention_span
        self._energy_level = (
            EnergyLevel.HIGH if attention_span < HIGH_ENERGY_THRESHOLD_MS else EnergyLevel.CALM
        )

        step = 1 if duration_ms > LONG_INTERACTION_MS else -1
        self._topic_stickiness = _clamp(self._topic_stickiness + step, 0, MAX_TOPIC_STICKINESS)

        if success:
            self._frustration_level = _clamp(
                self._frustration_level - COMPLETION_RELIEF, 0, MAX_FRUSTRATION
            )

    def tick(self, seconds: int = 1) -> None:
        """Advance the elapsed session time."""
        self._session_duration += seconds

    def reset(self) -> None:
        """Restore the behavioral baseline.

        Elapsed session time is kept; session continuity does not
        depend on behavioral re-baselining.
        """
        self._restore_baseline()
        logger.info("metrics_reset", session_duration=self._session_duration)
