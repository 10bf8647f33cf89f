"""Unit tests for behavioral metrics and the interaction tracker."""

import pytest

from iblm.models.metrics import EnergyLevel
from iblm.services.metrics import BehaviorMetrics
from iblm.services.tracker import HISTORY_WINDOW, InteractionTracker
from tests.mocks.mock_generator import FakeClock


def run_interaction(
    tracker: InteractionTracker,
    clock: FakeClock,
    duration_ms: float,
    success: bool = True,
    item_id: str = "card",
) -> float | None:
    tracker.start_interaction(item_id, "feed")
    clock.advance(duration_ms)
    return tracker.end_interaction(success)


class TestBehaviorMetrics:
    """Tests for BehaviorMetrics."""

    def test_report_frustration_default_amount(self, metrics: BehaviorMetrics) -> None:
        metrics.report_frustration()
        assert metrics.frustration_level == 1

    def test_report_frustration_capped(self, metrics: BehaviorMetrics) -> None:
        metrics.report_frustration(7)
        metrics.report_frustration(50)
        assert metrics.frustration_level == 10

    def test_report_frustration_rejects_negative(self, metrics: BehaviorMetrics) -> None:
        with pytest.raises(ValueError):
            metrics.report_frustration(-1)

    def test_report_success_subtracts_two(self, metrics: BehaviorMetrics) -> None:
        metrics.report_frustration(5)
        metrics.report_success()
        assert metrics.frustration_level == 3

    def test_report_success_floored(self, metrics: BehaviorMetrics) -> None:
        metrics.report_frustration(1)
        metrics.report_success()
        metrics.report_success()
        assert metrics.frustration_level == 0

    def test_tick(self, metrics: BehaviorMetrics) -> None:
        metrics.tick()
        metrics.tick()
        assert metrics.session_duration == 2

    def test_reset_preserves_session_duration(self, metrics: BehaviorMetrics) -> None:
        metrics.tick(42)
        metrics.report_frustration(6)
        metrics.apply_interaction(1000, 1000, success=False)

        metrics.reset()

        snapshot = metrics.snapshot()
        assert snapshot.session_duration == 42
        assert snapshot.frustration_level == 0
        assert snapshot.attention_span == 5000
        assert snapshot.energy_level == EnergyLevel.CALM
        assert snapshot.topic_stickiness == 5

    def test_snapshot_is_detached(self, metrics: BehaviorMetrics) -> None:
        before = metrics.snapshot()
        metrics.report_frustration(2)
        assert before.frustration_level == 0
        assert metrics.snapshot().frustration_level == 2


class TestInteractionTracker:
    """Tests for InteractionTracker."""

    def test_end_without_start_is_noop(
        self, tracker: InteractionTracker, metrics: BehaviorMetrics
    ) -> None:
        before = metrics.snapshot()
        assert tracker.end_interaction(True) is None
        assert metrics.snapshot() == before
        assert tracker.history == ()

    def test_records_duration(self, tracker: InteractionTracker, clock: FakeClock) -> None:
        duration = run_interaction(tracker, clock, 2500)
        assert duration == 2500
        assert tracker.history == (2500,)
        assert tracker.active is None

    def test_active_interaction(self, tracker: InteractionTracker, clock: FakeClock) -> None:
        tracker.start_interaction("card-7", "lesson")
        assert tracker.active is not None
        assert tracker.active.item_id == "card-7"
        assert tracker.active.interaction_type == "lesson"
        assert tracker.active.start_time == clock.now

    def test_double_start_overwrites(
        self, tracker: InteractionTracker, clock: FakeClock, metrics: BehaviorMetrics
    ) -> None:
        tracker.start_interaction("first", "feed")
        clock.advance(9000)
        tracker.start_interaction("second", "feed")
        clock.advance(1000)
        tracker.end_interaction(True)

        # Elapsed time of the first interaction is discarded
        assert tracker.history == (1000,)
        assert metrics.attention_span == 1000

    def test_attention_span_is_rolling_mean(
        self, tracker: InteractionTracker, clock: FakeClock, metrics: BehaviorMetrics
    ) -> None:
        durations = [1000, 2000, 3000, 4000, 5000, 6000, 7000]
        for d in durations:
            run_interaction(tracker, clock, d)

        window = durations[-HISTORY_WINDOW:]
        assert tracker.history == tuple(window)
        assert metrics.attention_span == pytest.approx(sum(window) / len(window))

    def test_attention_span_before_window_fills(
        self, tracker: InteractionTracker, clock: FakeClock, metrics: BehaviorMetrics
    ) -> None:
        run_interaction(tracker, clock, 3000)
        run_interaction(tracker, clock, 6000)
        assert metrics.attention_span == pytest.approx(4500)

    def test_energy_level_threshold(
        self, tracker: InteractionTracker, clock: FakeClock, metrics: BehaviorMetrics
    ) -> None:
        run_interaction(tracker, clock, 3999)
        assert metrics.energy_level == EnergyLevel.HIGH

        tracker.clear_history()
        run_interaction(tracker, clock, 4000)
        assert metrics.energy_level == EnergyLevel.CALM

    def test_stickiness_increments_on_long_interaction(
        self, tracker: InteractionTracker, clock: FakeClock, metrics: BehaviorMetrics
    ) -> None:
        run_interaction(tracker, clock, 10001)
        assert metrics.topic_stickiness == 6

    def test_stickiness_decrements_at_exact_threshold(
        self, tracker: InteractionTracker, clock: FakeClock, metrics: BehaviorMetrics
    ) -> None:
        run_interaction(tracker, clock, 10000)
        assert metrics.topic_stickiness == 4

    def test_stickiness_floored(
        self, tracker: InteractionTracker, clock: FakeClock, metrics: BehaviorMetrics
    ) -> None:
        for _ in range(12):
            run_interaction(tracker, clock, 500)
        assert metrics.topic_stickiness == 0

    def test_success_relieves_frustration(
        self, tracker: InteractionTracker, clock: FakeClock, metrics: BehaviorMetrics
    ) -> None:
        metrics.report_frustration(3)
        run_interaction(tracker, clock, 5000, success=True)
        assert metrics.frustration_level == 2

    def test_failure_keeps_frustration(
        self, tracker: InteractionTracker, clock: FakeClock, metrics: BehaviorMetrics
    ) -> None:
        metrics.report_frustration(3)
        run_interaction(tracker, clock, 5000, success=False)
        assert metrics.frustration_level == 3

    def test_bounds_hold_under_mixed_sequence(
        self, tracker: InteractionTracker, clock: FakeClock, metrics: BehaviorMetrics
    ) -> None:
        for i in range(40):
            if i % 3 == 0:
                metrics.report_frustration(i)
            if i % 4 == 0:
                metrics.report_success()
            run_interaction(tracker, clock, 15000 if i % 2 else 200, success=i % 5 == 0)

            snapshot = metrics.snapshot()
            assert 0 <= snapshot.frustration_level <= 10
            assert 0 <= snapshot.topic_stickiness <= 10

    def test_clear_history(self, tracker: InteractionTracker, clock: FakeClock) -> None:
        run_interaction(tracker, clock, 1000)
        tracker.clear_history()
        assert tracker.history == ()
