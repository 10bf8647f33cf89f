"""Shared test fixtures for iblm.

This module provides pytest fixtures used across all tests.
"""

from unittest.mock import AsyncMock

import pytest

from iblm.config import IBLMConfig, PipelineSettings, RedisSettings
from iblm.models.content import ChildProfile, ContentSkeleton
from iblm.services.buffer import ContentBuffer
from iblm.services.metrics import BehaviorMetrics
from iblm.services.tracker import InteractionTracker
from tests.mocks.mock_generator import FakeClock, MockContentGenerator


def make_skeletons(count: int, topic: str = "Space") -> list[ContentSkeleton]:
    return [
        ContentSkeleton(title=f"{topic} card {i}", fact=f"{topic} fact {i}", topic=topic)
        for i in range(count)
    ]


# Engine fixtures
@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(start=1_000_000.0)


@pytest.fixture
def metrics() -> BehaviorMetrics:
    return BehaviorMetrics()


@pytest.fixture
def tracker(metrics: BehaviorMetrics, clock: FakeClock) -> InteractionTracker:
    return InteractionTracker(metrics, clock=clock)


# Generator fixtures
@pytest.fixture
def generator() -> MockContentGenerator:
    return MockContentGenerator()


@pytest.fixture
def mock_generator() -> AsyncMock:
    """Create mock content generator interface."""
    gen = AsyncMock()
    gen.generate_content_batch.return_value = [
        ContentSkeleton(title="Octopus Hearts", fact="An octopus has three hearts.", topic="Ocean"),
        ContentSkeleton(title="Sleepy Otters", fact="Otters hold hands to sleep.", topic="Ocean"),
    ]
    gen.generate_asset.return_value = "https://img.test/asset.png"
    return gen


# Settings fixtures
@pytest.fixture
def profile() -> ChildProfile:
    return ChildProfile(child_name="Mia", child_age=6, focus_topics=["space", "dinosaurs"])


@pytest.fixture
def pipeline_settings() -> PipelineSettings:
    return PipelineSettings(
        batch_size=3,
        lookahead=3,
        extend_margin=2,
        asset_max_attempts=2,
        tick_interval_seconds=0.01,
    )


@pytest.fixture
def config(pipeline_settings: PipelineSettings) -> IBLMConfig:
    return IBLMConfig(pipeline=pipeline_settings, redis=RedisSettings(url=None))


# Buffer fixtures
@pytest.fixture
def filled_buffer() -> ContentBuffer:
    """A buffer holding ten EMPTY items."""
    buffer = ContentBuffer()
    buffer.append(make_skeletons(10), "Space")
    return buffer
