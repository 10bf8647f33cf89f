"""IBLMSession: the behavioral signal engine for one child session.

This module provides the main entry point for iblm. A session owns the
metrics state, interaction tracker, content buffer, hydration pipeline
and session clock, and exposes the operations the UI calls.
"""

import uuid
from collections.abc import Callable
from typing import Any

from iblm.config import IBLMConfig
from iblm.infra.redis.cache import CachedContentGenerator, ContentCache
from iblm.infra.redis.client import RedisClient
from iblm.interfaces.content import ContentGeneratorInterface
from iblm.logging import bind_session, get_logger, unbind_session
from iblm.models.content import ChildProfile, ContentItem
from iblm.models.interaction import Interaction
from iblm.models.metrics import MetricsSnapshot
from iblm.models.recommendation import ContentRecommendation
from iblm.services.buffer import ContentBuffer
from iblm.services.clock import SessionClock
from iblm.services.hydration import HydrationPipeline
from iblm.services.metrics import BehaviorMetrics
from iblm.services.policy import decide_next_content
from iblm.services.tracker import InteractionTracker, monotonic_ms

__all__ = ["IBLMSession"]

logger = get_logger(__name__)


class IBLMSession:
    """Lifecycle-scoped context for one child's feed session.

    Accepts the content generator implementation class. Config is loaded
    from .env automatically. For custom generators, set config_class = None
    and pass generator_custom_config.

    Metrics operations are synchronous and usable at any time. Track
    loading and scrolling require the session to be entered.

    Example:
        async with IBLMSession(OpenAIProvider, profile=profile) as session:
            await session.load_initial_track()
            session.on_visible_index_changed(1)
            items = session.items
    """

    def __init__(
        self,
        generator_class: type[ContentGeneratorInterface],
        *,
        generator_custom_config: dict[str, Any] | None = None,
        profile: ChildProfile | None = None,
        config: IBLMConfig | None = None,
        clock: Callable[[], float] = monotonic_ms,
    ) -> None:
        """Initialize session.

        Args:
            generator_class: Content generator implementation class
            generator_custom_config: Custom config dict if generator_class.config_class is None
            profile: Child profile used to tailor generated content
            config: Settings; loaded from the environment when omitted
            clock: Millisecond clock used to time interactions
        """
        self._config = config or IBLMConfig()
        self._generator_class = generator_class
        self._generator_custom_config = generator_custom_config
        self._profile = profile
        self._session_id = uuid.uuid4().hex[:12]

        self._metrics = BehaviorMetrics()
        self._tracker = InteractionTracker(self._metrics, clock=clock)
        self._buffer = ContentBuffer()
        self._session_clock = SessionClock(
            self._metrics, self._config.pipeline.tick_interval_seconds
        )

        # Created on connect
        self._generator: ContentGeneratorInterface | None = None
        self._redis: RedisClient | None = None
        self._pipeline: HydrationPipeline | None = None

        self._visible_index = 0
        self._connected = False

    async def _instantiate_generator(self) -> ContentGeneratorInterface:
        """Instantiate the generator class.

        If config_class is set, the matching settings from the session
        config are used. If it is None, generator_custom_config is used.
        """
        cls = self._generator_class
        config_class = getattr(cls, "config_class", None)

        if config_class is None:
            if self._generator_custom_config is None:
                raise ValueError(
                    f"{cls.__name__} has config_class=None but no custom_config provided"
                )
            return await cls.from_dict(self._generator_custom_config)  # type: ignore[attr-defined]
        return await cls.from_config(self._config.llm)  # type: ignore[attr-defined]

    async def _connect(self) -> None:
        if self._connected:
            return

        generator = await self._instantiate_generator()
        bind_session(self._session_id)
        self._generator = generator

        if self._config.redis_enabled:
            self._redis = RedisClient(self._config.redis)
            if await self._redis.connect():
                cache = ContentCache(self._redis, ttl=self._config.redis.ttl_seconds)
                generator = CachedContentGenerator(generator, cache)

        self._pipeline = HydrationPipeline(
            generator,
            self._buffer,
            self.decide_next_content,
            settings=self._config.pipeline,
            profile=self._profile,
        )
        self._session_clock.start()

        self._connected = True
        logger.info("session_started", generator=type(self._generator).__name__)

    async def _disconnect(self) -> None:
        await self._session_clock.stop()
        if self._pipeline is not None:
            await self._pipeline.close()
        if self._redis is not None:
            await self._redis.disconnect()
        if self._generator is not None and hasattr(self._generator, "close"):
            await self._generator.close()

        self._connected = False
        logger.info(
            "session_closed",
            session_duration=self._metrics.session_duration,
            items=len(self._buffer),
        )
        unbind_session()

    async def __aenter__(self) -> "IBLMSession":
        """Async context manager entry - connects automatically."""
        await self._connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit - tears the session down."""
        await self._disconnect()

    def _ensure_connected(self) -> HydrationPipeline:
        if not self._connected or self._pipeline is None:
            raise RuntimeError("IBLMSession not started. Use 'async with IBLMSession(...) as s:'")
        return self._pipeline

    # === READ-ONLY VIEWS ===

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def metrics(self) -> MetricsSnapshot:
        return self._metrics.snapshot()

    @property
    def items(self) -> tuple[ContentItem, ...]:
        return self._buffer.items

    @property
    def visible_index(self) -> int:
        return self._visible_index

    @property
    def active_interaction(self) -> Interaction | None:
        return self._tracker.active

    @property
    def generator(self) -> ContentGeneratorInterface | None:
        """The instantiated generator (before any caching wrapper)."""
        return self._generator

    @property
    def pipeline(self) -> HydrationPipeline:
        return self._ensure_connected()

    # === METRICS OPERATIONS ===

    def start_interaction(self, item_id: str, interaction_type: str = "feed") -> None:
        self._tracker.start_interaction(item_id, interaction_type)

    def end_interaction(self, success: bool) -> float | None:
        return self._tracker.end_interaction(success)

    def report_frustration(self, amount: int = 1) -> None:
        self._metrics.report_frustration(amount)

    def report_success(self) -> None:
        self._metrics.report_success()

    def decide_next_content(self) -> ContentRecommendation:
        return decide_next_content(self._metrics.snapshot())

    def reset_metrics(self) -> None:
        """Re-baseline the behavioral profile and clear the content buffer.

        Elapsed session time is preserved.
        """
        self._metrics.reset()
        self._tracker.clear_history()
        if self._pipeline is not None:
            self._pipeline.reset()
        else:
            self._buffer.clear()
        self._visible_index = 0

    # === FEED OPERATIONS ===

    async def load_initial_track(self) -> list[ContentItem]:
        """Request the first batch of items, seeded by the current recommendation.

        Also opens the interaction on the first visible card.
        """
        pipeline = self._ensure_connected()
        added = await pipeline.load_initial_track(self._profile)
        first = self._buffer.get(self._visible_index)
        if first is not None and self._tracker.active is None:
            self._tracker.start_interaction(first.id, "feed")
        return added

    def on_visible_index_changed(self, index: int) -> None:
        """Scroll callback; call on every visible-item change.

        Closes the interaction on the previously visible card, opens one
        on the new card, then extends and hydrates the look-ahead window.
        """
        pipeline = self._ensure_connected()
        index = max(0, index)
        if index == self._visible_index:
            return

        self._tracker.end_interaction(success=True)
        item = self._buffer.get(index)
        if item is not None:
            self._tracker.start_interaction(item.id, "feed")
        self._visible_index = index
        pipeline.on_position_changed(index)

    def retry_item(self, index: int) -> bool:
        """Re-hydrate a FAILED item. Returns True if a retry was started."""
        pipeline = self._ensure_connected()
        return pipeline.retry_item(index) is not None

    async def wait_idle(self) -> None:
        """Wait for all outstanding generation work to settle."""
        await self._ensure_connected().wait_idle()
