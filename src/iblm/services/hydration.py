"""Hydration pipeline for iblm.

This module keeps a small look-ahead window of the content buffer
hydrated (text -> image -> ready) just ahead of the child's scroll
position, and extends the buffer before the end is reached.

Concurrency model: a single event loop. Each hydration issues one
fire-and-forget task; tasks may finish in any order. A task captures
the buffer epoch at launch and drops its result if the buffer has since
been cleared or the pipeline closed.
"""

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any

from iblm.config import PipelineSettings
from iblm.interfaces.content import ContentGeneratorInterface
from iblm.logging import get_logger
from iblm.models.content import ChildProfile, ContentItem, HydrationStatus
from iblm.models.recommendation import ContentRecommendation
from iblm.services.buffer import ContentBuffer
from iblm.services.prompts import build_asset_prompt

__all__ = [
    "HydrationPipeline",
]

logger = get_logger(__name__)


class HydrationPipeline:
    """Orchestrates buffer extension and look-ahead hydration.

    Example:
        pipeline = HydrationPipeline(generator, buffer, recommend)
        await pipeline.load_initial_track(profile)
        pipeline.on_position_changed(1)
        await pipeline.wait_idle()
    """

    def __init__(
        self,
        generator: ContentGeneratorInterface,
        buffer: ContentBuffer,
        recommend: Callable[[], ContentRecommendation],
        settings: PipelineSettings | None = None,
        profile: ChildProfile | None = None,
    ) -> None:
        """Initialize pipeline.

        Args:
            generator: Content generation collaborator
            buffer: Buffer to fill and hydrate
            recommend: Returns the current recommendation on demand
            settings: Batch, window and retry settings
            profile: Child profile passed to the generator
        """
        self._generator = generator
        self._buffer = buffer
        self._recommend = recommend
        self._settings = settings or PipelineSettings()
        self._profile = profile

        self._position = 0
        self._extended_at: int | None = None
        self._initial_load: asyncio.Task[list[ContentItem]] | None = None
        self._tasks: set[asyncio.Task[Any]] = set()
        self._closed = False

    @property
    def pending(self) -> int:
        """Number of outstanding generation tasks."""
        return len(self._tasks)

    def _spawn(self, coro: Coroutine[Any, Any, Any], name: str) -> asyncio.Task[Any]:
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _is_stale(self, epoch: int) -> bool:
        return self._closed or epoch != self._buffer.epoch

    # === TRACK LOADING ===

    async def load_initial_track(self, profile: ChildProfile | None = None) -> list[ContentItem]:
        """Install the first batch of skeletons into an empty buffer.

        Does nothing if the buffer already holds items. A call made while
        another load is in flight waits for that load and installs nothing.

        Args:
            profile: Child profile; replaces the one given at construction

        Returns:
            Newly installed items
        """
        if profile is not None:
            self._profile = profile
        if self._initial_load is not None:
            await asyncio.wait({self._initial_load})
            return []
        if self._closed or len(self._buffer) > 0:
            return []

        self._initial_load = self._spawn(
            self._fetch_batch(self._settings.initial_seed_topic, self._buffer.epoch),
            name="iblm-initial-track",
        )
        try:
            return await self._initial_load
        finally:
            self._initial_load = None

    async def extend_track(self) -> list[ContentItem]:
        """Append a batch seeded by the last item's topic."""
        last = self._buffer.last
        seed_topic = last.topic if last else self._settings.fallback_seed_topic
        epoch = self._buffer.epoch
        added = await self._fetch_batch(seed_topic, epoch)
        if not added and not self._is_stale(epoch):
            # Allow the next scroll event to try again
            self._extended_at = None
        return added

    async def _fetch_batch(self, seed_topic: str, epoch: int) -> list[ContentItem]:
        recommendation = self._recommend()
        try:
            skeletons = await self._generator.generate_content_batch(
                seed_topic,
                self._profile,
                recommendation,
                self._settings.batch_size,
            )
        except Exception as e:
            logger.warning("content_batch_failed", seed_topic=seed_topic, error=str(e))
            return []

        if self._is_stale(epoch):
            logger.debug("content_batch_discarded", seed_topic=seed_topic)
            return []

        added = self._buffer.append(skeletons, seed_topic)
        logger.info(
            "track_extended",
            seed_topic=seed_topic,
            reason=recommendation.reason,
            added=len(added),
            length=len(self._buffer),
        )
        if added:
            self.hydrate_window(self._position)
        return added

    def maybe_extend(self, index: int) -> asyncio.Task[Any] | None:
        """Extend the track once per crossing of the end margin.

        Returns:
            The extension task, or None if no extension was triggered
        """
        length = len(self._buffer)
        if self._closed or length == 0 or index < length - self._settings.extend_margin:
            return None
        if self._extended_at == length:
            return None
        self._extended_at = length
        return self._spawn(self.extend_track(), name=f"iblm-extend-{length}")

    # === HYDRATION ===

    def hydrate_item(self, index: int) -> asyncio.Task[Any] | None:
        """Start hydrating the item at index if it is EMPTY.

        The item moves to HYDRATING immediately, so repeated calls before
        the asset arrives issue at most one generation request.

        Returns:
            The hydration task, or None if nothing was started
        """
        item = self._buffer.get(index)
        if self._closed or item is None or item.hydration_status != HydrationStatus.EMPTY:
            return None
        return self._start_hydration(index, item)

    def retry_item(self, index: int) -> asyncio.Task[Any] | None:
        """Re-hydrate a FAILED item on explicit request."""
        item = self._buffer.get(index)
        if self._closed or item is None or item.hydration_status != HydrationStatus.FAILED:
            return None
        return self._start_hydration(index, item)

    def _start_hydration(self, index: int, item: ContentItem) -> asyncio.Task[Any]:
        self._buffer.transition(index, HydrationStatus.HYDRATING)
        logger.debug("hydration_started", index=index, item_id=item.id)
        return self._spawn(
            self._hydrate(index, item, self._buffer.epoch),
            name=f"iblm-hydrate-{index}",
        )

    async def _hydrate(self, index: int, item: ContentItem, epoch: int) -> None:
        prompt = build_asset_prompt(item.title)
        attempts = item.attempts
        for _ in range(self._settings.asset_max_attempts):
            attempts += 1
            try:
                asset = await self._generator.generate_asset(prompt)
            except Exception as e:
                logger.warning("asset_generation_failed", index=index, error=str(e))
                asset = None

            if self._is_stale(epoch):
                logger.debug("hydration_discarded", index=index, item_id=item.id)
                return
            if asset:
                self._buffer.transition(
                    index, HydrationStatus.READY, image_url=asset, attempts=attempts
                )
                logger.debug("hydration_ready", index=index, item_id=item.id, attempts=attempts)
                return

        self._buffer.transition(index, HydrationStatus.FAILED, attempts=attempts)
        logger.warning("hydration_failed", index=index, item_id=item.id, attempts=attempts)

    def hydrate_window(self, index: int) -> list[int]:
        """Hydrate the current index and the ones just ahead of it.

        Returns:
            Indices for which hydration was started
        """
        started = []
        for i in range(index, index + self._settings.lookahead):
            if self.hydrate_item(i) is not None:
                started.append(i)
        return started

    def on_position_changed(self, index: int) -> list[int]:
        """React to a new visible position.

        Returns:
            Indices for which hydration was started
        """
        self._position = max(0, index)
        self.maybe_extend(self._position)
        return self.hydrate_window(self._position)

    # === LIFECYCLE ===

    def reset(self) -> None:
        """Clear the buffer; in-flight results for the old buffer are dropped."""
        self._buffer.clear()
        self._position = 0
        self._extended_at = None

    async def wait_idle(self) -> None:
        """Wait until no generation tasks are outstanding.

        Tasks spawned while waiting (e.g. hydration after an extension)
        are awaited too.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Stop accepting work and cancel outstanding tasks."""
        self._closed = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
