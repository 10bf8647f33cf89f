"""Content buffer for iblm.

This module owns the ordered sequence of content items consumed by the
feed. The buffer is append-only: items are never removed or reordered
after insertion, only their hydration state and asset are updated in place.
"""

from collections.abc import Iterable

from iblm.logging import get_logger
from iblm.models.content import ContentItem, ContentSkeleton, HydrationStatus
from iblm.utils.hashing import generate_item_id

__all__ = [
    "ContentBuffer",
]

logger = get_logger(__name__)

_TRANSITIONS: dict[HydrationStatus, frozenset[HydrationStatus]] = {
    HydrationStatus.EMPTY: frozenset({HydrationStatus.HYDRATING}),
    HydrationStatus.HYDRATING: frozenset({HydrationStatus.READY, HydrationStatus.FAILED}),
    HydrationStatus.FAILED: frozenset({HydrationStatus.HYDRATING}),
    HydrationStatus.READY: frozenset(),
}


class ContentBuffer:
    """Append-only sequence of content items.

    The buffer is the single writer of hydration state. Every clear
    bumps the epoch, which lets asynchronous work launched against an
    older buffer detect that its results no longer apply.
    """

    def __init__(self) -> None:
        self._items: list[ContentItem] = []
        self._epoch = 0

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> tuple[ContentItem, ...]:
        """Read-only view for rendering."""
        return tuple(self._items)

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def last(self) -> ContentItem | None:
        return self._items[-1] if self._items else None

    def get(self, index: int) -> ContentItem | None:
        """Get item at index, or None when out of range."""
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def append(self, skeletons: Iterable[ContentSkeleton], seed_topic: str) -> list[ContentItem]:
        """Append skeletons as EMPTY items.

        Args:
            skeletons: Text-only items from the generator
            seed_topic: Topic the batch was seeded with

        Returns:
            The newly created items
        """
        added = []
        for skeleton in skeletons:
            item = ContentItem(
                id=generate_item_id(seed_topic, skeleton.title, len(self._items)),
                title=skeleton.title,
                topic=skeleton.topic,
                fact=skeleton.fact,
            )
            self._items.append(item)
            added.append(item)
        return added

    def transition(
        self,
        index: int,
        status: HydrationStatus,
        *,
        image_url: str | None = None,
        attempts: int | None = None,
    ) -> bool:
        """Move the item at index to a new hydration state.

        Args:
            index: Buffer position
            status: Target state
            image_url: Asset to attach
            attempts: Asset request count to record

        Returns:
            True if the transition was applied, False if the index is
            out of range or the transition is not allowed
        """
        item = self.get(index)
        if item is None:
            return False
        if status not in _TRANSITIONS[item.hydration_status]:
            logger.debug(
                "hydration_transition_rejected",
                index=index,
                current=item.hydration_status,
                target=status,
            )
            return False

        update: dict[str, object] = {"hydration_status": status}
        if image_url is not None:
            update["image_url"] = image_url
        if attempts is not None:
            update["attempts"] = attempts
        self._items[index] = item.model_copy(update=update)
        return True

    def clear(self) -> None:
        self._items = []
        self._epoch += 1
