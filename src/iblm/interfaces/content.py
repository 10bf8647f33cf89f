"""Content generation interface for iblm.

This module defines the Protocol for the generative content provider
that supplies text skeletons and illustrations.
"""

from typing import Protocol, runtime_checkable

from iblm.models.content import ChildProfile, ContentSkeleton
from iblm.models.recommendation import ContentRecommendation

__all__ = [
    "ContentGeneratorInterface",
]


@runtime_checkable
class ContentGeneratorInterface(Protocol):
    """Contract for generative content providers.

    Implementations must be safe to call repeatedly with different
    recommendations. They may memoize results by request key.
    """

    async def generate_content_batch(
        self,
        seed_topic: str,
        profile: ChildProfile | None,
        recommendation: ContentRecommendation,
        count: int = 3,
    ) -> list[ContentSkeleton]:
        """Generate a batch of text-only content items.

        Args:
            seed_topic: Topic the batch should continue from
            profile: Child profile used for age and focus topics
            recommendation: Current policy decision biasing the content
            count: Number of items requested

        Returns:
            List of content skeletons (may be empty on failure)
        """
        ...

    async def generate_asset(self, prompt: str) -> str | None:
        """Generate an illustration for a single item.

        Args:
            prompt: Image prompt

        Returns:
            Asset reference (URL or data URI), or None on failure
        """
        ...
