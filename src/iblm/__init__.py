"""iblm - Behavioral signal engine and predictive content pipeline.

This package provides tools for:
- Observing how long and how successfully a child engages with each card
- Deriving attention span, frustration, energy and topic stickiness
- Turning those metrics into a content recommendation with a fixed rule table
- Keeping a look-ahead buffer of content hydrated just ahead of the scroll position

Example usage:
    from iblm import ChildProfile, IBLMSession, OpenAIProvider

    async with IBLMSession(OpenAIProvider, profile=ChildProfile(child_age=6)) as session:
        await session.load_initial_track()
        session.on_visible_index_changed(1)
        recommendation = session.decide_next_content()
"""

__version__ = "0.1.0"

from iblm.config import IBLMConfig
from iblm.infra.llm.anthropic_provider import AnthropicProvider
from iblm.infra.llm.openai_provider import OpenAIProvider
from iblm.interfaces.content import ContentGeneratorInterface
from iblm.models.content import ChildProfile, ContentItem, ContentSkeleton, HydrationStatus
from iblm.models.metrics import MetricsSnapshot
from iblm.models.recommendation import ContentRecommendation
from iblm.services.policy import decide_next_content
from iblm.session import IBLMSession

__all__ = [  # noqa: RUF022
    # Session
    "IBLMSession",
    "IBLMConfig",
    # Implementations
    "OpenAIProvider",
    "AnthropicProvider",
    # Interfaces
    "ContentGeneratorInterface",
    # Models
    "ChildProfile",
    "ContentItem",
    "ContentRecommendation",
    "ContentSkeleton",
    "HydrationStatus",
    "MetricsSnapshot",
    # Policy
    "decide_next_content",
]
