"""Public models for iblm.

This module exports all public value objects.
"""

from iblm.models.content import ChildProfile, ContentItem, ContentSkeleton, HydrationStatus
from iblm.models.interaction import Interaction
from iblm.models.metrics import CuriosityType, EnergyLevel, MetricsSnapshot
from iblm.models.recommendation import (
    ContentFormat,
    ContentRecommendation,
    Difficulty,
    TopicCategory,
)

__all__ = [
    "ChildProfile",
    "ContentFormat",
    "ContentItem",
    "ContentRecommendation",
    "ContentSkeleton",
    "CuriosityType",
    "Difficulty",
    "EnergyLevel",
    "HydrationStatus",
    "Interaction",
    "MetricsSnapshot",
    "TopicCategory",
]
