"""Content recommendation models for iblm."""

from enum import StrEnum

from pydantic import BaseModel, Field

__all__ = [
    "ContentFormat",
    "ContentRecommendation",
    "Difficulty",
    "TopicCategory",
]


class Difficulty(StrEnum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class ContentFormat(StrEnum):
    FACT = "FACT"
    GAME = "GAME"
    STORY = "STORY"
    VIDEO = "VIDEO"


class TopicCategory(StrEnum):
    STANDARD = "STANDARD"
    HIGH_ENERGY = "HIGH_ENERGY"
    CALM = "CALM"


class ContentRecommendation(BaseModel, frozen=True):
    """Decision produced by the recommendation policy.

    Recomputed on demand and never stored. The reason is a trace of
    the rule that fired and carries no logic.
    """

    difficulty: Difficulty
    format: ContentFormat
    topic_category: TopicCategory
    reason: str = Field(description="Name of the rule that fired")
