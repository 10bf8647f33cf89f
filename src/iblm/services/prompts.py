"""Prompt construction for content generation.

The recommendation is injected into the prompt: difficulty selects the
writing style, topic category the tone, format a framing hint, and the
child profile the age context.
"""

import json

from iblm.logging import get_logger
from iblm.models.content import ChildProfile, ContentSkeleton
from iblm.models.recommendation import (
    ContentFormat,
    ContentRecommendation,
    Difficulty,
    TopicCategory,
)

__all__ = [
    "BATCH_SYSTEM_PROMPT",
    "build_asset_prompt",
    "build_batch_prompt",
    "parse_batch_response",
]

logger = get_logger(__name__)

BATCH_SYSTEM_PROMPT = """You create short educational feed cards for young children.
Respond with JSON only:
{"items": [{"title": "short fun title", "fact": "card text", "topic": "topic label"}]}"""

STYLE_INSTRUCTIONS: dict[Difficulty, str] = {
    Difficulty.EASY: (
        "Write an extremely simple, 1-sentence fact. Use very basic words. "
        "Make it sound like a joke."
    ),
    Difficulty.MEDIUM: "Write a very short, fun, and simple educational fact.",
    Difficulty.HARD: (
        "Write a fascinating, slightly complex fact with a scientific detail. 2 sentences."
    ),
}

TONE_MODIFIERS: dict[TopicCategory, str] = {
    TopicCategory.STANDARD: "",
    TopicCategory.HIGH_ENERGY: "Make it sound EXCITING and EXPLOSIVE! Use exclamation marks!",
    TopicCategory.CALM: "Make it sound soothing and gentle.",
}

FORMAT_HINTS: dict[ContentFormat, str] = {
    ContentFormat.FACT: "Each card is a standalone fact.",
    ContentFormat.GAME: "Each card invites the child to play along, like a tiny guessing game.",
    ContentFormat.STORY: "The cards continue one another like pages of a little story.",
    ContentFormat.VIDEO: "Each card reads like the narration of a short, lively video clip.",
}


def _age_context(profile: ChildProfile | None) -> str:
    if profile is None:
        return "for a 5-year-old"
    if profile.child_name:
        return f"for a {profile.child_age}-year-old named {profile.child_name}"
    return f"for a {profile.child_age}-year-old"


def build_batch_prompt(
    seed_topic: str,
    profile: ChildProfile | None,
    recommendation: ContentRecommendation,
    count: int,
) -> str:
    """Build the user prompt for a content batch."""
    parts = [
        STYLE_INSTRUCTIONS[recommendation.difficulty],
        TONE_MODIFIERS[recommendation.topic_category],
        FORMAT_HINTS[recommendation.format],
        f"Create {count} cards {_age_context(profile)} following on from: {seed_topic}.",
        "Max 30 words per card.",
    ]
    if profile is not None and profile.focus_topics:
        parts.append(f"Gently favour these topics: {', '.join(profile.focus_topics)}.")
    return " ".join(part for part in parts if part)


def build_asset_prompt(title: str) -> str:
    return f"{title} cute 3d illustration for kids"


def parse_batch_response(content: str, count: int) -> list[ContentSkeleton]:
    """Parse a JSON batch response into skeletons.

    Malformed entries are skipped; malformed JSON yields an empty list.

    Args:
        content: Raw model output
        count: Maximum number of items to keep

    Returns:
        Parsed skeletons, at most count
    """
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as e:
        logger.warning("batch_response_not_json", error=str(e))
        return []

    raw_items = payload.get("items", []) if isinstance(payload, dict) else []
    skeletons = []
    for raw in raw_items:
        if not isinstance(raw, dict) or not raw.get("title"):
            continue
        skeletons.append(
            ContentSkeleton(
                title=str(raw["title"]),
                fact=str(raw.get("fact", "")),
                topic=str(raw.get("topic") or raw["title"]),
            )
        )
    return skeletons[:count]
