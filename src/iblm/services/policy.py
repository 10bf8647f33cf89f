"""Recommendation policy for iblm.

This module turns a metrics snapshot into a content recommendation.
Rules are evaluated in priority order and the first match wins:

    1. frustration_level > FRUSTRATION_THRESHOLD  -> EASY / GAME / CALM
    2. attention_span < ATTENTION_THRESHOLD_MS    -> EASY / VIDEO / HIGH_ENERGY
    3. topic_stickiness > STICKINESS_THRESHOLD    -> HARD / STORY / STANDARD
    4. otherwise                                  -> MEDIUM / FACT / STANDARD

Frustration mitigation always precedes engagement optimization, and a
currently restless child is never escalated to harder content even if
historically sticky.
"""

from collections.abc import Callable

from iblm.logging import get_logger
from iblm.models.metrics import MetricsSnapshot
from iblm.models.recommendation import (
    ContentFormat,
    ContentRecommendation,
    Difficulty,
    TopicCategory,
)

__all__ = [
    "ATTENTION_THRESHOLD_MS",
    "CALMING_ESCAPE",
    "DEEP_DIVE",
    "FRUSTRATION_THRESHOLD",
    "GENERAL_DISCOVERY",
    "RECAPTURING_FOCUS",
    "STICKINESS_THRESHOLD",
    "decide_next_content",
]

logger = get_logger(__name__)

FRUSTRATION_THRESHOLD = 3
ATTENTION_THRESHOLD_MS = 4000
STICKINESS_THRESHOLD = 7

CALMING_ESCAPE = ContentRecommendation(
    difficulty=Difficulty.EASY,
    format=ContentFormat.GAME,
    topic_category=TopicCategory.CALM,
    reason="CALMING ESCAPE",
)
RECAPTURING_FOCUS = ContentRecommendation(
    difficulty=Difficulty.EASY,
    format=ContentFormat.VIDEO,
    topic_category=TopicCategory.HIGH_ENERGY,
    reason="RECAPTURING FOCUS",
)
DEEP_DIVE = ContentRecommendation(
    difficulty=Difficulty.HARD,
    format=ContentFormat.STORY,
    topic_category=TopicCategory.STANDARD,
    reason="DEEP DIVE",
)
GENERAL_DISCOVERY = ContentRecommendation(
    difficulty=Difficulty.MEDIUM,
    format=ContentFormat.FACT,
    topic_category=TopicCategory.STANDARD,
    reason="GENERAL DISCOVERY",
)

_RULES: tuple[tuple[Callable[[MetricsSnapshot], bool], ContentRecommendation], ...] = (
    (lambda m: m.frustration_level > FRUSTRATION_THRESHOLD, CALMING_ESCAPE),
    (lambda m: m.attention_span < ATTENTION_THRESHOLD_MS, RECAPTURING_FOCUS),
    (lambda m: m.topic_stickiness > STICKINESS_THRESHOLD, DEEP_DIVE),
)


def decide_next_content(metrics: MetricsSnapshot) -> ContentRecommendation:
    """Pick the next content recommendation for a metrics snapshot.

    Pure and total over the bounded metrics domain.

    Args:
        metrics: Snapshot of the behavioral profile

    Returns:
        The recommendation of the first matching rule
    """
    for predicate, recommendation in _RULES:
        if predicate(metrics):
            break
    else:
        recommendation = GENERAL_DISCOVERY

    logger.debug(
        "recommendation_decided",
        reason=recommendation.reason,
        frustration_level=metrics.frustration_level,
        attention_span=metrics.attention_span,
        topic_stickiness=metrics.topic_stickiness,
    )
    return recommendation
