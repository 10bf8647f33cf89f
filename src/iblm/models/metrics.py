"""Behavioral metrics models for iblm.

These models describe the read-only view of the behavioral profile
derived from the interaction stream.
"""

from enum import StrEnum

from pydantic import BaseModel, Field

__all__ = [
    "BASELINE_ATTENTION_SPAN_MS",
    "BASELINE_TOPIC_STICKINESS",
    "MAX_FRUSTRATION",
    "MAX_TOPIC_STICKINESS",
    "CuriosityType",
    "EnergyLevel",
    "MetricsSnapshot",
]

# Neutral baseline before any interaction completes
BASELINE_ATTENTION_SPAN_MS = 5000
BASELINE_TOPIC_STICKINESS = 5

MAX_FRUSTRATION = 10
MAX_TOPIC_STICKINESS = 10


class EnergyLevel(StrEnum):
    """Coarse classification of recent interaction pace."""

    CALM = "CALM"
    HIGH = "HIGH"


class CuriosityType(StrEnum):
    """Preferred presentation style of the child."""

    VISUAL = "VISUAL"
    TEXTUAL = "TEXTUAL"


class MetricsSnapshot(BaseModel, frozen=True):
    """Immutable view of the behavioral profile at a point in time.

    Attributes:
        attention_span: Rolling mean of recent interaction durations (ms)
        frustration_level: Accumulated negative signal score (0 - 10)
        curiosity_type: Preferred presentation style
        energy_level: CALM or HIGH, derived from attention_span
        session_duration: Elapsed session time in seconds
        topic_stickiness: Willingness to stay on one topic (0 - 10)
    """

    attention_span: float = Field(default=BASELINE_ATTENTION_SPAN_MS, ge=0)
    frustration_level: int = Field(default=0, ge=0, le=MAX_FRUSTRATION)
    curiosity_type: CuriosityType = Field(default=CuriosityType.VISUAL)
    energy_level: EnergyLevel = Field(default=EnergyLevel.CALM)
    session_duration: int = Field(default=0, ge=0, description="Seconds")
    topic_stickiness: int = Field(
        default=BASELINE_TOPIC_STICKINESS, ge=0, le=MAX_TOPIC_STICKINESS
    )
