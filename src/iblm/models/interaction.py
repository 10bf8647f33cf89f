"""Interaction model for iblm."""

from pydantic import BaseModel, Field

__all__ = [
    "Interaction",
]


class Interaction(BaseModel, frozen=True):
    """A single unit of attention on one visible content card.

    Attributes:
        item_id: Opaque identifier of the content unit being viewed
        start_time: Clock reading in milliseconds when focus began
        interaction_type: Surface tag (e.g. "feed", "lesson")
    """

    item_id: str
    start_time: float = Field(description="Milliseconds")
    interaction_type: str = Field(default="feed")
