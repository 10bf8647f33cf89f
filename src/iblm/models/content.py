"""Content buffer models for iblm.

These models represent feed items as they move from a lightweight
text skeleton to a fully illustrated, renderable card.
"""

from enum import StrEnum

from pydantic import BaseModel, Field

__all__ = [
    "ChildProfile",
    "ContentItem",
    "ContentSkeleton",
    "HydrationStatus",
]


class HydrationStatus(StrEnum):
    """Hydration lifecycle of a content item.

    EMPTY -> HYDRATING -> READY, or HYDRATING -> FAILED once the
    asset attempts are exhausted. FAILED may re-enter HYDRATING on an
    explicit retry; READY is terminal.
    """

    EMPTY = "EMPTY"
    HYDRATING = "HYDRATING"
    READY = "READY"
    FAILED = "FAILED"


class ChildProfile(BaseModel, frozen=True):
    """Parent-provided settings used to tailor generated content."""

    child_name: str | None = None
    child_age: int = Field(default=5, ge=2, le=12)
    focus_topics: list[str] = Field(default_factory=list)


class ContentSkeleton(BaseModel, frozen=True):
    """Text-only content returned by the generator, before hydration."""

    title: str
    fact: str = Field(description="Payload text shown on the card")
    topic: str


class ContentItem(BaseModel, frozen=True):
    """A content item owned by the content buffer.

    Attributes:
        id: Deterministic item ID
        title: Card title
        topic: Topic label
        fact: Payload text
        image_url: Asset reference, empty until READY
        hydration_status: Current lifecycle state
        attempts: Number of asset requests issued so far
    """

    id: str = Field(description="Hash-based item ID")
    title: str
    topic: str
    fact: str
    image_url: str = ""
    hydration_status: HydrationStatus = Field(default=HydrationStatus.EMPTY)
    attempts: int = Field(default=0, ge=0)

    @property
    def is_ready(self) -> bool:
        return self.hydration_status == HydrationStatus.READY
