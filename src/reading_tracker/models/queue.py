"""Queue models for the multi-lane "what's next" view."""

from enum import Enum

from pydantic import BaseModel, Field

from .item import Item


class QueueType(str, Enum):
    """Selection lane."""

    OLDEST = "oldest"
    MIX_UP = "mixUp"  # Least overlap with recently decided topics
    QUICK = "quick"


class QueueItem(BaseModel):
    """An item picked by one lane, with the reason shown to the user."""

    type: QueueType
    item: Item
    reason: str


class MultiQueueResult(BaseModel):
    """At most one distinct item per lane."""

    oldest: QueueItem | None = None
    mix_up: QueueItem | None = Field(None, serialization_alias="mixUp")
    quick: QueueItem | None = None
    total_queued: int = 0

    @property
    def lanes(self) -> list[QueueItem]:
        """Filled lanes in priority order."""
        return [lane for lane in (self.oldest, self.mix_up, self.quick) if lane is not None]


class FilteredQueue(BaseModel):
    """Single-tag view of the queue, oldest first."""

    current: Item | None = None
    upcoming: list[Item] = Field(default_factory=list)
    total: int = 0  # All queued items, before the tag filter
    filtered_count: int = 0
