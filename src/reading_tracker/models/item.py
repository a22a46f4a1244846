"""Item models for the reading queue."""

import json
import logging
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from .source import SourceData, get_domain, parse_source_data
from .timestamps import LocalDatetime, local_now

logger = logging.getLogger(__name__)


class ItemStatus(str, Enum):
    """Lifecycle state of a saved item."""

    QUEUED = "queued"
    KEPT = "kept"
    REVISIT = "revisit"  # Waiting out the revisit delay
    DISCARDED = "discarded"


class Verdict(str, Enum):
    """Decision recorded at the end of a review."""

    KEEP = "keep"
    REVISIT = "revisit"
    DISCARD = "discard"


VERDICT_STATUS = {
    Verdict.KEEP: ItemStatus.KEPT,
    Verdict.REVISIT: ItemStatus.REVISIT,
    Verdict.DISCARD: ItemStatus.DISCARDED,
}


class Item(BaseModel):
    """A saved link, snippet or document."""

    id: str = Field(default_factory=lambda: str(uuid4())[:8])
    title: str = ""
    description: str | None = None
    status: ItemStatus = ItemStatus.QUEUED
    saved_at: LocalDatetime = Field(default_factory=local_now)
    estimated_minutes: float | None = Field(None, ge=0)  # None = unknown duration
    tags: list[str] = Field(default_factory=list)
    source_id: str | None = None
    source_data: SourceData | None = None
    user_note: str | None = None
    priority_score: float = 0.0
    # Review flow
    read_at: LocalDatetime | None = None
    takeaway: str | None = None
    takeaway_at: LocalDatetime | None = None
    verdict: Verdict | None = None
    verdict_at: LocalDatetime | None = None
    revisit_count: int = Field(0, ge=0)
    revisit_after: LocalDatetime | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> list[str]:
        """Accept tags as a list or a JSON-encoded list; drop anything else."""
        if value is None:
            return []
        if isinstance(value, str):
            try:
                value = json.loads(value or "[]")
            except json.JSONDecodeError:
                logger.warning(f"Ignoring malformed tag data: {value[:50]!r}")
                return []
        if not isinstance(value, (list, tuple, set, frozenset)):
            return []

        tags: list[str] = []
        for tag in value:
            if isinstance(tag, str) and tag and tag not in tags:
                tags.append(tag)
        return tags

    @field_validator("source_data", mode="before")
    @classmethod
    def _coerce_source_data(cls, value: Any) -> Any:
        return parse_source_data(value)

    @property
    def is_queued(self) -> bool:
        """Whether the item is eligible for queue selection."""
        return self.status == ItemStatus.QUEUED

    @property
    def url(self) -> str | None:
        """URL of a link item."""
        return getattr(self.source_data, "url", None)

    @property
    def domain(self) -> str:
        """Display domain for the item's link."""
        return get_domain(self.url)

    def has_tag(self, tag: str) -> bool:
        """Check whether the item carries a tag."""
        return tag in self.tags
