"""Priority scoring for queued items.

final score = sum(factor * weight), each factor normalized to [0, 1]

The score is stored on the item and used for sorting; it does not feed the
multi-lane selection.
"""

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timedelta

from pydantic import BaseModel

from ..config import settings
from ..models.item import Item, Verdict
from ..models.timestamps import local_now, to_local

logger = logging.getLogger(__name__)

WEIGHTS = {
    "age": 0.40,
    "topic_diversity": 0.20,
    "source_affinity": 0.15,
    "estimated_time": 0.10,
    "revisit_penalty": 0.15,
}

NEUTRAL_AFFINITY = 0.5
REPEATED_TOPIC_SCORE = 0.3
REVISIT_STEP = 0.2


class PriorityFactors(BaseModel):
    """Normalized scoring factors for one item."""

    age: float  # Older = higher
    topic_diversity: float  # Lower when the item repeats recent topics
    source_affinity: float  # Sources the user keeps from score higher
    estimated_time: float  # Placeholder until available-time matching exists
    revisit_penalty: float  # Revisited items score lower

    def weighted(self) -> float:
        """Combine the factors into a single score."""
        return sum(getattr(self, name) * weight for name, weight in WEIGHTS.items())


def age_score(saved_at: datetime, now: datetime | None = None) -> float:
    """Logarithmic age factor.

    1 day = 0.15, 7 days = 0.45, 30 days = 0.75, 100+ days = 1.0
    """
    days_old = max(0, (local_now(now) - to_local(saved_at)).days)
    return min(1.0, math.log10(days_old + 1) / 2)


def revisit_score(revisit_count: int) -> float:
    """Each revisit takes 0.2 off, down to zero."""
    return max(0.0, 1 - revisit_count * REVISIT_STEP)


def topic_diversity_score(item_tags: Iterable[str], recent_tags: Sequence[str]) -> float:
    """Binary penalty for sharing any tag with recent verdicts."""
    if not recent_tags:
        return 1.0
    recent = set(recent_tags)
    return REPEATED_TOPIC_SCORE if any(tag in recent for tag in item_tags) else 1.0


def source_affinity_score(source_id: str | None, source_engagement: Mapping[str, float]) -> float:
    """Engagement with the item's source, neutral when unknown."""
    if source_id is None:
        return NEUTRAL_AFFINITY
    engagement = source_engagement.get(source_id)
    return NEUTRAL_AFFINITY if engagement is None else engagement


def priority_factors(
    item: Item,
    recent_tags: Sequence[str] | None = None,
    source_engagement: Mapping[str, float] | None = None,
    now: datetime | None = None,
) -> PriorityFactors:
    """Compute the normalized factors behind an item's score."""
    return PriorityFactors(
        age=age_score(item.saved_at, now),
        topic_diversity=topic_diversity_score(item.tags, recent_tags or []),
        source_affinity=source_affinity_score(item.source_id, source_engagement or {}),
        # TODO: match against the reader's available time once it is captured
        estimated_time=1.0,
        revisit_penalty=revisit_score(item.revisit_count),
    )


def calculate_priority(
    item: Item,
    recent_tags: Sequence[str] | None = None,
    source_engagement: Mapping[str, float] | None = None,
    now: datetime | None = None,
) -> float:
    """Calculate the priority score for an item.

    Args:
        item: Item to score
        recent_tags: Tags of recently decided items
        source_engagement: Source id to affinity in [0, 1]
        now: Reference time for the age factor (defaults to now)

    Returns:
        Weighted score, higher = more prioritized
    """
    return priority_factors(item, recent_tags, source_engagement, now).weighted()


def source_engagement(items: Iterable[Item]) -> dict[str, float]:
    """Share of decided items kept, per source."""
    kept: dict[str, int] = {}
    decided: dict[str, int] = {}

    for item in items:
        if item.source_id is None or item.verdict is None:
            continue
        decided[item.source_id] = decided.get(item.source_id, 0) + 1
        if item.verdict == Verdict.KEEP:
            kept[item.source_id] = kept.get(item.source_id, 0) + 1

    return {source_id: kept.get(source_id, 0) / count for source_id, count in decided.items()}


def recalculate_priorities(
    items: Iterable[Item],
    now: datetime | None = None,
    window_days: int | None = None,
) -> list[Item]:
    """Rescore every queued item.

    Recent topics are the tags of items decided within the window. Items
    that are not queued are returned unchanged.
    """
    pool = list(items)
    now = local_now(now)
    window = timedelta(days=settings.priority_window_days if window_days is None else window_days)
    cutoff = now - window

    recent_tags = [
        tag
        for item in pool
        if item.verdict_at is not None and item.verdict_at >= cutoff
        for tag in item.tags
    ]
    engagement = source_engagement(pool)

    rescored: list[Item] = []
    for item in pool:
        if item.is_queued:
            score = calculate_priority(item, recent_tags, engagement, now)
            item = item.model_copy(update={"priority_score": score})
        rescored.append(item)

    logger.info(
        f"Recalculated priorities for {sum(1 for item in pool if item.is_queued)} queued items "
        f"({len(recent_tags)} recent tags, {len(engagement)} sources)"
    )
    return rescored
