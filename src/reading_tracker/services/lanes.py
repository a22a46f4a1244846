"""Single-lane selectors for the reading queue.

Each selector takes the full item pool, not a pre-filtered one, and only
considers queued items. Ties resolve to pool order: the first item
encountered wins. Storage hands over pools ordered by ``saved_at``.
"""

import math
from collections.abc import Collection, Iterable, Sequence

from ..models.item import Item


def _eligible(items: Iterable[Item], exclude_ids: Collection[str] | None = None) -> list[Item]:
    excluded = set(exclude_ids or ())
    return [item for item in items if item.is_queued and item.id not in excluded]


def count_tag_overlap(item_tags: Iterable[str], recent_tags: Iterable[str]) -> int:
    """Count how many of an item's tags appear in the recent tags."""
    recent = set(recent_tags)
    return sum(1 for tag in set(item_tags) if tag in recent)


def get_oldest_item(
    items: Iterable[Item],
    exclude_ids: Collection[str] | None = None,
) -> Item | None:
    """Return the queued item saved earliest."""
    queued = _eligible(items, exclude_ids)
    if not queued:
        return None
    return min(queued, key=lambda item: item.saved_at)


def get_quick_item(
    items: Iterable[Item],
    exclude_ids: Collection[str] | None = None,
) -> Item | None:
    """Return the queued item with the shortest estimated time.

    Items without an estimate only win when nothing timed is left.
    """
    queued = _eligible(items, exclude_ids)
    if not queued:
        return None
    return min(
        queued,
        key=lambda item: item.estimated_minutes if item.estimated_minutes is not None else math.inf,
    )


def get_mix_up_item(
    items: Iterable[Item],
    recent_tags: Sequence[str],
    exclude_ids: Collection[str] | None = None,
) -> Item | None:
    """Return the queued item sharing the fewest tags with recent verdicts.

    With no recent tags every item overlaps by zero, so the first eligible
    item is returned.
    """
    queued = _eligible(items, exclude_ids)
    if not queued:
        return None
    recent = set(recent_tags)
    return min(queued, key=lambda item: count_tag_overlap(item.tags, recent))
