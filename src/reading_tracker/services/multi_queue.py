"""Multi-lane queue composition.

Lanes are filled in priority order (oldest, mix up, quick) and every chosen
item is excluded from the lanes after it, so one result never shows the same
item twice. With fewer than three queued items some lanes stay empty.
"""

import logging
from collections.abc import Iterable, Sequence

from ..config import settings
from ..models.item import Item
from ..models.queue import FilteredQueue, MultiQueueResult, QueueItem, QueueType
from .lanes import get_mix_up_item, get_oldest_item, get_quick_item

logger = logging.getLogger(__name__)

OLDEST_REASON = "Oldest item in queue"
MIX_UP_REASON = "Different from recent topics"
UNKNOWN_MINUTES = "?"


def _quick_reason(item: Item) -> str:
    if item.estimated_minutes is None:
        minutes = UNKNOWN_MINUTES
    else:
        minutes = f"{item.estimated_minutes:g}"
    return f"Only {minutes} minutes"


def get_multi_queue_items(
    items: Iterable[Item],
    recent_verdict_tags: Sequence[str],
) -> MultiQueueResult:
    """Pick up to three distinct items, one per lane.

    Args:
        items: Item pool, any statuses
        recent_verdict_tags: Tags of the most recently decided items

    Returns:
        MultiQueueResult with the filled lanes and the queued count
    """
    queued = [item for item in items if item.is_queued]
    exclude_ids: list[str] = []

    # Priority 1: Oldest
    oldest: QueueItem | None = None
    oldest_item = get_oldest_item(queued)
    if oldest_item is not None:
        oldest = QueueItem(type=QueueType.OLDEST, item=oldest_item, reason=OLDEST_REASON)
        exclude_ids.append(oldest_item.id)

    # Priority 2: Mix it up
    mix_up: QueueItem | None = None
    mix_up_item = get_mix_up_item(queued, recent_verdict_tags, exclude_ids)
    if mix_up_item is not None:
        mix_up = QueueItem(type=QueueType.MIX_UP, item=mix_up_item, reason=MIX_UP_REASON)
        exclude_ids.append(mix_up_item.id)

    # Priority 3: Quick win
    quick: QueueItem | None = None
    quick_item = get_quick_item(queued, exclude_ids)
    if quick_item is not None:
        quick = QueueItem(type=QueueType.QUICK, item=quick_item, reason=_quick_reason(quick_item))

    logger.debug(
        f"Multi-queue over {len(queued)} queued items: "
        f"oldest={oldest_item.id if oldest_item else None} "
        f"mix_up={mix_up_item.id if mix_up_item else None} "
        f"quick={quick_item.id if quick_item else None}"
    )

    return MultiQueueResult(
        oldest=oldest,
        mix_up=mix_up,
        quick=quick,
        total_queued=len(queued),
    )


def filter_by_tag(items: Iterable[Item], tag: str) -> list[Item]:
    """Keep the items carrying a tag."""
    return [item for item in items if item.has_tag(tag)]


def fetch_multi_queue(
    items: Iterable[Item],
    recent_verdict_tags: Sequence[str],
    tag_filter: str | None = None,
) -> MultiQueueResult:
    """Compose the multi-lane view, optionally limited to one tag."""
    pool = list(items)
    if tag_filter:
        pool = filter_by_tag(pool, tag_filter)
    return get_multi_queue_items(pool, recent_verdict_tags)


def get_filtered_queue(
    items: Iterable[Item],
    tag_filter: str,
    upcoming: int | None = None,
) -> FilteredQueue:
    """Single-tag view: the oldest matching item plus the next few.

    Args:
        items: Item pool, any statuses
        tag_filter: Tag the items must carry
        upcoming: How many items to show after the current one

    Returns:
        FilteredQueue with totals before and after filtering
    """
    limit = settings.upcoming_limit if upcoming is None else upcoming
    queued = [item for item in items if item.is_queued]
    matching = sorted(filter_by_tag(queued, tag_filter), key=lambda item: item.saved_at)

    return FilteredQueue(
        current=matching[0] if matching else None,
        upcoming=matching[1 : 1 + limit],
        total=len(queued),
        filtered_count=len(matching),
    )
