"""Review flow: read, reflect, decide.

Pure transitions over items and the stats aggregate. Callers persist the
returned copies and serialize writes to the stats row.
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta, tzinfo

from ..config import settings
from ..models.item import VERDICT_STATUS, Item, ItemStatus, Verdict
from ..models.stats import UserStats
from ..models.timestamps import local_now
from .streak import update_streak

logger = logging.getLogger(__name__)


class ItemNotFoundError(ValueError):
    """No item with the requested id."""


class InvalidVerdictError(ValueError):
    """A verdict was recorded for an item that is not in the queue."""


def find_item(items: Iterable[Item], item_id: str) -> Item:
    """Look up an item by id."""
    for item in items:
        if item.id == item_id:
            return item
    raise ItemNotFoundError(f"Item not found: {item_id}")


def mark_read(item: Item, now: datetime | None = None) -> Item:
    """Record that the item was read."""
    return item.model_copy(update={"read_at": local_now(now)})


def save_takeaway(item: Item, takeaway: str, now: datetime | None = None) -> Item:
    """Store the reader's reflection on an item."""
    return item.model_copy(update={"takeaway": takeaway, "takeaway_at": local_now(now)})


def apply_verdict(
    item: Item,
    verdict: Verdict,
    now: datetime | None = None,
    revisit_delay_days: int | None = None,
) -> Item:
    """Close a review cycle with a verdict.

    Args:
        item: Queued item being decided
        verdict: keep, revisit or discard
        now: Verdict time (defaults to now)
        revisit_delay_days: How long a revisited item stays out of the queue

    Returns:
        Updated copy of the item

    Raises:
        InvalidVerdictError: If the item is not queued
    """
    if not item.is_queued:
        raise InvalidVerdictError(f"Item {item.id} is {item.status.value}, not queued")

    now = local_now(now)
    update: dict[str, object] = {
        "verdict": verdict,
        "verdict_at": now,
        "status": VERDICT_STATUS[verdict],
    }

    if verdict == Verdict.REVISIT:
        delay = settings.revisit_delay_days if revisit_delay_days is None else revisit_delay_days
        update["revisit_count"] = item.revisit_count + 1
        update["revisit_after"] = now + timedelta(days=delay)

    logger.info(f"Verdict {verdict.value} for item {item.id}")
    return item.model_copy(update=update)


def record_verdict_stats(
    stats: UserStats,
    verdict: Verdict,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> UserStats:
    """Fold a verdict into the stats aggregate: streak plus counters."""
    now = local_now(now)
    stats = stats.with_streak(update_streak(stats.streak, now, tz))

    if verdict == Verdict.KEEP:
        update = {"total_kept": stats.total_kept + 1, "weekly_kept": stats.weekly_kept + 1}
    elif verdict == Verdict.DISCARD:
        update = {
            "total_discarded": stats.total_discarded + 1,
            "weekly_discarded": stats.weekly_discarded + 1,
        }
    else:
        update = {"total_revisited": stats.total_revisited + 1}

    return stats.model_copy(update=update)


def release_due_revisits(items: Iterable[Item], now: datetime | None = None) -> list[Item]:
    """Return revisited items whose delay has passed to the queue."""
    now = local_now(now)
    released: list[Item] = []

    for item in items:
        if item.status == ItemStatus.REVISIT and (
            item.revisit_after is None or item.revisit_after <= now
        ):
            logger.debug(f"Releasing item {item.id} back to the queue")
            item = item.model_copy(update={"status": ItemStatus.QUEUED})
        released.append(item)

    return released


def recent_verdict_tags(items: Iterable[Item], limit: int | None = None) -> list[str]:
    """Tags of the most recently decided items, newest first."""
    limit = settings.recent_verdict_limit if limit is None else limit
    decided = sorted(
        (item for item in items if item.verdict is not None and item.verdict_at is not None),
        key=lambda item: item.verdict_at,
        reverse=True,
    )
    return [tag for item in decided[:limit] for tag in item.tags]
