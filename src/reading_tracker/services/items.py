"""Capturing items and the views over everything saved."""

import logging
from collections.abc import Iterable
from datetime import datetime

from ..models.item import Item, ItemStatus, Verdict
from ..models.source import LinkSource, Source, TextSource
from ..models.timestamps import local_now
from .verdicts import find_item

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200


def parse_tag_list(raw: str | None) -> list[str]:
    """Split a comma-separated tag string."""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def estimate_reading_minutes(text: str | None) -> int | None:
    """Estimate reading time in minutes, None for empty text."""
    if not text or not text.strip():
        return None
    return max(1, len(text.split()) // WORDS_PER_MINUTE)


def create_link_item(
    url: str,
    title: str | None = None,
    tags: Iterable[str] | None = None,
    user_note: str | None = None,
    estimated_minutes: float | None = None,
    source: Source | None = None,
    now: datetime | None = None,
) -> Item:
    """Queue a web link.

    Args:
        url: Link to save
        title: Display title (defaults to the URL)
        tags: Tag names
        user_note: Why it was saved
        estimated_minutes: Reading time, if known
        source: Feed the link came from; its auto tags are added
        now: Save time (defaults to now)

    Returns:
        New queued item
    """
    all_tags = list(tags or [])
    if source:
        all_tags.extend(source.auto_tags)

    item = Item(
        title=title or url,
        source_data=LinkSource(url=url),
        tags=all_tags,
        user_note=user_note or None,
        estimated_minutes=estimated_minutes,
        source_id=source.id if source else None,
        saved_at=local_now(now),
    )
    logger.info(f"Queued link {item.id}: {url}")
    return item


def create_text_item(
    content: str,
    title: str,
    attribution: str | None = None,
    tags: Iterable[str] | None = None,
    estimated_minutes: float | None = None,
    now: datetime | None = None,
) -> Item:
    """Queue a text snippet, estimating reading time from its length."""
    if estimated_minutes is None:
        estimated_minutes = estimate_reading_minutes(content)

    item = Item(
        title=title,
        description=attribution or None,
        source_data=TextSource(content=content, attribution=attribution or None),
        tags=list(tags or []),
        estimated_minutes=estimated_minutes,
        saved_at=local_now(now),
    )
    logger.info(f"Queued text {item.id}: {title[:50]}")
    return item


def dismiss_item(item: Item, now: datetime | None = None) -> Item:
    """Discard an item without reviewing it, whatever its status."""
    logger.info(f"Dismissed item {item.id}")
    return item.model_copy(
        update={
            "status": ItemStatus.DISCARDED,
            "verdict": Verdict.DISCARD,
            "verdict_at": local_now(now),
        }
    )


def remove_item(items: Iterable[Item], item_id: str) -> list[Item]:
    """Delete an item from the pool.

    Raises:
        ItemNotFoundError: If no item has the id
    """
    pool = list(items)
    find_item(pool, item_id)
    return [item for item in pool if item.id != item_id]


def backlog_items(items: Iterable[Item]) -> list[Item]:
    """Kept items, most recently decided first."""
    kept = [item for item in items if item.status == ItemStatus.KEPT]
    return sorted(kept, key=lambda item: item.verdict_at or datetime.min, reverse=True)


def all_tags(items: Iterable[Item]) -> list[str]:
    """Every tag in use, alphabetically."""
    return sorted({tag for item in items for tag in item.tags})
