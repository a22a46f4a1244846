"""Source management: the feeds items can come from."""

import logging
from collections.abc import Iterable

from ..models.source import FetchInterval, Source

logger = logging.getLogger(__name__)


class SourceNotFoundError(ValueError):
    """No source with the requested id."""


def create_source(
    url: str,
    name: str,
    interval: FetchInterval = FetchInterval.DAILY,
    topic_filter: str | None = None,
    auto_tags: Iterable[str] | None = None,
) -> Source:
    """Create a source, detecting YouTube channels from the URL."""
    source = Source.from_url(
        url,
        name,
        interval=interval,
        topic_filter=topic_filter or None,
        auto_tags=list(auto_tags or []),
    )
    logger.info(f"Added {source.type.value} source {source.id}: {name}")
    return source


def find_source(sources: Iterable[Source], source_id: str) -> Source:
    """Look up a source by id."""
    for source in sources:
        if source.id == source_id:
            return source
    raise SourceNotFoundError(f"Source not found: {source_id}")


def list_sources(sources: Iterable[Source]) -> list[Source]:
    """Sources, newest first."""
    return sorted(sources, key=lambda source: source.created_at, reverse=True)


def toggle_source(
    sources: Iterable[Source],
    source_id: str,
    enabled: bool | None = None,
) -> list[Source]:
    """Enable or disable a source; flips it when ``enabled`` is None."""
    pool = list(sources)
    target = find_source(pool, source_id)
    new_state = not target.enabled if enabled is None else enabled
    return [
        source.model_copy(update={"enabled": new_state}) if source.id == source_id else source
        for source in pool
    ]


def delete_source(sources: Iterable[Source], source_id: str) -> list[Source]:
    """Remove a source; items keep their source id."""
    pool = list(sources)
    find_source(pool, source_id)
    return [source for source in pool if source.id != source_id]
