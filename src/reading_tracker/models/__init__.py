"""Pydantic models for items, queue results and stats."""

from .item import VERDICT_STATUS, Item, ItemStatus, Verdict
from .queue import FilteredQueue, MultiQueueResult, QueueItem, QueueType
from .source import (
    DocumentSource,
    FetchInterval,
    LinkSource,
    Source,
    SourceType,
    TextSource,
    get_domain,
    is_youtube_url,
    parse_source_data,
)
from .stats import Streak, UserStats

__all__ = [
    "Item",
    "ItemStatus",
    "Verdict",
    "VERDICT_STATUS",
    "QueueType",
    "QueueItem",
    "MultiQueueResult",
    "FilteredQueue",
    "LinkSource",
    "TextSource",
    "DocumentSource",
    "Source",
    "SourceType",
    "FetchInterval",
    "parse_source_data",
    "get_domain",
    "is_youtube_url",
    "Streak",
    "UserStats",
]
