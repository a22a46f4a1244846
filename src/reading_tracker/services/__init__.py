"""Business logic services."""

from .items import (
    all_tags,
    backlog_items,
    create_link_item,
    create_text_item,
    dismiss_item,
    estimate_reading_minutes,
    parse_tag_list,
    remove_item,
)
from .lanes import count_tag_overlap, get_mix_up_item, get_oldest_item, get_quick_item
from .multi_queue import fetch_multi_queue, filter_by_tag, get_filtered_queue, get_multi_queue_items
from .priority import calculate_priority, recalculate_priorities, source_engagement
from .sources import (
    SourceNotFoundError,
    create_source,
    delete_source,
    find_source,
    list_sources,
    toggle_source,
)
from .streak import update_streak
from .verdicts import (
    InvalidVerdictError,
    ItemNotFoundError,
    apply_verdict,
    find_item,
    mark_read,
    recent_verdict_tags,
    record_verdict_stats,
    release_due_revisits,
    save_takeaway,
)

__all__ = [
    "update_streak",
    "calculate_priority",
    "recalculate_priorities",
    "source_engagement",
    "count_tag_overlap",
    "get_oldest_item",
    "get_quick_item",
    "get_mix_up_item",
    "get_multi_queue_items",
    "fetch_multi_queue",
    "filter_by_tag",
    "get_filtered_queue",
    "apply_verdict",
    "record_verdict_stats",
    "release_due_revisits",
    "recent_verdict_tags",
    "mark_read",
    "save_takeaway",
    "find_item",
    "ItemNotFoundError",
    "InvalidVerdictError",
    "create_link_item",
    "create_text_item",
    "dismiss_item",
    "remove_item",
    "backlog_items",
    "all_tags",
    "parse_tag_list",
    "estimate_reading_minutes",
    "create_source",
    "find_source",
    "list_sources",
    "toggle_source",
    "delete_source",
    "SourceNotFoundError",
]
