"""Tests for the single-lane selectors."""

from datetime import datetime

from reading_tracker.models import ItemStatus
from reading_tracker.services.lanes import (
    count_tag_overlap,
    get_mix_up_item,
    get_oldest_item,
    get_quick_item,
)


def test_selectors_return_none_for_empty_pool() -> None:
    """Test that every lane returns None when nothing is queued."""
    assert get_oldest_item([]) is None
    assert get_quick_item([]) is None
    assert get_mix_up_item([], ["AI"]) is None


def test_selectors_ignore_non_queued_items(make_item) -> None:
    """Test that kept, revisit and discarded items are never selected."""
    items = [
        make_item("kept", datetime(2023, 1, 1), 1, status=ItemStatus.KEPT),
        make_item("revisit", datetime(2023, 2, 1), 1, status=ItemStatus.REVISIT),
        make_item("discarded", datetime(2023, 3, 1), 1, status=ItemStatus.DISCARDED),
    ]
    assert get_oldest_item(items) is None
    assert get_quick_item(items) is None
    assert get_mix_up_item(items, []) is None

    items.append(make_item("queued", datetime(2024, 1, 1), 60))
    assert get_oldest_item(items).id == "queued"
    assert get_quick_item(items).id == "queued"
    assert get_mix_up_item(items, []).id == "queued"


def test_oldest_picks_earliest_saved(make_item) -> None:
    """Test that the oldest lane picks the minimum saved_at."""
    items = [
        make_item("b", datetime(2024, 3, 1)),
        make_item("a", datetime(2024, 1, 1)),
        make_item("c", datetime(2024, 2, 1)),
    ]
    assert get_oldest_item(items).id == "a"


def test_oldest_tie_goes_to_first_in_pool(make_item) -> None:
    """Test that equal saved_at resolves to pool order."""
    items = [make_item("first", datetime(2024, 1, 1)), make_item("second", datetime(2024, 1, 1))]
    assert get_oldest_item(items).id == "first"


def test_oldest_respects_exclusions(make_item) -> None:
    """Test that excluded ids are skipped."""
    items = [make_item("a", datetime(2024, 1, 1)), make_item("b", datetime(2024, 2, 1))]
    assert get_oldest_item(items, exclude_ids=["a"]).id == "b"
    assert get_oldest_item(items, exclude_ids=["a", "b"]) is None


def test_quick_picks_shortest(make_item) -> None:
    """Test that the quick lane picks the minimum estimated time."""
    items = [make_item("long", estimated_minutes=30), make_item("short", estimated_minutes=3)]
    assert get_quick_item(items).id == "short"


def test_quick_prefers_timed_over_unknown(make_item) -> None:
    """Test that items without an estimate lose to any timed item."""
    items = [
        make_item("unknown", estimated_minutes=None),
        make_item("slow", estimated_minutes=240),
        make_item("also-unknown", estimated_minutes=None),
    ]
    assert get_quick_item(items).id == "slow"


def test_quick_falls_back_to_unknown(make_item) -> None:
    """Test that an untimed item is returned when nothing timed is left."""
    items = [make_item("timed", estimated_minutes=5), make_item("unknown", estimated_minutes=None)]
    assert get_quick_item(items, exclude_ids=["timed"]).id == "unknown"


def test_quick_zero_minutes_is_timed(make_item) -> None:
    """Test that a zero estimate counts as the quickest possible."""
    items = [make_item("one", estimated_minutes=1), make_item("zero", estimated_minutes=0)]
    assert get_quick_item(items).id == "zero"


def test_count_tag_overlap() -> None:
    """Test overlap counting between item and recent tags."""
    assert count_tag_overlap(["AI", "Security"], ["AI", "DevOps"]) == 1
    assert count_tag_overlap(["AI", "Security"], ["AI", "Security", "AI"]) == 2
    assert count_tag_overlap([], ["AI"]) == 0
    assert count_tag_overlap(["AI"], []) == 0


def test_mix_up_picks_least_overlap(make_item) -> None:
    """Test that the mix-up lane prefers items unlike recent verdicts."""
    items = [
        make_item("both", tags=["AI", "Prompting"]),
        make_item("one", tags=["AI", "DevOps"]),
        make_item("none", tags=["Security"]),
    ]
    assert get_mix_up_item(items, ["AI", "Prompting"]).id == "none"


def test_mix_up_counts_degree_of_overlap(make_item) -> None:
    """Test that fewer shared tags wins when every item overlaps."""
    items = [
        make_item("two", tags=["AI", "Prompting"]),
        make_item("one", tags=["AI", "DevOps"]),
    ]
    assert get_mix_up_item(items, ["AI", "Prompting"]).id == "one"


def test_mix_up_without_recent_tags_returns_first(make_item) -> None:
    """Test that with no recent topics the first eligible item wins."""
    items = [
        make_item("skipped", status=ItemStatus.KEPT),
        make_item("first", tags=["AI"]),
        make_item("second", tags=[]),
    ]
    assert get_mix_up_item(items, []).id == "first"


def test_mix_up_respects_exclusions(make_item) -> None:
    """Test that an excluded item cannot win the mix-up lane."""
    items = [make_item("rare", tags=["Rare"]), make_item("common", tags=["AI"])]
    assert get_mix_up_item(items, ["AI"], exclude_ids=["rare"]).id == "common"


def test_selected_item_is_member_of_pool(make_item) -> None:
    """Test that each lane returns one of the queued items it was given."""
    items = [
        make_item(str(i), datetime(2024, 1, 1 + i), (i * 7) % 11, [f"t{i % 3}"])
        for i in range(10)
    ]
    ids = {item.id for item in items}
    assert get_oldest_item(items).id in ids
    assert get_quick_item(items).id in ids
    assert get_mix_up_item(items, ["t0"]).id in ids
