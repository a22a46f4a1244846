"""Tests for the JSON snapshot store."""

from datetime import datetime
from pathlib import Path

import pytest

from reading_tracker.models import ItemStatus, Source, UserStats
from reading_tracker.snapshot import Snapshot, SnapshotError, load_snapshot, save_snapshot


def test_missing_snapshot_is_empty(tmp_path: Path) -> None:
    """Test that a missing file loads as an empty snapshot."""
    snapshot = load_snapshot(tmp_path / "missing.json")
    assert snapshot.items == []
    assert snapshot.stats == UserStats()


def test_save_and_load(tmp_path: Path, make_item) -> None:
    """Test that a saved snapshot loads back with the same content."""
    path = tmp_path / "nested" / "snapshot.json"
    snapshot = Snapshot(
        items=[make_item("a", datetime(2024, 1, 1), 5, ["AI"], source_id="s1")],
        sources=[Source(id="s1", url="https://example.com", name="Example")],
        stats=UserStats(current_streak=2, longest_streak=4),
    )
    save_snapshot(snapshot, path)

    loaded = load_snapshot(path)
    assert loaded == snapshot
    assert not (tmp_path / "nested" / "snapshot.json.tmp").exists()


def test_invalid_snapshot_raises(tmp_path: Path) -> None:
    """Test that a corrupt file is reported, not silently replaced."""
    path = tmp_path / "snapshot.json"
    path.write_text('{"items": [{"status": "unknown"}]}')
    with pytest.raises(SnapshotError):
        load_snapshot(path)


def test_replace_item(make_item) -> None:
    """Test swapping one item by id."""
    snapshot = Snapshot(items=[make_item("a"), make_item("b")])
    updated = snapshot.replace_item(make_item("b", status=ItemStatus.KEPT))
    assert [item.status for item in updated.items] == [ItemStatus.QUEUED, ItemStatus.KEPT]
    assert snapshot.items[1].status == ItemStatus.QUEUED
